from __future__ import annotations

"""
Unit tests for the JSON-file credential store.
"""

import json
import os
from pathlib import Path

import pytest

from structure_builder.infra.credentials import (
    GITHUB_TOKEN_KEY,
    HUGGINGFACE_TOKEN_KEY,
    CredentialStore,
    mask_token,
)


def test_set_get_clear(tmp_path: Path) -> None:
    """TC-01: Tokens persist to disk and can be removed."""
    path = tmp_path / "creds.json"
    store = CredentialStore(str(path))

    store.set(GITHUB_TOKEN_KEY, "  ghp_secret1234  ")

    assert store.get(GITHUB_TOKEN_KEY) == "ghp_secret1234"
    assert json.loads(path.read_text(encoding="utf-8")) == {GITHUB_TOKEN_KEY: "ghp_secret1234"}
    assert CredentialStore(str(path)).get(GITHUB_TOKEN_KEY) == "ghp_secret1234"

    store.clear(GITHUB_TOKEN_KEY)
    assert store.get(GITHUB_TOKEN_KEY) == ""


def test_environment_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """TC-02: GITHUB_TOKEN / HF_TOKEN win over stored values."""
    store = CredentialStore(str(tmp_path / "creds.json"))
    store.set(HUGGINGFACE_TOKEN_KEY, "hf_stored")
    monkeypatch.setenv("HF_TOKEN", "hf_from_env")

    assert store.get(HUGGINGFACE_TOKEN_KEY) == "hf_from_env"
    assert CredentialStore(str(tmp_path / "creds.json"), use_env=False).get(HUGGINGFACE_TOKEN_KEY) == "hf_stored"


def test_rejects_unknown_keys_and_blank_values(tmp_path: Path) -> None:
    """TC-03: Only the two token keys with non-blank values are accepted."""
    store = CredentialStore(str(tmp_path / "creds.json"))

    with pytest.raises(ValueError):
        store.set("aws_token", "x")
    with pytest.raises(ValueError):
        store.set(GITHUB_TOKEN_KEY, "   ")
    assert not os.path.exists(store.path)


def test_corrupt_file_reads_as_empty(tmp_path: Path) -> None:
    """TC-04: An unreadable file behaves like an empty store."""
    path = tmp_path / "creds.json"
    path.write_text("{ broken", encoding="utf-8")

    assert CredentialStore(str(path)).get(GITHUB_TOKEN_KEY) == ""


def test_default_location_is_data_dir(isolated_data_dir: Path) -> None:
    """TC-05: Without an explicit path the store lives in the data directory."""
    store = CredentialStore()

    assert store.path.startswith(str(isolated_data_dir))


@pytest.mark.parametrize(
    "token, expected",
    [
        ("", "<none>"),
        (None, "<none>"),
        ("abc", "****"),
        ("ghp_abcdef1234", "****1234"),
    ],
)
def test_mask_token(token, expected: str) -> None:
    """TC-06: Only the last four characters of a token are ever shown."""
    assert mask_token(token) == expected
