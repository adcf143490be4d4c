from __future__ import annotations

"""
Credential Store.

Key-value persistence for the two publishing tokens, kept in a JSON file
inside the user data directory. Environment variables take precedence on
read so CI and headless runs never need the file. Raw token values are
never logged.
"""

import json
import logging
import os
from typing import Dict, Optional

from structure_builder.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

GITHUB_TOKEN_KEY = "github_token"
HUGGINGFACE_TOKEN_KEY = "huggingface_token"

TOKEN_KEYS: Dict[str, str] = {
    "github": GITHUB_TOKEN_KEY,
    "huggingface": HUGGINGFACE_TOKEN_KEY,
}

ENV_OVERRIDES: Dict[str, str] = {
    GITHUB_TOKEN_KEY: "GITHUB_TOKEN",
    HUGGINGFACE_TOKEN_KEY: "HF_TOKEN",
}

CREDENTIALS_FILE_NAME = "credentials.json"


def mask_token(token: Optional[str]) -> str:
    """Render a token for logs: only the last four characters survive."""
    if not token:
        return "<none>"
    if len(token) <= 4:
        return "****"
    return f"****{token[-4:]}"

# -----------------------------------------------------------------------------
# STORE
# -----------------------------------------------------------------------------

class CredentialStore:
    """
    JSON-file backed token storage.

    Args:
        path: Location of the credentials file. Defaults to the user data dir.
        use_env: Whether environment variables override stored values.
    """

    def __init__(self, path: Optional[str] = None, use_env: bool = True) -> None:
        self._path = path or os.path.join(get_user_data_dir(), CREDENTIALS_FILE_NAME)
        self._use_env = use_env

    @property
    def path(self) -> str:
        return self._path

    def get(self, key: str) -> str:
        """Return the token for `key`, or an empty string when absent."""
        if self._use_env:
            env_name = ENV_OVERRIDES.get(key)
            env_value = os.environ.get(env_name, "") if env_name else ""
            if env_value.strip():
                return env_value.strip()
        return self._read().get(key, "")

    def set(self, key: str, value: str) -> None:
        """
        Store a token.

        Raises:
            ValueError: On unknown keys or blank values.
        """
        self._check_key(key)
        value = (value or "").strip()
        if not value:
            raise ValueError("Refusing to store an empty token.")

        data = self._read()
        data[key] = value
        self._write(data)
        logger.info(f"Stored {key} ({mask_token(value)}).")

    def clear(self, key: str) -> None:
        self._check_key(key)
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)
            logger.info(f"Cleared {key}.")

    # -- persistence -------------------------------------------------------

    def _check_key(self, key: str) -> None:
        if key not in ENV_OVERRIDES:
            raise ValueError(f"Unknown credential key: {key}")

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self._path):
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Credential file unreadable, ignoring it: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: str(v) for k, v in data.items() if k in ENV_OVERRIDES and v}

    def _write(self, data: Dict[str, str]) -> None:
        parent = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(parent, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        try:
            os.chmod(self._path, 0o600)
        except OSError:
            logger.debug("Could not restrict credential file permissions.")
