from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the user data directory for every test.
3. Shared tree listing and forest fixtures.
"""

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from structure_builder.domain.tree_models import Forest, make_file, make_folder  # noqa: E402
from structure_builder.infra.logging import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user data directory at a throwaway folder and drop token env vars."""
    data_dir = tmp_path / "user_data"
    monkeypatch.setenv("STRUCTURE_BUILDER_HOME", str(data_dir))
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("HF_TOKEN", raising=False)
    return data_dir


@pytest.fixture
def sample_listing() -> str:
    """A typical pasted listing with a project header line."""
    return (
        "mcp-investment-insights/\n"
        "├── app/\n"
        "│   ├── main.py\n"
        "│   ├── llm_handler.py\n"
        "│   └── gradio_ui.py\n"
        "├── models/\n"
        "│   └── phi-3.gguf\n"
        "├── requirements.txt\n"
        "└── README.md\n"
    )


@pytest.fixture
def sample_forest() -> Forest:
    """
    Hand-built forest:

        src/
            main.py
            empty/
        README.md
    """
    main_py = make_file("main.py", 'print("hi")\n')
    empty = make_folder("empty")
    src = make_folder("src", [main_py, empty])
    main_py.parent_id = src.id
    empty.parent_id = src.id
    readme = make_file("README.md", "# Demo\n")
    return [src, readme]


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Tear down any handler chain a test installed on the root logger."""
    shutdown_logging()
    yield
    shutdown_logging()
