from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user data directory and writes flattened projects to
disk. Acts as the only module that touches the local filesystem for
project output.
"""

import logging
import os
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

FlatEntries = List[Tuple[str, str]]

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "StructureBuilder"
UNIX_APP_DIR_NAME = ".structure_builder"
DATA_DIR_ENV = "STRUCTURE_BUILDER_HOME"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - STRUCTURE_BUILDER_HOME, when set, wins everywhere.
    - Windows: %LOCALAPPDATA%/StructureBuilder
    - Linux/Mac: ~/.structure_builder

    Returns:
        str: Absolute path, created on demand.
    """
    path = os.environ.get(DATA_DIR_ENV, "")

    if not path and os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.warning(f"Could not create data directory '{path}': {e}")

    return os.path.abspath(path)


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Recursively create a directory.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, error message if any).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)

# -----------------------------------------------------------------------------
# PROJECT OUTPUT
# -----------------------------------------------------------------------------

def materialize_project(entries: FlatEntries, dest_dir: str, project_name: str) -> List[str]:
    """
    Write flattened entries beneath `dest_dir/project_name`.

    Args:
        entries: Ordered (path, content) pairs.
        dest_dir: Parent directory receiving the project folder.
        project_name: Name of the project folder.

    Returns:
        List[str]: Absolute paths of the files written.

    Raises:
        ValueError: If an entry path escapes the project folder.
        OSError: On write failures.
    """
    root = os.path.abspath(os.path.join(dest_dir, project_name))
    ok, err = safe_mkdir(root)
    if not ok:
        raise OSError(f"Cannot create project folder '{root}': {err}")

    written: List[str] = []
    for rel_path, content in entries:
        target = os.path.abspath(os.path.join(root, *rel_path.split("/")))
        if os.path.commonpath([root, target]) != root:
            raise ValueError(f"Entry path escapes the project folder: {rel_path}")

        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        written.append(target)

    logger.info(f"Materialized {len(written)} file(s) under {root}")
    return written
