from __future__ import annotations

"""
Forest Flattening Service.

Turns the hierarchical forest into ordered (path, content) entries for
path-addressed stores. Empty folders are kept alive with a '.gitkeep'
sentinel since most remote stores cannot represent empty directories.
"""

from typing import List, Tuple

from structure_builder.domain.tree_models import Forest

GITKEEP_NAME = ".gitkeep"

FlatEntries = List[Tuple[str, str]]


def flatten_forest(forest: Forest, base_path: str = "") -> FlatEntries:
    """
    Walk the forest depth-first (pre-order) and emit file entries.

    Args:
        forest: Nodes to flatten.
        base_path: Prefix joined in front of every emitted path.

    Returns:
        FlatEntries: Forward-slash paths without a leading slash, paired
        with the file content as stored on the node.
    """
    entries: FlatEntries = []

    for node in forest:
        full_path = f"{base_path}/{node.name}" if base_path else node.name

        if node.is_file:
            entries.append((full_path, node.content or ""))
        elif node.children:
            entries.extend(flatten_forest(node.children, full_path))
        else:
            entries.append((f"{full_path}/{GITKEEP_NAME}", ""))

    return entries


def entry_directories(entries: FlatEntries) -> List[str]:
    """List the distinct parent directories of the entries, first-seen order."""
    seen: List[str] = []
    for path, _ in entries:
        parent = path.rsplit("/", 1)[0] if "/" in path else ""
        if parent and parent not in seen:
            seen.append(parent)
    return seen
