from __future__ import annotations

"""
Project Workspace Store.

Single owner of the session state: project name, forest and current
selection. Interfaces read from it and call its methods; every change
goes through the pure forest operations, so each call swaps in a new
forest rather than editing nodes in place.
"""

import logging
from typing import Optional

from structure_builder.core.analysis.structure_parser import parse_structure
from structure_builder.core.services import tree_ops
from structure_builder.core.services.flattener import FlatEntries, flatten_forest
from structure_builder.domain.config import DEFAULT_PROJECT_NAME
from structure_builder.domain.serialization import forest_from_json, forest_to_json
from structure_builder.domain.tree_models import Forest, Node, NodeKind, make_file, make_folder

logger = logging.getLogger(__name__)


class ProjectWorkspace:
    """
    In-memory project session.

    Args:
        project_name: Display and export name of the project.
        forest: Initial forest. Defaults to an empty one.
    """

    def __init__(self, project_name: str = DEFAULT_PROJECT_NAME, forest: Optional[Forest] = None) -> None:
        self._project_name = project_name
        self._forest: Forest = list(forest or [])
        self._selected_id: Optional[str] = None

    @classmethod
    def with_sample_tree(cls, project_name: str = DEFAULT_PROJECT_NAME) -> ProjectWorkspace:
        """Create a workspace seeded with a starter source folder and README."""
        main_py = make_file("main.py", '# Welcome to your new project!\nprint("Hello, World!")')
        src = make_folder("src", [main_py])
        main_py.parent_id = src.id
        readme = make_file(
            "README.md",
            f"# {project_name}\n\nA new project created with Structure Builder.",
        )
        return cls(project_name, [src, readme])

    # -- state -------------------------------------------------------------

    @property
    def project_name(self) -> str:
        return self._project_name

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[Node]:
        if self._selected_id is None:
            return None
        return tree_ops.find_by_id(self._forest, self._selected_id)

    @property
    def is_empty(self) -> bool:
        return not self._forest

    # -- intents -----------------------------------------------------------

    def rename(self, project_name: str) -> None:
        name = project_name.strip()
        if not name:
            raise ValueError("Project name cannot be empty.")
        self._project_name = name

    def select(self, node_id: Optional[str]) -> None:
        """Select a file for editing. Folders and unknown ids clear the selection."""
        node = tree_ops.find_by_id(self._forest, node_id) if node_id else None
        self._selected_id = node.id if node is not None and node.is_file else None

    def add_item(self, name: str, kind: NodeKind = NodeKind.FILE) -> Optional[Node]:
        """
        Append an empty file or folder at the top level.

        Returns:
            Optional[Node]: The created node, or None for a blank name.
        """
        if not name.strip():
            return None
        node = make_folder(name) if kind is NodeKind.FOLDER else make_file(name, "")
        self._forest = tree_ops.insert_root(self._forest, node)
        return node

    def import_structure(self, text: str) -> int:
        """
        Parse a tree listing and append its roots to the forest.

        Returns:
            int: Number of root nodes added (0 leaves the forest untouched).
        """
        if not text.strip():
            return 0
        imported = parse_structure(text)
        if not imported:
            logger.info("Structure import produced no entries; nothing to add.")
            return 0
        self._forest = tree_ops.append_forest(self._forest, imported)
        return len(imported)

    def delete(self, node_id: str) -> None:
        """Remove a node and clear the selection if it pointed inside the removed subtree."""
        self._forest = tree_ops.delete_by_id(self._forest, node_id)
        if self._selected_id is not None and tree_ops.find_by_id(self._forest, self._selected_id) is None:
            self._selected_id = None

    def update_content(self, node_id: str, content: str) -> None:
        self._forest = tree_ops.update_content(self._forest, node_id, content)

    # -- exports -----------------------------------------------------------

    def flatten(self) -> FlatEntries:
        return flatten_forest(self._forest)

    def to_json(self) -> str:
        return forest_to_json(self._forest)

    def load_json(self, text: str) -> None:
        """Replace the forest with a previously exported document."""
        self._forest = forest_from_json(text)
        self._selected_id = None
