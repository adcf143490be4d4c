from __future__ import annotations

"""
Project Tree Data Models.

Provides the node type backing the in-memory project forest, together
with the factories used by the parser and the workspace to mint nodes
with fresh identifiers.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Discriminator for project tree entries."""
    FILE = "file"
    FOLDER = "folder"


@dataclass
class Node:
    """
    Single entry (file or folder) of the project forest.

    Attributes:
        id: Opaque identifier, unique across the whole forest.
        name: Display name without any trailing separator.
        kind: File or folder discriminator.
        content: Text body. Populated for files only.
        children: Ordered child entries. Populated for folders only.
        parent_id: Identifier of the owning folder, if any.
    """
    id: str
    name: str
    kind: NodeKind
    content: Optional[str] = None
    children: Optional[List[Node]] = None
    parent_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is NodeKind.FILE:
            if self.children is not None:
                raise ValueError(f"File node '{self.name}' cannot hold children.")
            if self.content is None:
                self.content = ""
        else:
            if self.content is not None:
                raise ValueError(f"Folder node '{self.name}' cannot hold content.")
            if self.children is None:
                self.children = []
            seen = set()
            for child in self.children:
                if child.id in seen:
                    raise ValueError(f"Duplicate child id '{child.id}' in folder '{self.name}'.")
                seen.add(child.id)

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE


Forest = List[Node]

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def new_node_id() -> str:
    """Generate an opaque identifier for a freshly created node."""
    return uuid.uuid4().hex


def make_file(name: str, content: str = "", parent_id: Optional[str] = None) -> Node:
    """Create a file node with a new identifier."""
    return Node(
        id=new_node_id(),
        name=name,
        kind=NodeKind.FILE,
        content=content,
        parent_id=parent_id,
    )


def make_folder(
        name: str,
        children: Optional[List[Node]] = None,
        parent_id: Optional[str] = None,
) -> Node:
    """Create a folder node with a new identifier."""
    return Node(
        id=new_node_id(),
        name=name,
        kind=NodeKind.FOLDER,
        children=list(children) if children else [],
        parent_id=parent_id,
    )
