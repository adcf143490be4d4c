from __future__ import annotations

"""
Pure Forest Operations.

Every mutation takes the current forest and returns a new one. Input
nodes are never modified, so callers can compare the previous and next
state directly. Untouched subtrees are shared between the two.
"""

from dataclasses import replace
from typing import Iterator, Optional, Tuple

from structure_builder.domain.tree_models import Forest, Node

# -----------------------------------------------------------------------------
# MUTATIONS
# -----------------------------------------------------------------------------

def insert_root(forest: Forest, node: Node) -> Forest:
    """
    Append a node as a new forest root.

    Raises:
        ValueError: If any id of the node's subtree is already in the
            forest or repeats inside the subtree.
    """
    existing = {n.id for n in iter_nodes(forest)}
    for incoming in iter_nodes([node]):
        if incoming.id in existing:
            raise ValueError(f"Node id '{incoming.id}' already present in the forest.")
        existing.add(incoming.id)
    return [*forest, replace(node, parent_id=None)]


def append_forest(forest: Forest, imported: Forest) -> Forest:
    """Append imported roots after the existing ones."""
    result = list(forest)
    for node in imported:
        result = insert_root(result, node)
    return result


def delete_by_id(forest: Forest, node_id: str) -> Forest:
    """
    Remove the node with the given id from every level of the forest.

    Args:
        forest: Current forest.
        node_id: Identifier of the node to drop (with its subtree).

    Returns:
        Forest: A new forest. Identical content when the id is absent.
    """
    result: Forest = []
    for node in forest:
        if node.id == node_id:
            continue
        if node.is_folder:
            node = replace(node, children=delete_by_id(node.children or [], node_id))
        result.append(node)
    return result


def update_content(forest: Forest, node_id: str, content: str) -> Forest:
    """
    Replace the content of the file with the given id.

    Folders matching the id are left untouched. Sibling order is kept.
    """
    result: Forest = []
    for node in forest:
        if node.id == node_id and node.is_file:
            node = replace(node, content=content)
        elif node.is_folder and node.children:
            node = replace(node, children=update_content(node.children, node_id, content))
        result.append(node)
    return result

# -----------------------------------------------------------------------------
# QUERIES
# -----------------------------------------------------------------------------

def iter_nodes(forest: Forest) -> Iterator[Node]:
    """Yield every node in depth-first pre-order."""
    for node in forest:
        yield node
        if node.children:
            yield from iter_nodes(node.children)


def find_by_id(forest: Forest, node_id: str) -> Optional[Node]:
    for node in iter_nodes(forest):
        if node.id == node_id:
            return node
    return None


def count_nodes(forest: Forest) -> Tuple[int, int]:
    """Return the (files, folders) totals of the forest."""
    files = folders = 0
    for node in iter_nodes(forest):
        if node.is_folder:
            folders += 1
        else:
            files += 1
    return files, folders
