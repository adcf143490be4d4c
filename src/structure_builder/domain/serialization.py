from __future__ import annotations

"""
Canonical JSON Representation of the Project Forest.

The export document is a JSON array of node objects whose keys always
appear in the order id, name, type, content, children. Files omit
'children' and folders omit 'content'. Parent references are not stored;
they are recomputed from nesting when the document is loaded.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Set

from structure_builder.domain.tree_models import Forest, Node, NodeKind

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def forest_to_data(forest: Forest) -> List[Dict[str, Any]]:
    """Convert a forest into plain, ordered dictionaries."""
    return [_node_to_data(node) for node in forest]


def forest_to_json(forest: Forest, indent: Optional[int] = 2) -> str:
    """
    Serialize a forest into its canonical JSON document.

    Args:
        forest: Root nodes to serialize.
        indent: Indentation width. None produces a compact document.

    Returns:
        str: JSON text.
    """
    return json.dumps(forest_to_data(forest), ensure_ascii=False, indent=indent)


def forest_from_data(data: Any) -> Forest:
    """
    Rebuild a forest from decoded JSON data.

    Raises:
        ValueError: If the structure does not describe a forest or an id
            appears more than once anywhere in it.
    """
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of nodes, got {type(data).__name__}.")
    seen: Set[str] = set()
    return [_node_from_data(item, None, seen) for item in data]


def forest_from_json(text: str) -> Forest:
    """
    Parse a canonical JSON document back into a forest.

    Raises:
        ValueError: On malformed JSON or unexpected node shapes.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid project document: {e}") from e
    forest = forest_from_data(data)
    logger.debug(f"Loaded forest with {len(forest)} root node(s) from JSON.")
    return forest

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _node_to_data(node: Node) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": node.id,
        "name": node.name,
        "type": node.kind.value,
    }
    if node.is_file:
        data["content"] = node.content
    else:
        data["children"] = [_node_to_data(child) for child in node.children or []]
    return data


def _node_from_data(item: Any, parent_id: Optional[str], seen: Set[str]) -> Node:
    if not isinstance(item, dict):
        raise ValueError(f"Node entries must be objects, got {type(item).__name__}.")

    try:
        node_id = str(item["id"])
        name = str(item["name"])
        kind = NodeKind(item["type"])
    except KeyError as e:
        raise ValueError(f"Node entry is missing required key {e}.") from e

    if node_id in seen:
        raise ValueError(f"Duplicate node id '{node_id}' in project document.")
    seen.add(node_id)

    if kind is NodeKind.FILE:
        return Node(
            id=node_id,
            name=name,
            kind=kind,
            content=str(item.get("content") or ""),
            parent_id=parent_id,
        )

    raw_children = item.get("children") or []
    if not isinstance(raw_children, list):
        raise ValueError(f"Folder '{name}' has a non-list 'children' entry.")
    return Node(
        id=node_id,
        name=name,
        kind=kind,
        children=[_node_from_data(child, node_id, seen) for child in raw_children],
        parent_id=parent_id,
    )
