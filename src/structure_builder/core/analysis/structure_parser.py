from __future__ import annotations

"""
Structure Import Parser.

Converts a human-written tree listing (as printed by `tree` or typed by
hand, with optional box-drawing connectors) into an ordered forest of
file and folder nodes. The format has no grammar: every line either
contributes a node or is skipped, and parsing never fails.

Example input:

    my-project/
    ├── app/
    │   ├── main.py
    │   └── gradio_ui.py
    ├── requirements.txt
    └── README.md
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from structure_builder.core.analysis.content_stubs import default_content
from structure_builder.core.analysis.depth_strategies import (
    BoxDrawingDepth,
    DepthStrategy,
    clean_line,
)
from structure_builder.domain.tree_models import Forest, Node, make_file, make_folder

logger = logging.getLogger(__name__)

_BOX_DRAWING_PREFIXES = ("├", "└", "│", "─")


@dataclass
class _Frame:
    node: Node
    depth: int

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_structure(text: str, strategy: Optional[DepthStrategy] = None) -> Forest:
    """
    Parse a tree listing into a forest.

    Folders close when a later line sits at the same or a shallower depth,
    so two folders at equal indentation are siblings and a deeper line
    after them belongs to the second one only.

    Args:
        text: Raw multi-line listing.
        strategy: Depth inference strategy. Defaults to 4-column levels.

    Returns:
        Forest: Root nodes in encounter order.
    """
    strategy = strategy or BoxDrawingDepth()
    roots: Forest = []
    stack: List[_Frame] = []
    skipped = 0

    for line in text.splitlines():
        if not line.strip():
            continue

        if is_root_label(line):
            logger.debug(f"Skipping root label line: {line!r}")
            skipped += 1
            continue

        cleaned = clean_line(line)
        depth = strategy.measure(line, cleaned)

        name = cleaned.strip()
        if name.endswith("/"):
            name = name[:-1]
        if not name:
            skipped += 1
            continue

        if "/" in line:
            node = make_folder(name)
        else:
            node = make_file(name, default_content(name))

        while stack and stack[-1].depth >= depth:
            stack.pop()

        if stack:
            parent = stack[-1].node
            node.parent_id = parent.id
            parent.children.append(node)
        else:
            roots.append(node)

        if node.is_folder:
            stack.append(_Frame(node=node, depth=depth))

    logger.info(f"Parsed structure: {len(roots)} root node(s), {skipped} line(s) skipped.")
    return roots


def is_root_label(line: str) -> bool:
    """
    Detect a bare project header such as 'my-project/'.

    An un-indented folder written as 'name/' is indistinguishable from such
    a header and is skipped as well.
    """
    return (
            "/" in line
            and not line.startswith(" ")
            and not line.startswith(_BOX_DRAWING_PREFIXES)
    )
