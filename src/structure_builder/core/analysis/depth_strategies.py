from __future__ import annotations

"""
Depth Inference Strategies for Tree Listings.

A strategy turns one raw listing line plus its cleaned name text into an
integer nesting depth. The stack-based assembly in the structure parser
only relies on this interface, so other listing dialects can be supported
by adding a strategy.
"""

import re
from abc import ABC, abstractmethod

BOX_DRAWING_RE = re.compile(r"[├└│─]")
WHITESPACE_RUN_RE = re.compile(r"\s+")

DEFAULT_INDENT_WIDTH: int = 4


def clean_line(line: str) -> str:
    """Remove box-drawing glyphs and collapse whitespace runs to one space."""
    return WHITESPACE_RUN_RE.sub(" ", BOX_DRAWING_RE.sub("", line))


class DepthStrategy(ABC):
    """
    Abstract base class for listing depth inference.
    """

    @abstractmethod
    def measure(self, line: str, cleaned: str) -> int:
        """
        Compute the nesting depth of a listing line.

        Args:
            line: The original, untouched line.
            cleaned: The line after glyph removal and whitespace collapsing.

        Returns:
            int: Nesting depth (0 for top level).
        """


class BoxDrawingDepth(DepthStrategy):
    """
    Counts every column consumed by indentation and connector glyphs,
    one level per `indent_width` columns.
    """

    def __init__(self, indent_width: int = DEFAULT_INDENT_WIDTH) -> None:
        if indent_width <= 0:
            raise ValueError("indent_width must be a positive integer.")
        self.indent_width = indent_width

    def measure(self, line: str, cleaned: str) -> int:
        return (len(line) - len(cleaned.strip())) // self.indent_width
