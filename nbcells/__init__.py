"""Cell-boundary recognition and navigation for plain-text notebooks."""

from .highlight import NO_HIGHLIGHT, HighlightState, refresh_highlight
from .locator import cell_at, code_cell_at, markdown_cell_at
from .markers import MARKDOWN_BODY_OFFSET, classify_line, prompt_label
from .navigator import closest_boundary, move_cell, move_code_cell, move_markdown_cell, snap_to_boundary
from .regions import cells_in_range, iter_cells
from .search import find_marker, find_nth_marker
from .snapshot import NotebookText
from .types import BoundaryMatch, Cell, CellKind, Direction, MarkerKind, SnapMode

__all__ = [
    "BoundaryMatch",
    "Cell",
    "CellKind",
    "Direction",
    "HighlightState",
    "MARKDOWN_BODY_OFFSET",
    "MarkerKind",
    "NO_HIGHLIGHT",
    "NotebookText",
    "SnapMode",
    "cell_at",
    "cells_in_range",
    "classify_line",
    "closest_boundary",
    "code_cell_at",
    "find_marker",
    "find_nth_marker",
    "iter_cells",
    "markdown_cell_at",
    "move_cell",
    "move_code_cell",
    "move_markdown_cell",
    "prompt_label",
    "refresh_highlight",
    "snap_to_boundary",
]
