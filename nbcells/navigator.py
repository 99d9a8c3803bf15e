"""Cursor movement by cells and boundary snapping."""

from __future__ import annotations

import logging

from .locator import cell_at, code_cell_at, in_markdown_cell, markdown_cell_at
from .search import find_nth_marker
from .snapshot import NotebookText
from .types import MarkerKind, SnapMode

logger = logging.getLogger(__name__)

_CLOSE = (MarkerKind.MARKDOWN_CLOSE,)
_PROMPT = (MarkerKind.CODE_PROMPT,)
_CELL_OPENERS = frozenset({MarkerKind.MARKDOWN_OPEN, MarkerKind.CODE_PROMPT})


def _direction_for(count: int) -> int:
    value = int(count)
    if value == 0:
        raise ValueError("Cell count must be non-zero.")
    return 1 if value > 0 else -1


def move_markdown_cell(doc: NotebookText, pos: int, count: int) -> int | None:
    """Offset just inside the body of the markdown cell ``count`` cells away."""
    direction = _direction_for(count)
    pos = doc.clamp(pos)
    steps = abs(int(count))
    # Moving forward from inside a cell must not count that cell's own close.
    if direction > 0 and markdown_cell_at(doc, pos) is not None:
        steps += 1

    match = find_nth_marker(
        doc,
        pos,
        _CLOSE,
        direction,
        steps,
        predicate=lambda at: in_markdown_cell(doc, at),
    )
    if match is None:
        logger.debug("No markdown cell %+d from offset %d", count, pos)
        return None
    cell = markdown_cell_at(doc, match.start)
    if cell is None:
        return None
    # Body entry is the line after the opening fence.
    return doc.next_line_start(cell.start)


def move_code_cell(doc: NotebookText, pos: int, count: int) -> int | None:
    direction = _direction_for(count)
    pos = doc.clamp(pos)
    steps = abs(int(count))
    # Moving backward from inside a cell must not count that cell's own prompt.
    if direction < 0 and code_cell_at(doc, pos) is not None:
        steps += 1

    match = find_nth_marker(
        doc,
        pos,
        _PROMPT,
        direction,
        steps,
        predicate=lambda at: not in_markdown_cell(doc, at),
    )
    if match is None:
        logger.debug("No code cell %+d from offset %d", count, pos)
        return None
    if direction > 0:
        return min(doc.length, match.start + 1)
    return doc.next_line_start(match.start)


def move_cell(doc: NotebookText, pos: int, count: int) -> int | None:
    """Move ``count`` cells of either kind; None if any single step fails."""
    direction = _direction_for(count)
    current = doc.clamp(pos)
    for _ in range(abs(int(count))):
        targets = [
            target
            for target in (
                move_markdown_cell(doc, current, direction),
                move_code_cell(doc, current, direction),
            )
            if target is not None and (target - current) * direction > 0
        ]
        if not targets:
            logger.debug("Cell move %+d from offset %d exhausted at %d", count, pos, current)
            return None
        current = min(targets) if direction > 0 else max(targets)
    return current


def closest_boundary(doc: NotebookText, pos: int) -> SnapMode | None:
    pos = doc.clamp(pos)
    cell = cell_at(doc, pos)
    if cell is None:
        return None
    back = pos - cell.start
    forward = cell.end - pos
    return SnapMode.FORWARD if back > forward else SnapMode.BACKWARD


def snap_to_boundary(doc: NotebookText, pos: int, mode: SnapMode | str | None = None) -> int:
    pos = doc.clamp(pos)
    cell = cell_at(doc, pos)
    if cell is None:
        return pos
    resolved = SnapMode(mode) if mode is not None else closest_boundary(doc, pos)
    if resolved is SnapMode.FORWARD:
        return min(doc.length, cell.end + 1)
    # The last offset of a cell that runs up to the next cell is already
    # where a backward snap from that next cell lands.
    if pos == cell.end and _opens_cell_at(doc, pos + 1):
        return pos
    return max(0, cell.start - 1)


def _opens_cell_at(doc: NotebookText, offset: int) -> bool:
    line = doc.line_at(offset)
    return doc.line_start(line) == offset and doc.marker_kind(line) in _CELL_OPENERS


__all__ = [
    "closest_boundary",
    "move_cell",
    "move_code_cell",
    "move_markdown_cell",
    "snap_to_boundary",
]
