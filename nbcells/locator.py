"""Locate the markdown or code cell enclosing an offset."""

from __future__ import annotations

from .markers import FENCE_KINDS
from .search import find_marker
from .snapshot import NotebookText
from .types import Cell, CellKind, Direction, MarkerKind

_OPEN = (MarkerKind.MARKDOWN_OPEN,)
_CLOSE = (MarkerKind.MARKDOWN_CLOSE,)
_PROMPT = (MarkerKind.CODE_PROMPT,)


def markdown_cell_at(doc: NotebookText, pos: int) -> Cell | None:
    pos = doc.clamp(pos)
    opener = find_marker(doc, pos, _OPEN, Direction.BACKWARD)
    if opener is None:
        return None
    closer = find_marker(doc, pos, _CLOSE, Direction.FORWARD)
    if closer is None:
        return None

    # The fence right before the closer must be our opener; anything else
    # means the closer belongs to a later cell.
    previous = find_marker(doc, closer.start, FENCE_KINDS, Direction.BACKWARD)
    if previous is None or previous.start > opener.start:
        return None
    return Cell(kind=CellKind.MARKDOWN, start=opener.start, end=closer.end)


def code_cell_at(doc: NotebookText, pos: int) -> Cell | None:
    pos = doc.clamp(pos)
    if markdown_cell_at(doc, pos) is not None:
        return None

    prev_close = find_marker(doc, pos, _CLOSE, Direction.BACKWARD)
    prev_md_end = prev_close.end if prev_close is not None else 0
    next_open = find_marker(doc, pos, _OPEN, Direction.FORWARD)
    next_md_start = next_open.start if next_open is not None else doc.length

    prompt = find_marker(doc, pos, _PROMPT, Direction.BACKWARD)
    if prompt is None or prompt.start < prev_md_end:
        return None

    next_prompt = find_marker(doc, pos, _PROMPT, Direction.FORWARD)
    boundary = min(
        next_prompt.start if next_prompt is not None else doc.length,
        next_md_start,
        doc.length,
    )
    end = boundary - 1
    if end < pos:
        return None
    return Cell(kind=CellKind.CODE, start=prompt.start, end=end, label=prompt.label)


def cell_at(doc: NotebookText, pos: int) -> Cell | None:
    cell = markdown_cell_at(doc, pos)
    if cell is not None:
        return cell
    return code_cell_at(doc, pos)


def in_markdown_cell(doc: NotebookText, pos: int) -> bool:
    return markdown_cell_at(doc, pos) is not None


__all__ = ["cell_at", "code_cell_at", "in_markdown_cell", "markdown_cell_at"]
