from __future__ import annotations

from typing import Iterator

from .locator import cell_at
from .navigator import move_cell
from .snapshot import NotebookText
from .types import Cell


def cells_in_range(doc: NotebookText, start: int, end: int) -> Iterator[Cell]:
    """
    Lazily yield the cells lying wholly inside ``[start, end]``, in order.

    The walk stops at the first cell whose end reaches ``end``, or when no
    further cell can be entered.
    """
    start = doc.clamp(start)
    end = int(end)
    pos = start
    while True:
        cell = cell_at(doc, pos)
        if cell is not None:
            if cell.end >= end:
                return
            if cell.start >= start:
                yield cell
        nxt = move_cell(doc, pos, 1)
        if nxt is None or nxt <= pos:
            return
        pos = nxt


def iter_cells(doc: NotebookText) -> Iterator[Cell]:
    return cells_in_range(doc, 0, doc.length + 1)


__all__ = ["cells_in_range", "iter_cells"]
