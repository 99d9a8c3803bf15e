from __future__ import annotations

import re
from dataclasses import dataclass

from .regions import iter_cells
from .snapshot import NotebookText
from .types import Cell, CellKind

_HEADING_PREFIX_RE = re.compile(r"^\s*#{1,6}\s*")


@dataclass(slots=True)
class CellOutlineItem:
    name: str
    kind: str
    line: int
    start: int
    end: int


def build_cell_outline(doc: NotebookText) -> list[CellOutlineItem]:
    return [
        CellOutlineItem(
            name=_cell_title(doc, cell),
            kind=cell.kind.value,
            line=doc.line_at(cell.start) + 1,
            start=cell.start,
            end=cell.end,
        )
        for cell in iter_cells(doc)
    ]


def _cell_title(doc: NotebookText, cell: Cell) -> str:
    if cell.kind is CellKind.CODE:
        return cell.prompt_text()

    first = doc.line_at(cell.start) + 1
    last = doc.line_at(cell.end)
    for line in range(first, last):
        text = doc.line_text(line).strip()
        if not text:
            continue
        title = _HEADING_PREFIX_RE.sub("", text).strip()
        if title:
            return title
    return "Markdown"


__all__ = ["CellOutlineItem", "build_cell_outline"]
