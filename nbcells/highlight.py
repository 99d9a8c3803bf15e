from __future__ import annotations

from dataclasses import dataclass

from .locator import cell_at
from .snapshot import NotebookText
from .types import CellKind

_STYLE_CLASSES: dict[CellKind, str] = {
    CellKind.MARKDOWN: "notebook-markdown-cell",
    CellKind.CODE: "notebook-code-cell",
}


@dataclass(frozen=True, slots=True)
class HighlightState:
    """Either no highlight, or the span of one cell and its kind."""

    kind: CellKind | None = None
    start: int = 0
    end: int = 0

    @property
    def active(self) -> bool:
        return self.kind is not None

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    @property
    def style_class(self) -> str:
        if self.kind is None:
            return ""
        return _STYLE_CLASSES[self.kind]


NO_HIGHLIGHT = HighlightState()


def style_class_for(kind: CellKind) -> str:
    return _STYLE_CLASSES[CellKind(kind)]


def refresh_highlight(doc: NotebookText, pos: int, *, has_selection: bool = False) -> HighlightState:
    if has_selection:
        return NO_HIGHLIGHT
    cell = cell_at(doc, pos)
    if cell is None:
        return NO_HIGHLIGHT
    return HighlightState(kind=cell.kind, start=cell.start, end=cell.end)


__all__ = ["HighlightState", "NO_HIGHLIGHT", "refresh_highlight", "style_class_for"]
