"""Cell fold provider and update helpers for NotebookEditor."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nbcells.regions import iter_cells
from nbcells.snapshot import NotebookText

if TYPE_CHECKING:
    from .editor import NotebookEditor

FoldRegion = tuple[int, int]


def normalize_fold_ranges(ranges: list[tuple[int, int]], line_count: int) -> list[FoldRegion]:
    merged: dict[int, int] = {}
    max_line = max(0, int(line_count))
    for start_raw, end_raw in ranges:
        start = max(1, int(start_raw))
        end = min(max_line, int(end_raw))
        if end <= start:
            continue
        prev = merged.get(start)
        if prev is None or end > prev:
            merged[start] = end
    return sorted(merged.items(), key=lambda item: (item[0], item[1]))


def notebook_fold_ranges(source: str | NotebookText) -> list[FoldRegion]:
    """1-based (first line, last line) for every cell spanning several lines."""
    doc = source if isinstance(source, NotebookText) else NotebookText(source)
    ranges: list[tuple[int, int]] = []
    for cell in iter_cells(doc):
        first = doc.line_at(cell.start) + 1
        last = doc.line_at(cell.end) + 1
        if last > first:
            ranges.append((first, last))
    return normalize_fold_ranges(ranges, doc.line_count)


def update_folding(editor: "NotebookEditor") -> None:
    fold_ranges: dict[int, int] = {}
    if editor.folding_enabled():
        for start_line, end_line in notebook_fold_ranges(editor.snapshot()):
            fold_ranges[int(start_line) - 1] = int(end_line) - 1
    editor._fold_ranges = fold_ranges
    editor._folded_starts = {line for line in editor._folded_starts if line in fold_ranges}
    editor._apply_fold_visibility()


__all__ = [
    "FoldRegion",
    "normalize_fold_ranges",
    "notebook_fold_ranges",
    "update_folding",
]
