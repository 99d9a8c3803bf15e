"""Immutable text snapshot with line lookup and an index of marker lines."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from heapq import merge
from typing import Iterable, Iterator

from .markers import classify_line, prompt_label
from .types import BoundaryMatch, Direction, MarkerKind

# Every marker line begins with one of these.
_MARKER_PREFIXES = ('"""', "# In[")


def _walk(lines: list[int], index: int, step: int) -> Iterator[int]:
    while 0 <= index < len(lines):
        yield lines[index]
        index += step


class NotebookText:
    """
    A read-only document snapshot.

    Lines are classified once, when the snapshot is built; each marker kind
    keeps a sorted list of its line numbers so a directional search bisects
    straight to the nearest candidate instead of walking the text.
    """

    __slots__ = ("_text", "_line_starts", "_line_kinds", "_kind_lines", "_labels")

    def __init__(self, text: str) -> None:
        self._text = str(text or "")
        starts = [0]
        find = self._text.find
        idx = find("\n")
        while idx >= 0:
            starts.append(idx + 1)
            idx = find("\n", idx + 1)
        self._line_starts: tuple[int, ...] = tuple(starts)

        self._line_kinds: dict[int, MarkerKind] = {}
        self._kind_lines: dict[MarkerKind, list[int]] = {kind: [] for kind in MarkerKind}
        self._labels: dict[int, str] = {}
        for line, start in enumerate(starts):
            if not self._text.startswith(_MARKER_PREFIXES, start):
                continue
            line_text = self.line_text(line)
            kind = classify_line(line_text)
            if kind is None:
                continue
            self._line_kinds[line] = kind
            self._kind_lines[kind].append(line)
            if kind is MarkerKind.CODE_PROMPT:
                self._labels[line] = prompt_label(line_text) or ""

    @property
    def text(self) -> str:
        return self._text

    @property
    def length(self) -> int:
        return len(self._text)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def __len__(self) -> int:
        return len(self._text)

    def clamp(self, pos: int) -> int:
        return max(0, min(int(pos), len(self._text)))

    def line_at(self, pos: int) -> int:
        return bisect_right(self._line_starts, self.clamp(pos)) - 1

    def line_start(self, line: int) -> int:
        return self._line_starts[line]

    def line_end(self, line: int) -> int:
        if line + 1 < len(self._line_starts):
            return self._line_starts[line + 1] - 1
        return len(self._text)

    def line_text(self, line: int) -> str:
        return self._text[self.line_start(line):self.line_end(line)]

    def next_line_start(self, pos: int) -> int:
        """Start of the line after the one holding ``pos``, or the document end."""
        line = self.line_at(pos) + 1
        if line < len(self._line_starts):
            return self._line_starts[line]
        return len(self._text)

    def marker_kind(self, line: int) -> MarkerKind | None:
        return self._line_kinds.get(line)

    def marker_lines(self, kind: MarkerKind) -> tuple[int, ...]:
        return tuple(self._kind_lines[MarkerKind(kind)])

    def marker_at_line(self, line: int) -> BoundaryMatch | None:
        kind = self._line_kinds.get(line)
        if kind is None:
            return None
        start = self.line_start(line)
        end = self.line_end(line)
        # CRLF files keep the carriage return out of the marker span.
        if end > start and self._text[end - 1] == "\r":
            end -= 1
        return BoundaryMatch(kind=kind, start=start, end=end, label=self._labels.get(line))

    def iter_markers(
        self,
        from_pos: int,
        kinds: Iterable[MarkerKind],
        direction: int = Direction.FORWARD,
    ) -> Iterator[BoundaryMatch]:
        """
        Yield marker lines of the given kinds, nearest first.

        Forward scans lines starting at or after ``from_pos``; backward scans
        lines starting strictly before it.
        """
        pos = self.clamp(from_pos)
        line = self.line_at(pos)
        indexes = [self._kind_lines[kind] for kind in set(kinds) if self._kind_lines[kind]]

        if int(direction) > 0:
            first = line if self._line_starts[line] >= pos else line + 1
            streams = [_walk(lines, bisect_left(lines, first), 1) for lines in indexes]
            found = merge(*streams)
        else:
            last = line if self._line_starts[line] < pos else line - 1
            streams = [_walk(lines, bisect_right(lines, last) - 1, -1) for lines in indexes]
            found = merge(*streams, reverse=True)

        for marker_line in found:
            yield self.marker_at_line(marker_line)  # type: ignore[misc]


__all__ = ["NotebookText"]
