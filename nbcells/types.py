from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class CellKind(str, Enum):
    MARKDOWN = "markdown"
    CODE = "code"


class MarkerKind(str, Enum):
    MARKDOWN_OPEN = "markdown_open"
    MARKDOWN_CLOSE = "markdown_close"
    CODE_PROMPT = "code_prompt"


class Direction(IntEnum):
    FORWARD = 1
    BACKWARD = -1


class SnapMode(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True, slots=True)
class BoundaryMatch:
    """A marker line found by a directional search."""

    kind: MarkerKind
    start: int          # offset of the marker line
    end: int            # offset just past the marker text (before the newline)
    label: str | None = None


@dataclass(frozen=True, slots=True)
class Cell:
    kind: CellKind
    start: int
    end: int
    label: str | None = None

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    def contains(self, pos: int) -> bool:
        return self.start <= int(pos) <= self.end

    def prompt_text(self) -> str:
        if self.kind is not CellKind.CODE:
            return ""
        label = self.label if self.label else " "
        return f"In[{label}]"


__all__ = [
    "BoundaryMatch",
    "Cell",
    "CellKind",
    "Direction",
    "MarkerKind",
    "SnapMode",
]
