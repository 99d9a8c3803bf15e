from __future__ import annotations

from typing import Callable, Iterable

from .snapshot import NotebookText
from .types import BoundaryMatch, MarkerKind

MarkerPredicate = Callable[[int], bool]


def _check_direction(direction: int) -> int:
    value = int(direction)
    if value not in (1, -1):
        raise ValueError(f"Direction must be +1 or -1, got {direction!r}.")
    return value


def find_marker(
    doc: NotebookText,
    from_pos: int,
    kinds: Iterable[MarkerKind],
    direction: int,
) -> BoundaryMatch | None:
    """Return the nearest marker of ``kinds`` in ``direction``, if any."""
    step = _check_direction(direction)
    return next(iter(doc.iter_markers(from_pos, kinds, step)), None)


def find_nth_marker(
    doc: NotebookText,
    from_pos: int,
    kinds: Iterable[MarkerKind],
    direction: int,
    count: int,
    predicate: MarkerPredicate | None = None,
) -> BoundaryMatch | None:
    """
    Return the ``|count|``-th marker in ``direction`` accepted by ``predicate``.

    Occurrences rejected by the predicate are skipped without being counted.
    Returns None when the document edge is reached first.
    """
    step = _check_direction(direction)
    wanted = abs(int(count))
    if wanted == 0:
        raise ValueError("Marker count must be non-zero.")

    seen = 0
    for match in doc.iter_markers(from_pos, kinds, step):
        if predicate is not None and not predicate(match.start):
            continue
        seen += 1
        if seen == wanted:
            return match
    return None


__all__ = ["MarkerPredicate", "find_marker", "find_nth_marker"]
