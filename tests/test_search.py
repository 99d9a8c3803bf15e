"""Tests for nbcells.search."""
import pytest
from conftest import line_start

from nbcells.search import find_marker, find_nth_marker
from nbcells.snapshot import NotebookText
from nbcells.types import Direction, MarkerKind

PROMPT = (MarkerKind.CODE_PROMPT,)


class TestFindMarker:
    def test_forward_includes_marker_starting_at_offset(self, sample_doc: NotebookText) -> None:
        match = find_marker(sample_doc, 0, PROMPT, Direction.FORWARD)
        assert match is not None
        assert match.start == 0
        assert match.label == "1"

    def test_backward_excludes_marker_starting_at_offset(self, sample_doc: NotebookText) -> None:
        second = line_start(sample_doc, 6)
        match = find_marker(sample_doc, second, PROMPT, Direction.BACKWARD)
        assert match is not None
        assert match.start == 0

    def test_backward_includes_marker_line_containing_offset(self, sample_doc: NotebookText) -> None:
        second = line_start(sample_doc, 6)
        match = find_marker(sample_doc, second + 1, PROMPT, Direction.BACKWARD)
        assert match is not None
        assert match.start == second
        assert match.label == "2"

    def test_forward_skips_marker_line_already_entered(self, sample_doc: NotebookText) -> None:
        match = find_marker(sample_doc, 1, PROMPT, Direction.FORWARD)
        assert match is not None
        assert match.start == line_start(sample_doc, 6)

    def test_match_end_is_end_of_marker_text(self, sample_doc: NotebookText) -> None:
        match = find_marker(sample_doc, 0, (MarkerKind.MARKDOWN_CLOSE,), Direction.FORWARD)
        assert match is not None
        assert match.end == match.start + len('""" #:md:')


class TestFindNthMarker:
    def test_counts_only_qualifying_occurrences(self) -> None:
        doc = NotebookText("# In[1]\n# In[2]\n# In[3]\n")
        labels_allowed = {0, 16}
        match = find_nth_marker(
            doc, 0, PROMPT, Direction.FORWARD, 2, predicate=lambda at: at in labels_allowed
        )
        assert match is not None
        assert match.label == "3"

    def test_backward_count_uses_magnitude(self) -> None:
        doc = NotebookText("# In[1]\n# In[2]\n# In[3]\n")
        match = find_nth_marker(doc, doc.length, PROMPT, Direction.BACKWARD, -2)
        assert match is not None
        assert match.label == "2"

    def test_exhausted_search_returns_none(self, sample_doc: NotebookText) -> None:
        assert find_nth_marker(sample_doc, 0, PROMPT, Direction.FORWARD, 3) is None
        assert find_nth_marker(sample_doc, 0, PROMPT, Direction.BACKWARD, 1) is None

    def test_zero_count_is_rejected(self, sample_doc: NotebookText) -> None:
        with pytest.raises(ValueError):
            find_nth_marker(sample_doc, 0, PROMPT, Direction.FORWARD, 0)

    def test_invalid_direction_is_rejected(self, sample_doc: NotebookText) -> None:
        with pytest.raises(ValueError):
            find_nth_marker(sample_doc, 0, PROMPT, 0, 1)
        with pytest.raises(ValueError):
            find_marker(sample_doc, 0, PROMPT, 2)
