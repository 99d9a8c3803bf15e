"""Tests for nbcells.locator."""
from conftest import SAMPLE_NOTEBOOK, line_end, line_start

from nbcells.locator import cell_at, code_cell_at, markdown_cell_at
from nbcells.snapshot import NotebookText
from nbcells.types import Cell, CellKind


class TestSampleNotebook:
    def test_code_cell_inside_first_cell(self, sample_doc: NotebookText) -> None:
        cell = cell_at(sample_doc, line_start(sample_doc, 2))
        assert cell == Cell(
            kind=CellKind.CODE,
            start=line_start(sample_doc, 1),
            end=line_end(sample_doc, 2),
            label="1",
        )

    def test_markdown_cell(self, sample_doc: NotebookText) -> None:
        cell = cell_at(sample_doc, line_start(sample_doc, 4))
        assert cell == Cell(
            kind=CellKind.MARKDOWN,
            start=line_start(sample_doc, 3),
            end=line_end(sample_doc, 5),
        )

    def test_code_lookup_inside_markdown_is_none(self, sample_doc: NotebookText) -> None:
        assert code_cell_at(sample_doc, line_start(sample_doc, 4)) is None

    def test_whole_code_cell_resolves_to_same_cell(self, sample_doc: NotebookText) -> None:
        expected = cell_at(sample_doc, line_start(sample_doc, 2))
        for pos in range(1, line_end(sample_doc, 2) + 1):
            assert cell_at(sample_doc, pos) == expected

    def test_last_code_cell_runs_to_document_end(self, sample_doc: NotebookText) -> None:
        cell = cell_at(sample_doc, line_start(sample_doc, 7))
        assert cell is not None
        assert cell.kind is CellKind.CODE
        assert cell.label == "2"
        assert cell.start == line_start(sample_doc, 6)
        assert cell.end == sample_doc.length - 1

    def test_last_code_cell_without_trailing_newline(self) -> None:
        doc = NotebookText(SAMPLE_NOTEBOOK.rstrip("\n"))
        cell = cell_at(doc, doc.length - 2)
        assert cell is not None
        assert cell.end == doc.length - 1

    def test_offsets_on_marker_line_starts_are_boundaries(self, sample_doc: NotebookText) -> None:
        assert cell_at(sample_doc, 0) is None
        assert cell_at(sample_doc, line_start(sample_doc, 3)) is None
        assert cell_at(sample_doc, line_start(sample_doc, 6)) is None

    def test_prompt_line_interior_belongs_to_its_cell(self, sample_doc: NotebookText) -> None:
        cell = cell_at(sample_doc, line_start(sample_doc, 6) + 1)
        assert cell is not None
        assert cell.label == "2"

    def test_close_line_interior_is_a_boundary(self, sample_doc: NotebookText) -> None:
        assert cell_at(sample_doc, line_start(sample_doc, 5) + 2) is None


class TestMalformedInput:
    def test_unterminated_markdown(self) -> None:
        doc = NotebookText('"""\nsome text\n')
        assert markdown_cell_at(doc, 5) is None
        assert cell_at(doc, 5) is None

    def test_close_without_open(self) -> None:
        doc = NotebookText('text\n""" #:md:\n')
        assert markdown_cell_at(doc, 1) is None

    def test_extra_fence_between_open_and_close(self) -> None:
        doc = NotebookText('"""\na\n"""\nb\n""" #:md:\n')
        assert markdown_cell_at(doc, 4) is None
        inner = markdown_cell_at(doc, 10)
        assert inner == Cell(kind=CellKind.MARKDOWN, start=6, end=21)

    def test_region_between_markdown_cells_is_not_markdown(self) -> None:
        doc = NotebookText('"""\nA\n""" #:md:\nplain\n"""\nB\n""" #:md:\n')
        plain = doc.text.index("plain")
        assert markdown_cell_at(doc, plain + 1) is None

    def test_prompt_inside_markdown_is_not_a_code_cell(self) -> None:
        doc = NotebookText('"""\n# In[9]\n""" #:md:\ntext after\n')
        assert code_cell_at(doc, 6) is None
        assert cell_at(doc, 6) is not None
        assert cell_at(doc, 6).kind is CellKind.MARKDOWN
        assert code_cell_at(doc, doc.text.index("text after") + 2) is None

    def test_text_before_first_prompt_is_outside(self) -> None:
        doc = NotebookText("preamble\n# In[1]\nx = 1\n")
        assert cell_at(doc, 3) is None

    def test_empty_document(self) -> None:
        doc = NotebookText("")
        assert cell_at(doc, 0) is None


class TestExclusivity:
    def test_markdown_and_code_never_both_defined(self, sample_doc: NotebookText, rich_doc: NotebookText) -> None:
        docs = [
            sample_doc,
            rich_doc,
            NotebookText('"""\n# In[9]\n""" #:md:\ntext after\n# In[1]\nx\n'),
            NotebookText('# In[1]\n"""\nunterminated\n# In[2]\n'),
        ]
        for doc in docs:
            for pos in range(doc.length + 1):
                md = markdown_cell_at(doc, pos)
                code = code_cell_at(doc, pos)
                assert md is None or code is None

    def test_located_cells_contain_offset(self, rich_doc: NotebookText) -> None:
        for pos in range(rich_doc.length + 1):
            cell = cell_at(rich_doc, pos)
            if cell is not None:
                assert cell.start <= pos <= cell.end
