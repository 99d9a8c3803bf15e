"""Widget tests for NBPyside.widgets.notebook_editor."""
import pytest
from conftest import SAMPLE_NOTEBOOK
from PySide6.QtGui import QKeySequence, QTextCursor

from NBPyside.widgets import NotebookEditor
from NBPyside.widgets.notebook_editor import notebook_fold_ranges
from nbcells.highlight import NO_HIGHLIGHT
from nbcells.types import CellKind


@pytest.fixture
def editor(qtbot) -> NotebookEditor:
    widget = NotebookEditor()
    qtbot.addWidget(widget)
    widget.setPlainText(SAMPLE_NOTEBOOK)
    return widget


def _place_cursor(editor: NotebookEditor, pos: int) -> None:
    cursor = editor.textCursor()
    cursor.setPosition(pos)
    editor.setTextCursor(cursor)


def test_move_to_next_cell_updates_highlight(editor: NotebookEditor) -> None:
    _place_cursor(editor, 10)
    assert editor.highlight_state().kind is CellKind.CODE

    assert editor.move_cells(1)
    assert editor.textCursor().position() == 27
    state = editor.highlight_state()
    assert state.kind is CellKind.MARKDOWN
    assert state.span == (23, 47)

    (selection,) = editor.extraSelections()
    assert selection.cursor.selectionStart() == 23
    assert selection.cursor.selectionEnd() == 47


def test_move_by_kind(editor: NotebookEditor) -> None:
    _place_cursor(editor, 10)
    assert editor.move_cells(1, kind="code")
    assert editor.textCursor().position() == 49
    assert editor.move_cells(-1, kind="markdown")
    assert editor.textCursor().position() == 27


def test_failed_move_leaves_cursor(editor: NotebookEditor) -> None:
    _place_cursor(editor, 60)
    assert not editor.move_cells(1)
    assert editor.textCursor().position() == 60


def test_unknown_kind_is_rejected(editor: NotebookEditor) -> None:
    with pytest.raises(ValueError):
        editor.move_cells(1, kind="raw")


def test_snap_cursor_to_boundary(editor: NotebookEditor) -> None:
    _place_cursor(editor, 10)
    assert editor.snap_cursor_to_boundary("forward") == 23
    assert editor.textCursor().position() == 23
    assert editor.highlight_state() == NO_HIGHLIGHT


def test_select_current_cell_clears_highlight(editor: NotebookEditor) -> None:
    _place_cursor(editor, 10)
    assert editor.select_current_cell()
    cursor = editor.textCursor()
    assert (cursor.selectionStart(), cursor.selectionEnd()) == (0, 22)
    assert editor.highlight_state() == NO_HIGHLIGHT
    assert editor.extraSelections() == []


def test_select_current_cell_on_boundary(editor: NotebookEditor) -> None:
    _place_cursor(editor, 23)
    assert not editor.select_current_cell()


def test_cells_in_selection(editor: NotebookEditor) -> None:
    _place_cursor(editor, 10)
    (current,) = editor.cells_in_selection()
    assert current.label == "1"

    editor.selectAll()
    cells = editor.cells_in_selection()
    assert [cell.kind for cell in cells] == [CellKind.CODE, CellKind.MARKDOWN, CellKind.CODE]


def test_highlight_signal(editor: NotebookEditor, qtbot) -> None:
    with qtbot.waitSignal(editor.cellHighlightChanged, timeout=1000) as blocker:
        _place_cursor(editor, 30)
    assert blocker.args[0].kind is CellKind.MARKDOWN


def test_highlight_can_be_disabled(editor: NotebookEditor) -> None:
    editor.apply_settings({"highlight": {"enabled": False}})
    _place_cursor(editor, 10)
    assert editor.highlight_state() == NO_HIGHLIGHT
    assert editor.extraSelections() == []


def test_fold_ranges(editor: NotebookEditor) -> None:
    editor.refresh_folding()
    assert editor.fold_ranges() == {0: 1, 2: 4, 5: 6}
    assert notebook_fold_ranges(SAMPLE_NOTEBOOK) == [(1, 2), (3, 5), (6, 7)]


def test_toggle_fold_and_reveal_on_move(editor: NotebookEditor) -> None:
    editor.refresh_folding()
    _place_cursor(editor, 27)
    assert editor.toggle_fold_at_cursor()
    assert editor.folded_blocks() == {2}
    assert editor.textCursor().position() == 23
    assert not editor.document().findBlockByNumber(3).isVisible()

    assert editor.move_cells(1)
    assert editor.textCursor().position() == 27
    assert editor.folded_blocks() == set()
    assert editor.document().findBlockByNumber(3).isVisible()


def test_unfold_all_cells(editor: NotebookEditor) -> None:
    editor.refresh_folding()
    _place_cursor(editor, 10)
    assert editor.toggle_fold_at_cursor()
    editor.unfold_all_cells()
    assert editor.folded_blocks() == set()
    assert editor.document().findBlockByNumber(1).isVisible()


def test_folding_disabled(editor: NotebookEditor) -> None:
    editor.apply_settings({"folding": {"enabled": False}})
    assert editor.fold_ranges() == {}
    _place_cursor(editor, 10)
    assert not editor.toggle_fold_at_cursor()


def test_snapshot_tracks_edits(editor: NotebookEditor) -> None:
    first = editor.snapshot()
    assert editor.snapshot() is first
    cursor = editor.textCursor()
    cursor.movePosition(QTextCursor.MoveOperation.End)
    cursor.insertText("x = 1\n")
    updated = editor.snapshot()
    assert updated is not first
    assert updated.length == first.length + len("x = 1\n")


def test_default_shortcuts(editor: NotebookEditor) -> None:
    sequences = editor.shortcut_sequences()
    assert len(sequences) == 9
    assert sequences[0] == QKeySequence("Ctrl+Down")


def test_custom_keybinding(editor: NotebookEditor) -> None:
    editor.configure_keybindings({"notebook": {"action.notebook_next_cell": ["Alt+J"]}})
    assert editor.shortcut_sequences()[0] == QKeySequence("Alt+J")


def test_cell_outline_follows_document(editor: NotebookEditor) -> None:
    outline = editor.cell_outline()
    assert [(item.name, item.line) for item in outline] == [("In[1]", 1), ("Markdown", 3), ("In[2]", 6)]

    cursor = editor.textCursor()
    cursor.movePosition(QTextCursor.MoveOperation.End)
    cursor.insertText("# In[3]\nz = 3\n")
    assert [item.name for item in editor.cell_outline()][-1] == "In[3]"
