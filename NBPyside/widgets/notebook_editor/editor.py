from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtGui import QKeySequence, QShortcut, QTextCursor, QTextFormat
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit, QWidget

from nbcells import keybindings as kb
from nbcells.highlight import NO_HIGHLIGHT, HighlightState, refresh_highlight
from nbcells.locator import cell_at
from nbcells.navigator import move_cell, move_code_cell, move_markdown_cell, snap_to_boundary
from nbcells.outline import CellOutlineItem, build_cell_outline
from nbcells.regions import cells_in_range
from nbcells.settings_store import dot_get
from nbcells.snapshot import NotebookText
from nbcells.types import Cell, SnapMode

from .cell_folding import update_folding
from .helpers import _coerce_bool, highlight_color, highlight_settings, snapshot_from_document

logger = logging.getLogger(__name__)

_MOVERS: dict[str, Callable[[NotebookText, int, int], int | None]] = {
    "any": move_cell,
    "code": move_code_cell,
    "markdown": move_markdown_cell,
}


class NotebookEditor(QPlainTextEdit):
    """Plain-text editor that understands notebook cell markers."""

    cellHighlightChanged = Signal(object)

    def __init__(self, parent: QWidget | None = None, *, settings: Mapping[str, Any] | None = None):
        super().__init__(parent)
        self._snapshot_cache: tuple[object, int, NotebookText] | None = None
        self._highlight_state: HighlightState = NO_HIGHLIGHT
        self._highlight_settings: dict[str, Any] = highlight_settings(None)
        self._folding_enabled = True
        self._fold_ranges: dict[int, int] = {}
        self._folded_starts: set[int] = set()
        self._configured_keybindings: dict[str, dict[str, list[str]]] = kb.default_keybindings()
        self._configured_shortcuts: list[QShortcut] = []

        self._fold_refresh_timer = QTimer(self)
        self._fold_refresh_timer.setSingleShot(True)
        self._fold_refresh_timer.setInterval(250)
        self._fold_refresh_timer.timeout.connect(self.refresh_folding)

        self.document().contentsChanged.connect(self._invalidate_snapshot)
        self.textChanged.connect(self._on_text_changed)
        self.cursorPositionChanged.connect(self._refresh_cell_highlight)
        self.selectionChanged.connect(self._refresh_cell_highlight)

        self.apply_settings(settings)

    # --------- settings ---------
    def apply_settings(self, settings: Mapping[str, Any] | None) -> None:
        source: Mapping[str, Any] = settings if isinstance(settings, Mapping) else {}
        self._highlight_settings = highlight_settings(dot_get(source, "highlight"))
        self._folding_enabled = _coerce_bool(dot_get(source, "folding.enabled", True), default=True)
        self.configure_keybindings(dot_get(source, "keybindings"))
        self.refresh_folding()
        self._refresh_cell_highlight()

    def configure_keybindings(self, keybindings: Mapping[str, Mapping[str, list[str]]] | None) -> None:
        self._configured_keybindings = kb.normalize_keybindings(keybindings)
        self._rebuild_configured_shortcuts()

    def folding_enabled(self) -> bool:
        return self._folding_enabled

    def _action_sequence(self, action_id: str) -> list[str]:
        return kb.get_action_sequence(self._configured_keybindings, action_id=action_id)

    def _clear_configured_shortcuts(self) -> None:
        for shortcut in self._configured_shortcuts:
            shortcut.setEnabled(False)
            shortcut.deleteLater()
        self._configured_shortcuts.clear()

    def _install_shortcut(self, sequence: list[str], callback: Callable[[], Any]) -> None:
        qseq = kb.qkeysequence_from_sequence(sequence)
        if qseq.isEmpty():
            return
        shortcut = QShortcut(qseq, self)
        shortcut.setContext(Qt.ShortcutContext.WidgetWithChildrenShortcut)
        shortcut.activated.connect(callback)
        self._configured_shortcuts.append(shortcut)

    def _rebuild_configured_shortcuts(self) -> None:
        self._clear_configured_shortcuts()
        handlers: dict[str, Callable[[], Any]] = {
            kb.ACTION_NEXT_CELL: lambda: self.move_cells(1),
            kb.ACTION_PREVIOUS_CELL: lambda: self.move_cells(-1),
            kb.ACTION_NEXT_CODE_CELL: lambda: self.move_cells(1, kind="code"),
            kb.ACTION_PREVIOUS_CODE_CELL: lambda: self.move_cells(-1, kind="code"),
            kb.ACTION_NEXT_MARKDOWN_CELL: lambda: self.move_cells(1, kind="markdown"),
            kb.ACTION_PREVIOUS_MARKDOWN_CELL: lambda: self.move_cells(-1, kind="markdown"),
            kb.ACTION_SNAP_TO_BOUNDARY: self.snap_cursor_to_boundary,
            kb.ACTION_SELECT_CELL: self.select_current_cell,
            kb.ACTION_TOGGLE_FOLD: self.toggle_fold_at_cursor,
        }
        for action_id, handler in handlers.items():
            self._install_shortcut(self._action_sequence(action_id), handler)

    def shortcut_sequences(self) -> list[QKeySequence]:
        return [shortcut.key() for shortcut in self._configured_shortcuts]

    # --------- document snapshot ---------
    def _invalidate_snapshot(self) -> None:
        self._snapshot_cache = None

    def snapshot(self) -> NotebookText:
        doc = self.document()
        revision = int(doc.revision())
        cached = self._snapshot_cache
        if cached is not None and cached[0] is doc and cached[1] == revision:
            return cached[2]
        snap = snapshot_from_document(doc)
        self._snapshot_cache = (doc, revision, snap)
        return snap

    def _on_text_changed(self) -> None:
        self._invalidate_snapshot()
        self._fold_refresh_timer.start()

    # --------- cell queries and movement ---------
    def current_cell(self) -> Cell | None:
        return cell_at(self.snapshot(), self.textCursor().position())

    def move_cells(self, count: int, kind: str = "any") -> bool:
        mover = _MOVERS.get(str(kind or "").strip().lower())
        if mover is None:
            raise ValueError(f"Unknown cell kind {kind!r}; expected one of {sorted(_MOVERS)}.")
        origin = self.textCursor().position()
        target = mover(self.snapshot(), origin, count)
        if target is None:
            logger.debug("Cell move %+d (%s) from %d found no target", count, kind, origin)
            return False
        self._set_cursor_position(target)
        return True

    def snap_cursor_to_boundary(self, mode: SnapMode | str | None = None) -> int:
        target = snap_to_boundary(self.snapshot(), self.textCursor().position(), mode)
        self._set_cursor_position(target)
        return target

    def select_current_cell(self) -> bool:
        cell = self.current_cell()
        if cell is None:
            return False
        length = self.snapshot().length
        cursor = self.textCursor()
        cursor.setPosition(min(cell.start, length))
        cursor.setPosition(min(cell.end, length), QTextCursor.KeepAnchor)
        self.setTextCursor(cursor)
        return True

    def cell_outline(self) -> list[CellOutlineItem]:
        return build_cell_outline(self.snapshot())

    def cells_in_selection(self) -> list[Cell]:
        cursor = self.textCursor()
        if not cursor.hasSelection():
            cell = self.current_cell()
            return [cell] if cell is not None else []
        return list(cells_in_range(self.snapshot(), cursor.selectionStart(), cursor.selectionEnd()))

    def _set_cursor_position(self, pos: int) -> None:
        target = max(0, min(int(pos), self.snapshot().length))
        self._reveal_block(self.document().findBlock(target).blockNumber())
        cursor = self.textCursor()
        cursor.setPosition(target)
        self.setTextCursor(cursor)
        self.ensureCursorVisible()

    # --------- live highlight ---------
    def highlight_state(self) -> HighlightState:
        return self._highlight_state

    def _refresh_cell_highlight(self) -> None:
        cursor = self.textCursor()
        if not self._highlight_settings.get("enabled", True):
            state = NO_HIGHLIGHT
        else:
            state = refresh_highlight(
                self.snapshot(),
                cursor.position(),
                has_selection=cursor.hasSelection(),
            )
        changed = state != self._highlight_state
        self._highlight_state = state
        self._rebuild_extra_selections()
        if changed:
            self.cellHighlightChanged.emit(state)

    def _rebuild_extra_selections(self) -> None:
        state = self._highlight_state
        if state.kind is None:
            self.setExtraSelections([])
            return
        length = self.snapshot().length
        selection = QTextEdit.ExtraSelection()
        cur = QTextCursor(self.document())
        cur.setPosition(min(state.start, length))
        cur.setPosition(min(state.end, length), QTextCursor.KeepAnchor)
        selection.cursor = cur
        selection.format.setBackground(highlight_color(state.kind, self._highlight_settings))
        selection.format.setProperty(QTextFormat.FullWidthSelection, True)
        self.setExtraSelections([selection])

    # --------- cell folding ---------
    def refresh_folding(self) -> None:
        self._fold_refresh_timer.stop()
        update_folding(self)

    def fold_ranges(self) -> dict[int, int]:
        return dict(self._fold_ranges)

    def folded_blocks(self) -> set[int]:
        return set(self._folded_starts)

    def toggle_fold_at_cursor(self) -> bool:
        block_no = self.textCursor().blockNumber()
        for start_block, end_block in self._fold_ranges.items():
            if start_block <= block_no <= end_block:
                return self._toggle_fold_at_block(start_block)
        return False

    def unfold_all_cells(self) -> None:
        self._folded_starts = set()
        self._apply_fold_visibility()

    def _toggle_fold_at_block(self, block_number: int) -> bool:
        block_no = int(block_number)
        if block_no not in self._fold_ranges:
            return False
        if block_no in self._folded_starts:
            self._folded_starts.discard(block_no)
        else:
            self._folded_starts.add(block_no)
            # Keep the cursor on the visible header line.
            cursor = self.textCursor()
            cursor.setPosition(self.document().findBlockByNumber(block_no).position())
            self.setTextCursor(cursor)
        self._apply_fold_visibility()
        return True

    def _reveal_block(self, block_number: int) -> None:
        hidden_by = {
            start
            for start in self._folded_starts
            if start < block_number <= self._fold_ranges.get(start, start)
        }
        if not hidden_by:
            return
        self._folded_starts -= hidden_by
        self._apply_fold_visibility()

    def _set_all_blocks_visible(self) -> None:
        block = self.document().firstBlock()
        while block.isValid():
            block.setVisible(True)
            block.setLineCount(1)
            block = block.next()

    def _apply_fold_visibility(self) -> None:
        self._set_all_blocks_visible()
        for start_block in sorted(self._folded_starts):
            end_block = self._fold_ranges.get(start_block)
            if end_block is None or end_block <= start_block:
                continue
            block = self.document().findBlockByNumber(start_block).next()
            while block.isValid() and block.blockNumber() <= end_block:
                block.setVisible(False)
                block.setLineCount(0)
                block = block.next()
        doc = self.document()
        doc.markContentsDirty(0, max(0, doc.characterCount()))
        self.viewport().update()


__all__ = ["NotebookEditor"]
