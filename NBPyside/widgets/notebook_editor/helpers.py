from __future__ import annotations

from typing import Any, Mapping

from PySide6.QtGui import QColor, QTextDocument

from nbcells.snapshot import NotebookText
from nbcells.types import CellKind

_HIGHLIGHT_DEFAULTS = {
    "enabled": True,
    "markdown_color": "#3A4A5E",
    "code_color": "#36453A",
    "alpha": 90,
}


def _coerce_bool(value: object, *, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value or "").strip().lower()
    if text in {"1", "true", "yes", "on", "y"}:
        return True
    if text in {"0", "false", "no", "off", "n", ""}:
        return False
    return bool(default)


def _coerce_alpha(value: object, default: int) -> int:
    try:
        alpha = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return max(0, min(255, alpha))


def highlight_settings(raw: Mapping[str, Any] | None) -> dict[str, Any]:
    merged = dict(_HIGHLIGHT_DEFAULTS)
    if isinstance(raw, Mapping):
        merged.update({key: value for key, value in raw.items() if key in _HIGHLIGHT_DEFAULTS})
    merged["enabled"] = _coerce_bool(merged.get("enabled"), default=True)
    merged["alpha"] = _coerce_alpha(merged.get("alpha"), int(_HIGHLIGHT_DEFAULTS["alpha"]))
    return merged


def highlight_color(kind: CellKind, settings: Mapping[str, Any]) -> QColor:
    key = "markdown_color" if CellKind(kind) is CellKind.MARKDOWN else "code_color"
    color = QColor(str(settings.get(key) or _HIGHLIGHT_DEFAULTS[key]))
    if not color.isValid():
        color = QColor(str(_HIGHLIGHT_DEFAULTS[key]))
    color.setAlpha(int(settings.get("alpha", _HIGHLIGHT_DEFAULTS["alpha"])))
    return color


def snapshot_from_document(document: QTextDocument) -> NotebookText:
    # toPlainText() offsets line up with QTextCursor positions.
    return NotebookText(document.toPlainText())


__all__ = [name for name in globals() if not name.startswith("__")]
