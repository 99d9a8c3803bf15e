from __future__ import annotations

from pathlib import Path
from typing import Any, TypedDict

from nbcells.keybindings import default_keybindings, normalize_keybindings
from nbcells.settings_store import JsonSettingsStore

SETTINGS_FILENAME = "notebook-editor.json"


class HighlightSettings(TypedDict, total=False):
    enabled: bool
    markdown_color: str
    code_color: str
    alpha: int


class FoldingSettings(TypedDict, total=False):
    enabled: bool


class NotebookSettings(TypedDict, total=False):
    highlight: HighlightSettings
    folding: FoldingSettings
    keybindings: dict[str, dict[str, list[str]]]


def default_notebook_settings() -> NotebookSettings:
    return {
        "highlight": {
            "enabled": True,
            "markdown_color": "#3A4A5E",
            "code_color": "#36453A",
            "alpha": 90,
        },
        "folding": {
            "enabled": True,
        },
        "keybindings": default_keybindings(),
    }


def open_settings_store(config_dir: Path, *, persistent: bool = True) -> JsonSettingsStore:
    store = JsonSettingsStore(
        Path(config_dir) / SETTINGS_FILENAME,
        default_notebook_settings(),
        persistent=persistent,
    )
    store.load()
    store.data["keybindings"] = normalize_keybindings(store.get("keybindings"))
    return store


__all__ = [
    "FoldingSettings",
    "HighlightSettings",
    "NotebookSettings",
    "SETTINGS_FILENAME",
    "default_notebook_settings",
    "open_settings_store",
]
