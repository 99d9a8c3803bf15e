import logging
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMainWindow

from NBPyside.widgets import NotebookEditor
from nbcells.settings_models import open_settings_store

APP_NAME = "Notebook Editor"
LOG_LEVEL_ARG = "--log-level="
CONFIG_DIR_ENV = "NOTEBOOK_EDITOR_CONFIG_DIR"


def _split_startup_args(argv: list[str]) -> tuple[list[str], str]:
    filtered: list[str] = []
    log_level = "WARNING"
    for arg in argv:
        if arg.startswith(LOG_LEVEL_ARG):
            log_level = arg[len(LOG_LEVEL_ARG):].strip().upper() or log_level
            continue
        filtered.append(arg)
    return filtered, log_level


def _config_dir() -> Path:
    override = str(os.environ.get(CONFIG_DIR_ENV) or "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "notebook-editor"


def _existing_file(path_value: str | None) -> Path | None:
    text = str(path_value or "").strip()
    if not text:
        return None
    candidate = Path(text).expanduser()
    if not candidate.is_file():
        return None
    return candidate


if __name__ == "__main__":
    cli_args, log_level = _split_startup_args(sys.argv[1:])
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("notebook_editor")

    notebook_path = _existing_file(cli_args[0]) if cli_args else None
    if cli_args and notebook_path is None:
        logger.error("File not found: %s", cli_args[0])
        sys.exit(1)

    app = QApplication([sys.argv[0], *cli_args])
    app.setStyle("Fusion")
    app.setApplicationName(APP_NAME)

    store = open_settings_store(_config_dir())
    editor = NotebookEditor(settings=store.data)
    if notebook_path is not None:
        editor.setPlainText(notebook_path.read_text(encoding="utf-8"))
        app.setApplicationDisplayName(f"{APP_NAME} [{notebook_path.name}]")

    window = QMainWindow()
    window.setCentralWidget(editor)
    window.resize(900, 700)
    window.show()
    sys.exit(app.exec())
