"""PySide widgets for editing plain-text notebooks."""

from .notebook_editor import NotebookEditor

__all__ = ["NotebookEditor"]
