import os

import pytest

# Widget tests run without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from nbcells.snapshot import NotebookText  # noqa: E402

SAMPLE_NOTEBOOK = (
    "# In[1]\n"
    'print("hello")\n'
    '"""\n'
    "# Markdown\n"
    '""" #:md:\n'
    "# In[2]\n"
    'print("world")\n'
)

RICH_NOTEBOOK = (
    "# In[1]\n"
    "a = 1\n"
    '"""\n'
    "Intro\n"
    '""" #:md:\n'
    '"""\n'
    "More\n"
    '""" #:md:\n'
    "# In[2]\n"
    "b = 2\n"
    "# In[3]\n"
    "c = 3\n"
)


@pytest.fixture
def sample_doc() -> NotebookText:
    return NotebookText(SAMPLE_NOTEBOOK)


@pytest.fixture
def rich_doc() -> NotebookText:
    return NotebookText(RICH_NOTEBOOK)


def line_start(doc: NotebookText, line_no: int) -> int:
    """Offset of 1-based line ``line_no``."""
    return doc.line_start(line_no - 1)


def line_end(doc: NotebookText, line_no: int) -> int:
    """Offset just past the last character of 1-based line ``line_no``."""
    return doc.line_end(line_no - 1)
