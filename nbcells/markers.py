"""Line-level marker grammar for plain-text notebooks.

A notebook is an ordinary text file where:
  - a line that is exactly ``\"\"\"`` opens a markdown cell,
  - a line that is exactly ``\"\"\" #:md:`` closes it,
  - a line starting with ``# In[<label>]`` starts a code cell.
"""

from __future__ import annotations

import re

from .types import MarkerKind

MARKDOWN_FENCE = '"""'
MARKDOWN_TAG = "#:md:"

# Opening fence line plus its newline.
MARKDOWN_BODY_OFFSET = len(MARKDOWN_FENCE) + 1

_MARKDOWN_OPEN_RE = re.compile(r'^"""$')
_MARKDOWN_CLOSE_RE = re.compile(r'^""" #:md:$')
_CODE_PROMPT_RE = re.compile(r"^# In\[([A-Za-z0-9 ]*)\]")

MARKER_PATTERNS: dict[MarkerKind, re.Pattern[str]] = {
    MarkerKind.MARKDOWN_OPEN: _MARKDOWN_OPEN_RE,
    MarkerKind.MARKDOWN_CLOSE: _MARKDOWN_CLOSE_RE,
    MarkerKind.CODE_PROMPT: _CODE_PROMPT_RE,
}

FENCE_KINDS = frozenset({MarkerKind.MARKDOWN_OPEN, MarkerKind.MARKDOWN_CLOSE})


def _strip_line(line: str) -> str:
    text = str(line or "")
    if text.endswith("\n"):
        text = text[:-1]
    if text.endswith("\r"):
        text = text[:-1]
    return text


def classify_line(line: str) -> MarkerKind | None:
    text = _strip_line(line)
    if not text:
        return None
    for kind, pattern in MARKER_PATTERNS.items():
        if pattern.match(text):
            return kind
    return None


def prompt_label(line: str) -> str | None:
    m = _CODE_PROMPT_RE.match(_strip_line(line))
    if not m:
        return None
    return m.group(1)


__all__ = [
    "FENCE_KINDS",
    "MARKDOWN_BODY_OFFSET",
    "MARKDOWN_FENCE",
    "MARKDOWN_TAG",
    "MARKER_PATTERNS",
    "classify_line",
    "prompt_label",
]
