from __future__ import annotations

from .helpers import *  # noqa: F401,F403
from .cell_folding import *  # noqa: F401,F403
from .editor import *  # noqa: F401,F403


__all__ = [name for name in globals() if not name.startswith("__")]
