"""JSON persistence for notebook editor settings."""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

_MISSING = object()


class SettingsStoreError(RuntimeError):
    """Raised when the settings file cannot be written."""


def fill_defaults(data: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of ``data`` with every key absent from it taken from ``defaults``."""
    out = deepcopy(dict(data))
    for key, fallback in defaults.items():
        present = out.get(key, _MISSING)
        if present is _MISSING:
            out[key] = deepcopy(fallback)
        elif isinstance(present, dict) and isinstance(fallback, Mapping):
            out[key] = fill_defaults(present, fallback)
    return out


def dot_get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    node: Any = data
    for part in filter(None, str(key or "").split(".")):
        if not isinstance(node, Mapping):
            return default
        node = node.get(part, _MISSING)
        if node is _MISSING:
            return default
    return node


def dot_set(data: dict[str, Any], key: str, value: Any) -> None:
    *parents, leaf = str(key or "").split(".")
    if not leaf:
        raise ValueError("Settings key cannot be empty.")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value


class JsonSettingsStore:
    """
    Settings held in memory and mirrored to one JSON file.

    ``load()`` never raises: a file that cannot be read or parsed leaves the
    defaults in place, records the reason in ``last_error`` and is not
    overwritten until the next explicit ``save()``. A store created with
    ``persistent=False`` never touches the disk.
    """

    def __init__(self, path: Path, defaults: Mapping[str, Any], *, persistent: bool = True) -> None:
        self.path = Path(path)
        self.defaults: dict[str, Any] = deepcopy(dict(defaults))
        self.persistent = bool(persistent)
        self.data: dict[str, Any] = fill_defaults({}, self.defaults)
        self.dirty = False
        self.last_error: str | None = None

    def load(self) -> dict[str, Any]:
        self.data = fill_defaults({}, self.defaults)
        self.dirty = False
        self.last_error = None
        if not self.persistent:
            return self.data
        if not self.path.exists():
            # First run: defaults only, written on the next save.
            self.dirty = True
            return self.data

        payload = self._read_payload()
        if payload is not None:
            self.data = fill_defaults(payload, self.defaults)
        return self.data

    def _read_payload(self) -> dict[str, Any] | None:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self.last_error = str(exc)
        else:
            if isinstance(payload, dict):
                return payload
            self.last_error = f"Settings root in '{self.path}' must be a JSON object, found {type(payload).__name__}."
        logger.warning("Ignoring settings file %s: %s", self.path, self.last_error)
        return None

    def save(self) -> None:
        if self.persistent:
            text = json.dumps(self.data, indent=2, sort_keys=True)
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(text + "\n", encoding="utf-8")
            except OSError as exc:
                raise SettingsStoreError(f"Could not write settings file '{self.path}': {exc}") from exc
            logger.debug("Saved notebook settings to %s", self.path)
        self.dirty = False
        self.last_error = None

    def get(self, key: str, default: Any = None) -> Any:
        return dot_get(self.data, key, default)

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def set(self, key: str, value: Any) -> bool:
        if self.has(key) and self.get(key) == value:
            return False
        dot_set(self.data, key, value)
        self.dirty = True
        return True

    def restore_defaults(self) -> None:
        self.data = fill_defaults({}, self.defaults)
        self.dirty = True

    def snapshot(self) -> dict[str, Any]:
        return deepcopy(self.data)


__all__ = [
    "JsonSettingsStore",
    "SettingsStoreError",
    "dot_get",
    "dot_set",
    "fill_defaults",
]
