"""Notebook cell actions, their default chords, and keybinding normalization."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from PySide6.QtGui import QKeySequence

KeybindingScope = str
Keybindings = dict[str, dict[str, list[str]]]

NOTEBOOK_SCOPE: KeybindingScope = "notebook"

_MODIFIER_ALIASES = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "alt": "alt",
    "option": "alt",
    "shift": "shift",
    "meta": "meta",
    "cmd": "meta",
    "command": "meta",
    "super": "meta",
    "win": "meta",
}
_KEY_ALIASES = {"bracketleft": "[", "bracketright": "]"}


@dataclass(frozen=True, slots=True)
class KeyChord:
    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False

    @property
    def has_modifiers(self) -> bool:
        return self.ctrl or self.alt or self.shift or self.meta

    def to_portable_text(self) -> str:
        flags = (("Ctrl", self.ctrl), ("Alt", self.alt), ("Shift", self.shift), ("Meta", self.meta))
        return "+".join([name for name, on in flags if on] + [self.key])

    @staticmethod
    def parse(text: str) -> "KeyChord | None":
        tokens = [tok.strip() for tok in str(text or "").split("+")]
        # "Ctrl++" names the plus key.
        if len(tokens) > 1 and tokens[-1] == "" and tokens[-2] == "":
            tokens = tokens[:-2] + ["+"]
        tokens = [tok for tok in tokens if tok]
        if not tokens:
            return None

        mods: set[str] = set()
        key = ""
        for tok in tokens:
            mod = _MODIFIER_ALIASES.get(tok.lower())
            if mod is None:
                key = tok
            else:
                mods.add(mod)
        if not key:
            return None
        return KeyChord(
            key=_canonical_key(key),
            ctrl="ctrl" in mods,
            alt="alt" in mods,
            shift="shift" in mods,
            meta="meta" in mods,
        )


def _canonical_key(token: str) -> str:
    alias = _KEY_ALIASES.get(token.lower())
    if alias is not None:
        return alias
    if len(token) == 1:
        return token.upper()
    # Let Qt spell named keys ("pgdown" -> "PgDown"); keep the token if it is unknown.
    qt_text = QKeySequence(token).toString(QKeySequence.PortableText).strip()
    if qt_text and "+" not in qt_text and "," not in qt_text:
        return qt_text
    return token[:1].upper() + token[1:]


@dataclass(frozen=True, slots=True)
class KeybindingAction:
    scope: KeybindingScope
    action_id: str
    action_name: str
    default_sequence: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class KeybindingConflict:
    scope: KeybindingScope
    action_id: str
    action_name: str
    sequence_text: str


ACTION_NEXT_CELL = "action.notebook_next_cell"
ACTION_PREVIOUS_CELL = "action.notebook_previous_cell"
ACTION_NEXT_CODE_CELL = "action.notebook_next_code_cell"
ACTION_PREVIOUS_CODE_CELL = "action.notebook_previous_code_cell"
ACTION_NEXT_MARKDOWN_CELL = "action.notebook_next_markdown_cell"
ACTION_PREVIOUS_MARKDOWN_CELL = "action.notebook_previous_markdown_cell"
ACTION_SNAP_TO_BOUNDARY = "action.notebook_snap_to_boundary"
ACTION_SELECT_CELL = "action.notebook_select_cell"
ACTION_TOGGLE_FOLD = "action.notebook_toggle_fold"


def _notebook_action(action_id: str, name: str, chord: str) -> KeybindingAction:
    return KeybindingAction(NOTEBOOK_SCOPE, action_id, name, (chord,))


KEYBINDING_ACTIONS: tuple[KeybindingAction, ...] = (
    _notebook_action(ACTION_NEXT_CELL, "Next Cell", "Ctrl+Down"),
    _notebook_action(ACTION_PREVIOUS_CELL, "Previous Cell", "Ctrl+Up"),
    _notebook_action(ACTION_NEXT_CODE_CELL, "Next Code Cell", "Ctrl+Alt+Down"),
    _notebook_action(ACTION_PREVIOUS_CODE_CELL, "Previous Code Cell", "Ctrl+Alt+Up"),
    _notebook_action(ACTION_NEXT_MARKDOWN_CELL, "Next Markdown Cell", "Ctrl+Shift+Down"),
    _notebook_action(ACTION_PREVIOUS_MARKDOWN_CELL, "Previous Markdown Cell", "Ctrl+Shift+Up"),
    _notebook_action(ACTION_SNAP_TO_BOUNDARY, "Snap to Cell Boundary", "Ctrl+Alt+B"),
    _notebook_action(ACTION_SELECT_CELL, "Select Cell", "Ctrl+Shift+L"),
    _notebook_action(ACTION_TOGGLE_FOLD, "Toggle Cell Fold", "Ctrl+Shift+["),
)

_ACTIONS: dict[tuple[KeybindingScope, str], KeybindingAction] = {
    (action.scope, action.action_id): action for action in KEYBINDING_ACTIONS
}


def _scope_key(scope: Any) -> str:
    return str(scope or "").strip().lower()


def _action_key(action_id: Any) -> str:
    return str(action_id or "").strip()


def default_keybindings() -> Keybindings:
    out: Keybindings = {}
    for action in KEYBINDING_ACTIONS:
        out.setdefault(action.scope, {})[action.action_id] = list(action.default_sequence)
    return out


def keybinding_actions_for_scope(scope: KeybindingScope) -> list[KeybindingAction]:
    wanted = _scope_key(scope)
    return [action for action in KEYBINDING_ACTIONS if action.scope == wanted]


def action_definition(scope: KeybindingScope, action_id: str) -> KeybindingAction | None:
    return _ACTIONS.get((_scope_key(scope), _action_key(action_id)))


def canonicalize_chord_text(text: str) -> str:
    """Portable spelling of one chord, e.g. ``"ctrl+down"`` -> ``"Ctrl+Down"``."""
    chord = KeyChord.parse(text)
    return chord.to_portable_text() if chord is not None else ""


def _iter_chord_texts(value: Any) -> Iterable[str]:
    items = [value] if isinstance(value, str) else value if isinstance(value, (list, tuple)) else []
    for item in items:
        if isinstance(item, str):
            yield from item.split(",")


def normalize_sequence(value: Any) -> list[str]:
    """Accepts ``"Ctrl+K, Ctrl+D"`` or a list of chords; drops anything unparsable."""
    return [chord for chord in map(canonicalize_chord_text, _iter_chord_texts(value)) if chord]


def sequence_to_text(sequence: Iterable[str]) -> str:
    return ", ".join(normalize_sequence(list(sequence)))


def sequence_equals(left: Iterable[str], right: Iterable[str]) -> bool:
    return normalize_sequence(list(left)) == normalize_sequence(list(right))


def qkeysequence_from_sequence(sequence: Iterable[str]) -> QKeySequence:
    return QKeySequence(sequence_to_text(sequence))


def normalize_keybindings(raw: Any) -> Keybindings:
    """Defaults overlaid with every valid override in ``raw``."""
    merged = default_keybindings()
    if not isinstance(raw, Mapping):
        return merged
    for scope, overrides in raw.items():
        scope_key = _scope_key(scope)
        if not scope_key or not isinstance(overrides, Mapping):
            continue
        for action_id, value in overrides.items():
            action_key = _action_key(action_id)
            sequence = normalize_sequence(value)
            # An empty override keeps the default chord.
            if action_key and sequence:
                merged.setdefault(scope_key, {})[action_key] = sequence
    return merged


def get_action_sequence(
    keybindings: Mapping[str, Mapping[str, list[str]]] | None,
    *,
    action_id: str,
    scope: KeybindingScope = NOTEBOOK_SCOPE,
) -> list[str]:
    configured = normalize_keybindings(keybindings).get(_scope_key(scope), {})
    return list(configured.get(_action_key(action_id), []))


def set_action_sequence(
    keybindings: Mapping[str, Mapping[str, list[str]]] | None,
    *,
    action_id: str,
    sequence: Iterable[str],
    scope: KeybindingScope = NOTEBOOK_SCOPE,
) -> Keybindings:
    updated = normalize_keybindings(keybindings)
    updated.setdefault(_scope_key(scope), {})[_action_key(action_id)] = normalize_sequence(list(sequence))
    return updated


def reset_action_to_default(
    keybindings: Mapping[str, Mapping[str, list[str]]] | None,
    *,
    action_id: str,
    scope: KeybindingScope = NOTEBOOK_SCOPE,
) -> Keybindings:
    updated = normalize_keybindings(keybindings)
    action = action_definition(scope, action_id)
    fallback = list(action.default_sequence) if action is not None else []
    updated.setdefault(_scope_key(scope), {})[_action_key(action_id)] = deepcopy(fallback)
    return updated


def find_conflicts_for_sequence(
    keybindings: Mapping[str, Mapping[str, list[str]]] | None,
    *,
    action_id: str,
    sequence: Iterable[str],
    scope: KeybindingScope = NOTEBOOK_SCOPE,
) -> list[KeybindingConflict]:
    """Other actions in ``scope`` already bound to ``sequence``."""
    wanted = normalize_sequence(list(sequence))
    if not wanted:
        return []
    configured = normalize_keybindings(keybindings)
    own_id = _action_key(action_id)

    conflicts: list[KeybindingConflict] = []
    for action in keybinding_actions_for_scope(scope):
        if action.action_id == own_id:
            continue
        bound = configured.get(action.scope, {}).get(action.action_id, [])
        if bound != wanted:
            continue
        conflicts.append(
            KeybindingConflict(
                scope=action.scope,
                action_id=action.action_id,
                action_name=action.action_name,
                sequence_text=", ".join(bound),
            )
        )
    return conflicts


__all__ = [
    "ACTION_NEXT_CELL",
    "ACTION_NEXT_CODE_CELL",
    "ACTION_NEXT_MARKDOWN_CELL",
    "ACTION_PREVIOUS_CELL",
    "ACTION_PREVIOUS_CODE_CELL",
    "ACTION_PREVIOUS_MARKDOWN_CELL",
    "ACTION_SELECT_CELL",
    "ACTION_SNAP_TO_BOUNDARY",
    "ACTION_TOGGLE_FOLD",
    "KEYBINDING_ACTIONS",
    "KeyChord",
    "KeybindingAction",
    "KeybindingConflict",
    "KeybindingScope",
    "Keybindings",
    "NOTEBOOK_SCOPE",
    "action_definition",
    "canonicalize_chord_text",
    "default_keybindings",
    "find_conflicts_for_sequence",
    "get_action_sequence",
    "keybinding_actions_for_scope",
    "normalize_keybindings",
    "normalize_sequence",
    "qkeysequence_from_sequence",
    "reset_action_to_default",
    "sequence_equals",
    "sequence_to_text",
]
