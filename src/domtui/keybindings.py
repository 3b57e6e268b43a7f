"""Key bindings for screen navigation and the built-in widgets."""

from __future__ import annotations

from typing import Literal

from domtui.events import KeyEvent
from domtui.keys import KeyId, normalize_key_id

Action = Literal[
    # Screen
    "focusNext",
    "focusPrevious",
    "quit",
    # Caret movement
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Selection
    "selectLeft",
    "selectRight",
    "selectLineStart",
    "selectLineEnd",
    "selectAll",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    # Clipboard
    "copy",
    "cut",
    "paste",
]

KeybindingsConfig = dict[Action, "KeyId | list[KeyId]"]

DEFAULT_KEYBINDINGS: dict[Action, KeyId | list[KeyId]] = {
    # Screen
    "focusNext": "tab",
    "focusPrevious": "shift+tab",
    "quit": ["ctrl+c", "ctrl+q"],
    # Caret movement
    "cursorLeft": ["left", "ctrl+b"],
    "cursorRight": ["right", "ctrl+f"],
    "cursorLineStart": ["home", "ctrl+a", "ctrl+left"],
    "cursorLineEnd": ["end", "ctrl+e", "ctrl+right"],
    # Selection
    "selectLeft": "shift+left",
    "selectRight": "shift+right",
    "selectLineStart": ["shift+home", "ctrl+shift+left"],
    "selectLineEnd": ["shift+end", "ctrl+shift+right"],
    "selectAll": "alt+a",
    # Deletion
    "deleteCharBackward": "backspace",
    "deleteCharForward": ["delete", "ctrl+d"],
    # Clipboard
    "copy": "alt+c",
    "cut": "alt+x",
    "paste": ["ctrl+v", "alt+v"],
}


class KeybindingsManager:
    """Maps actions to key ids, defaults overridden by user config."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[Action, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()
        for source in (DEFAULT_KEYBINDINGS, config):
            for action, keys in source.items():
                key_array = keys if isinstance(keys, list) else [keys]
                self._action_to_keys[action] = [
                    normalize_key_id(key) for key in key_array
                ]

    def matches(self, event: KeyEvent, action: Action) -> bool:
        """Check whether *event* is bound to *action*."""
        if event.key is None:
            return False
        return event.key in self._action_to_keys.get(action, ())

    def action_for(self, event: KeyEvent, *actions: Action) -> Action | None:
        """Return the first of *actions* (or of all actions) bound to *event*."""
        for action in actions or tuple(self._action_to_keys):
            if self.matches(event, action):
                return action
        return None

    def get_keys(self, action: Action) -> list[KeyId]:
        return list(self._action_to_keys.get(action, []))

    def set_config(self, config: KeybindingsConfig) -> None:
        self._build_maps(config)


_global_keybindings: KeybindingsManager | None = None


def get_keybindings() -> KeybindingsManager:
    global _global_keybindings
    if _global_keybindings is None:
        _global_keybindings = KeybindingsManager()
    return _global_keybindings


def set_keybindings(manager: KeybindingsManager) -> None:
    global _global_keybindings
    _global_keybindings = manager
