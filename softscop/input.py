"""Keyboard state shared between the window and the application."""

from __future__ import annotations

from .keys import KeyCode


def _checked_code(key_code) -> int:
    code = int(key_code)
    if not 0 <= code <= KeyCode.KEY_LAST:
        raise ValueError(f"key code {code} out of range")
    return code


class InputState:
    """Tracks which keys are held and whether any key event happened."""

    def __init__(self):
        self._pressed: set[int] = set()
        self._key_event = False

    def press_key(self, key_code) -> None:
        """Mark a key as held and flag a key event."""
        code = _checked_code(key_code)
        self._key_event = True
        self._pressed.add(code)

    def release_key(self, key_code) -> None:
        """Mark a key as released."""
        self._pressed.discard(_checked_code(key_code))

    def is_key_pressed(self, key_code) -> bool:
        """Whether the key is currently held."""
        return _checked_code(key_code) in self._pressed

    def is_key_event(self) -> bool:
        """Whether a key was pressed since the last clear."""
        return self._key_event

    def clear_key_event(self) -> None:
        """Reset the key-event flag."""
        self._key_event = False