import pytest

from softscop.keys import KeyCode, MouseButton


def test_last_key_is_menu():
    assert KeyCode(348) is KeyCode.KEY_MENU
    assert KeyCode(348) is KeyCode.KEY_LAST


def test_escape_code():
    assert KeyCode(256) is KeyCode.KEY_ESCAPE


def test_unknown_key_is_negative():
    assert KeyCode(-1) is KeyCode.KEY_UNKNOWN


@pytest.mark.parametrize("char", "ADQWZ")
def test_letters_match_ascii(char):
    assert KeyCode(ord(char)) is KeyCode[f"KEY_{char}"]


@pytest.mark.parametrize("digit", "0123456789")
def test_digits_match_ascii(digit):
    assert KeyCode(ord(digit)) is KeyCode[f"KEY_{digit}"]


def test_mouse_aliases():
    assert MouseButton(0) is MouseButton.MOUSE_BUTTON_LEFT
    assert MouseButton(1) is MouseButton.MOUSE_BUTTON_RIGHT
    assert MouseButton(2) is MouseButton.MOUSE_BUTTON_MIDDLE
    assert MouseButton(7) is MouseButton.MOUSE_BUTTON_LAST