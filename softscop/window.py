"""An on-screen window that shows the rendered image and collects key events."""

from __future__ import annotations

import pygame

from .input import InputState
from .keys import KeyCode

RESOLUTION_STEP = 100
_KEY_REPEAT_DELAY_MS = 300
_KEY_REPEAT_INTERVAL_MS = 30


class WindowError(Exception):
    """Raised when the window cannot be created or used; ``code`` tells why."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code


def update_resolution(width, height) -> int:
    """Image resolution for a window: the shorter side rounded down to a step of 100."""
    side = height if width > height else width
    rounded = side // RESOLUTION_STEP * RESOLUTION_STEP
    return rounded or RESOLUTION_STEP


def viewport_rect(width, height) -> tuple[int, int, int, int]:
    """The centred square (x, y, width, height) the image is drawn into."""
    if width > height:
        return (width - height) // 2, 0, height, height
    return 0, (height - width) // 2, width, width


_key_table: dict[int, int] = {}


def _translate_key(pygame_key: int) -> int:
    if not _key_table:
        for letter in "abcdefghijklmnopqrstuvwxyz":
            _key_table[getattr(pygame, f"K_{letter}")] = KeyCode[f"KEY_{letter.upper()}"]
        for digit in "0123456789":
            _key_table[getattr(pygame, f"K_{digit}")] = KeyCode[f"KEY_{digit}"]
        _key_table.update({
            pygame.K_SPACE: KeyCode.KEY_SPACE,
            pygame.K_MINUS: KeyCode.KEY_MINUS,
            pygame.K_EQUALS: KeyCode.KEY_EQUAL,
            pygame.K_COMMA: KeyCode.KEY_COMMA,
            pygame.K_PERIOD: KeyCode.KEY_PERIOD,
            pygame.K_SLASH: KeyCode.KEY_SLASH,
            pygame.K_TAB: KeyCode.KEY_TAB,
            pygame.K_ESCAPE: KeyCode.KEY_ESCAPE,
            pygame.K_RETURN: KeyCode.KEY_ENTER,
            pygame.K_BACKSPACE: KeyCode.KEY_BACKSPACE,
            pygame.K_LEFT: KeyCode.KEY_LEFT,
            pygame.K_RIGHT: KeyCode.KEY_RIGHT,
            pygame.K_UP: KeyCode.KEY_UP,
            pygame.K_DOWN: KeyCode.KEY_DOWN,
            pygame.K_KP_PLUS: KeyCode.KEY_KP_ADD,
            pygame.K_KP_MINUS: KeyCode.KEY_KP_SUBTRACT,
        })
    return int(_key_table.get(pygame_key, KeyCode.KEY_UNKNOWN))


class Window:
    """A resizable window showing a square image centred in it."""

    def __init__(self, title, width, height, input_state=None):
        self.title = title
        self.input_state = input_state if input_state is not None else InputState()
        self._width = int(width)
        self._height = int(height)
        self._resolution = update_resolution(self._width, self._height)
        self._closed = False
        self._display_open = False

        pygame.init()
        if not pygame.display.get_init():
            raise WindowError(-1, "can't initialise the display")
        try:
            pygame.display.set_mode((self._width, self._height), pygame.RESIZABLE)
        except pygame.error as exc:
            pygame.display.quit()
            raise WindowError(
                -2, f"can't open window [{title}] with size {self._width}x{self._height}"
            ) from exc
        self._display_open = True
        pygame.display.set_caption(title)
        pygame.key.set_repeat(_KEY_REPEAT_DELAY_MS, _KEY_REPEAT_INTERVAL_MS)

    def __enter__(self) -> Window:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def resize(self, width, height) -> None:
        """Record a new window size and recompute the image resolution."""
        self._width, self._height = int(width), int(height)
        self._resolution = update_resolution(self._width, self._height)

    def handle_key(self, key, pressed) -> None:
        """Feed a key event into the input state; Escape closes the window."""
        key = int(key)
        if key < 0:
            return
        if key == KeyCode.KEY_ESCAPE:
            self._closed = True
            return
        if pressed:
            self.input_state.press_key(key)
        else:
            self.input_state.release_key(key)

    def present(self, image, resolution) -> None:
        """Show an RGB image of ``resolution`` x ``resolution`` pixels, row 0 at the bottom."""
        if not self._display_open:
            raise WindowError(-4, "window is closed")
        needed = resolution * resolution * 3
        if len(image) < needed:
            raise ValueError(f"image holds {len(image)} bytes, needs {needed}")
        screen = pygame.display.get_surface()
        frame = pygame.image.frombuffer(bytes(image[:needed]), (resolution, resolution), "RGB")
        frame = pygame.transform.flip(frame, False, True)
        x, y, w, h = viewport_rect(self._width, self._height)
        screen.fill((0, 0, 0))
        screen.blit(pygame.transform.scale(frame, (w, h)), (x, y))
        pygame.display.flip()

    def poll_events(self) -> None:
        """Process pending window and keyboard events."""
        if not self._display_open:
            return
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._closed = True
            elif event.type == pygame.VIDEORESIZE:
                self.resize(event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                self.handle_key(_translate_key(event.key), True)
            elif event.type == pygame.KEYUP:
                self.handle_key(_translate_key(event.key), False)

    def close(self) -> None:
        """Close the window and release the display."""
        self._closed = True
        if self._display_open:
            pygame.display.quit()
            self._display_open = False

    @property
    def resolution(self) -> int:
        return self._resolution

    @property
    def is_closed(self) -> bool:
        return self._closed