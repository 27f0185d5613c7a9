"""The interactive viewer: key bindings, the frame loop and the command line."""

from __future__ import annotations

import os
import sys

from .camera import Camera
from .fps import FrameTimer
from .input import InputState
from .keys import KeyCode
from .model import Model, ModelError
from .renderer import DrawMode, Renderer
from .shader import (
    IntensityShader,
    RandomColorShader,
    TextureIntensityShader,
    TextureShader,
    VertexOnlyShader,
)
from .tga import TGAError, load_tga

DEFAULT_MODEL_PATH = "./blender/teapot.obj"
DEFAULT_TEXTURE_PATH = "./blender/cat.tga"
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 800
WINDOW_TITLE = "scop"
IMAGE_BYTESPP = 3

MOVE_STEP = 0.05
ROTATE_STEP = 10.0
SCALE_STEP = 0.1
AUTO_ROTATION = (0.0, 10.0, 0.0)

_MODES = {
    KeyCode.KEY_1: (VertexOnlyShader, DrawMode.POINTS),
    KeyCode.KEY_2: (VertexOnlyShader, DrawMode.LINES),
    KeyCode.KEY_3: (RandomColorShader, DrawMode.BARYCENTRIC_SIMPLE),
    KeyCode.KEY_4: (TextureShader, DrawMode.BARYCENTRIC_FULL),
    KeyCode.KEY_5: (IntensityShader, DrawMode.BARYCENTRIC_FULL),
    KeyCode.KEY_6: (TextureIntensityShader, DrawMode.BARYCENTRIC_FULL),
}

_POSITION_KEYS = {
    KeyCode.KEY_F: (0, MOVE_STEP),
    KeyCode.KEY_H: (0, -MOVE_STEP),
    KeyCode.KEY_G: (1, MOVE_STEP),
    KeyCode.KEY_T: (1, -MOVE_STEP),
    KeyCode.KEY_Y: (2, -MOVE_STEP),
    KeyCode.KEY_R: (2, MOVE_STEP),
}

_ROTATION_KEYS = {
    KeyCode.KEY_W: (0, -ROTATE_STEP),
    KeyCode.KEY_S: (0, ROTATE_STEP),
    KeyCode.KEY_A: (1, -ROTATE_STEP),
    KeyCode.KEY_D: (1, ROTATE_STEP),
    KeyCode.KEY_Q: (2, ROTATE_STEP),
    KeyCode.KEY_E: (2, -ROTATE_STEP),
}


def instructions() -> str:
    """The key bindings shown when the viewer starts."""
    return (
        "\nCommands:\n"
        "\tactive rot:\t space\n"
        "\tmode:\t\t 1-6\n"
        "\tchange proj:\t tab\n"
        "\trotate:\t\t w-s, a-d, q-w\n"
        "\tmove:\t\t t-g, f-h, r-y\n"
        "\tscale:\t\t + -\n"
        "\texit:\t\t esc\n"
    )


class Application:
    """Ties a model, a texture and a camera to keyboard control and rendering."""

    def __init__(self, model, texture, camera=None, input_state=None):
        self.model = model
        self.texture = texture
        self.camera = camera if camera is not None else Camera()
        self.input_state = input_state if input_state is not None else InputState()
        self.shader = VertexOnlyShader(model, texture, self.camera)
        self.mode = DrawMode.LINES
        self.rotating = False
        self.redraw = True
        self.scale = 1.0

    def select_mode(self, key) -> None:
        """Switch shader and draw mode for one of the keys 1 to 6."""
        try:
            shader_class, mode = _MODES[KeyCode(key)]
        except (KeyError, ValueError):
            raise ValueError(f"key {key} does not select a drawing mode") from None
        self.shader = shader_class(self.model, self.texture, self.camera)
        self.mode = mode
        self.redraw = True

    def handle_input(self) -> bool:
        """Apply the held keys after a key event; return whether anything was applied."""
        state = self.input_state
        if not state.is_key_event():
            return False

        for key in _MODES:
            if state.is_key_pressed(key):
                self.select_mode(key)

        if state.is_key_pressed(KeyCode.KEY_SPACE):
            self.rotating = not self.rotating
        if state.is_key_pressed(KeyCode.KEY_TAB):
            self.camera.toggle_projection()

        position = [0.0, 0.0, 0.0]
        for key, (axis, step) in _POSITION_KEYS.items():
            if state.is_key_pressed(key):
                position[axis] += step
        rotation = [0.0, 0.0, 0.0]
        for key, (axis, step) in _ROTATION_KEYS.items():
            if state.is_key_pressed(key):
                rotation[axis] += step

        if state.is_key_pressed(KeyCode.KEY_EQUAL):
            self.scale += SCALE_STEP
            self.camera.set_model_scale(self.scale)
        if state.is_key_pressed(KeyCode.KEY_MINUS):
            self.scale -= SCALE_STEP
            self.camera.set_model_scale(self.scale)

        self.camera.rotate_model(rotation)
        self.camera.move_view(position)

        state.clear_key_event()
        self.redraw = True
        return True

    def render_frame(self, renderer):
        """Redraw the model if needed; return the new image or None if unchanged."""
        if self.rotating:
            self.redraw = True
            self.camera.rotate_view(AUTO_ROTATION)
        if not self.redraw:
            return None
        self.redraw = False
        return renderer.render(self.model, self.shader, self.mode)

    def run(self, window, timer=None) -> int:
        """Render into ``window`` until it is closed; return the exit status."""
        if timer is None:
            timer = FrameTimer()
        print(instructions())
        renderer = None
        while not window.is_closed:
            timer.start()
            resolution = window.resolution
            if renderer is None or renderer.resolution != resolution:
                renderer = Renderer(resolution, IMAGE_BYTESPP)
                self.redraw = True
                self.camera.set_viewport(resolution)
            image = self.render_frame(renderer)
            if image is not None:
                window.present(image, resolution)
            window.poll_events()
            self.handle_input()
            timer.delay()
            timer.end()
            timer.calculate_fps()
        return 0


def parse_args(argv) -> tuple[str, str]:
    """Return ``(model_path, texture_path)`` from up to two arguments."""
    args = list(argv)
    if len(args) > 2:
        raise ValueError("wrong input")
    model_path = args[0] if args else DEFAULT_MODEL_PATH
    texture_path = args[1] if len(args) > 1 else DEFAULT_TEXTURE_PATH
    return model_path, texture_path


def _report(kind: str, path: str, details: str | None) -> None:
    print(f"{kind} file:\t{os.path.basename(path)}")
    print(f"loading:\t{'FAILED' if details is None else 'OK'}")
    if details:
        print(details)
    print()


def main(argv=None) -> int:
    """Load a model and a texture and show them in an interactive window."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        model_path, texture_path = parse_args(argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return -1

    try:
        model = Model.from_file(model_path)
    except ModelError as exc:
        print(exc, file=sys.stderr)
        _report("model", model_path, None)
        return exc.code
    _report("model", model_path, model.describe())

    try:
        texture = load_tga(texture_path)
    except TGAError as exc:
        print(f"TGAimage Error: {exc}", file=sys.stderr)
        _report("texture", texture_path, None)
        return exc.code
    _report("texture", texture_path, texture.describe())

    from .window import Window, WindowError

    app = Application(model, texture)
    try:
        window = Window(WINDOW_TITLE, WINDOW_WIDTH, WINDOW_HEIGHT, app.input_state)
    except WindowError as exc:
        print(exc, file=sys.stderr)
        return exc.code
    with window:
        return app.run(window)