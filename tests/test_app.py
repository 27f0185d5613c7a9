import pytest

from softscop.app import Application, instructions, main, parse_args
from softscop.camera import Camera, ProjectionMode
from softscop.keys import KeyCode
from softscop.model import Model
from softscop.renderer import DrawMode, Renderer
from softscop.shader import (
    IntensityShader,
    RandomColorShader,
    TextureIntensityShader,
    TextureShader,
    VertexOnlyShader,
)
from softscop.tga import TGAImage

TRIANGLE_OBJ = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n"


@pytest.fixture
def model():
    return Model.from_lines(TRIANGLE_OBJ.splitlines(keepends=True))


@pytest.fixture
def texture():
    return TGAImage(2, 2, 3, 2, bytearray(range(12)))


@pytest.fixture
def app(model, texture):
    return Application(model, texture)


class FakeTimer:
    def __init__(self):
        self.calls = []

    def start(self):
        self.calls.append("start")

    def end(self):
        self.calls.append("end")

    def delay(self):
        self.calls.append("delay")

    def calculate_fps(self):
        self.calls.append("fps")
        return None


class FakeWindow:
    def __init__(self, frames, resolution=100, on_poll=None):
        self.frames = frames
        self.resolution = resolution
        self.polls = 0
        self.presented = []
        self.on_poll = on_poll

    @property
    def is_closed(self):
        return self.polls >= self.frames

    def present(self, image, resolution):
        self.presented.append((bytes(image), resolution))

    def poll_events(self):
        if self.on_poll is not None:
            self.on_poll(self.polls)
        self.polls += 1


def test_defaults(app):
    assert app.mode is DrawMode.LINES
    assert type(app.shader) is VertexOnlyShader
    assert app.rotating is False
    assert app.redraw is True


@pytest.mark.parametrize(
    "key, shader_class, mode",
    [
        (KeyCode.KEY_1, VertexOnlyShader, DrawMode.POINTS),
        (KeyCode.KEY_2, VertexOnlyShader, DrawMode.LINES),
        (KeyCode.KEY_3, RandomColorShader, DrawMode.BARYCENTRIC_SIMPLE),
        (KeyCode.KEY_4, TextureShader, DrawMode.BARYCENTRIC_FULL),
        (KeyCode.KEY_5, IntensityShader, DrawMode.BARYCENTRIC_FULL),
        (KeyCode.KEY_6, TextureIntensityShader, DrawMode.BARYCENTRIC_FULL),
    ],
)
def test_select_mode(app, key, shader_class, mode):
    app.select_mode(key)
    assert type(app.shader) is shader_class
    assert app.mode is mode
    assert app.shader.camera is app.camera


def test_select_mode_rejects_other_keys(app):
    with pytest.raises(ValueError):
        app.select_mode(KeyCode.KEY_7)


def test_handle_input_without_event(app):
    assert app.handle_input() is False
    assert app.camera.model_matrix == Camera().model_matrix


def test_last_mode_key_wins(app):
    app.input_state.press_key(KeyCode.KEY_1)
    app.input_state.press_key(KeyCode.KEY_3)
    assert app.handle_input() is True
    assert app.mode is DrawMode.BARYCENTRIC_SIMPLE
    assert app.input_state.is_key_event() is False
    assert app.redraw is True


def test_space_toggles_rotation(app):
    app.input_state.press_key(KeyCode.KEY_SPACE)
    app.handle_input()
    assert app.rotating is True
    app.input_state.press_key(KeyCode.KEY_SPACE)
    app.handle_input()
    assert app.rotating is False


def test_tab_toggles_projection(app):
    app.input_state.press_key(KeyCode.KEY_TAB)
    app.handle_input()
    expected = Camera(projection_mode=ProjectionMode.ORTHOGRAPHIC)
    assert app.camera.projection_matrix == expected.projection_matrix


def test_rotation_key_rotates_model(app):
    app.input_state.press_key(KeyCode.KEY_W)
    app.handle_input()
    assert app.camera.model_matrix == Camera(model_rotation=(-10, 180, 0)).model_matrix


def test_position_key_moves_view(app):
    app.input_state.press_key(KeyCode.KEY_F)
    app.handle_input()
    assert app.camera.view_matrix == Camera(view_position=(0.05, 0, 5)).view_matrix


def test_scale_keys(app):
    app.input_state.press_key(KeyCode.KEY_EQUAL)
    app.handle_input()
    assert app.scale == pytest.approx(1.1)
    assert app.camera.model_matrix == Camera(model_scale=app.scale).model_matrix


def test_render_frame_only_when_needed(app):
    renderer = Renderer(100)
    app.camera.set_viewport(100)
    image = app.render_frame(renderer)
    assert len(image) == 100 * 100 * 3
    assert any(image)
    assert app.render_frame(renderer) is None


def test_render_frame_while_rotating(app):
    renderer = Renderer(100)
    app.rotating = True
    assert app.render_frame(renderer) is not None
    assert app.render_frame(renderer) is not None
    assert app.camera.view_matrix == Camera(view_rotation=(0, 20, 0)).view_matrix


def test_run_presents_once_when_idle(app):
    window = FakeWindow(frames=3)
    timer = FakeTimer()
    assert app.run(window, timer) == 0
    assert len(window.presented) == 1
    assert window.presented[0][1] == 100
    assert window.polls == 3
    assert timer.calls.count("fps") == 3
    viewport = Camera()
    viewport.set_viewport(100)
    assert app.camera.viewport_matrix == viewport.viewport_matrix


def test_run_redraws_after_key(app):
    def press_space(count):
        if count == 0:
            app.input_state.press_key(KeyCode.KEY_SPACE)

    window = FakeWindow(frames=3, on_poll=press_space)
    assert app.run(window, FakeTimer()) == 0
    assert app.rotating is True
    assert len(window.presented) == 3


def test_instructions_lists_keys():
    text = instructions()
    assert "mode:\t\t 1-6" in text
    assert "exit:\t\t esc" in text


def test_parse_args_defaults():
    assert parse_args([]) == ("./blender/teapot.obj", "./blender/cat.tga")


def test_parse_args_model_only():
    assert parse_args(["mesh.obj"]) == ("mesh.obj", "./blender/cat.tga")


def test_parse_args_both():
    assert parse_args(["mesh.obj", "skin.tga"]) == ("mesh.obj", "skin.tga")


def test_parse_args_too_many():
    with pytest.raises(ValueError):
        parse_args(["a", "b", "c"])


def test_main_wrong_input():
    assert main(["a", "b", "c"]) == -1


def test_main_missing_model(tmp_path):
    assert main([str(tmp_path / "missing.obj")]) == 1


def test_main_missing_texture(tmp_path):
    obj = tmp_path / "tri.obj"
    obj.write_text(TRIANGLE_OBJ)
    assert main([str(obj), str(tmp_path / "missing.tga")]) == 1