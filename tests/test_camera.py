import pytest

from softscop.camera import Camera, ProjectionMode, euler_rotation_matrix
from softscop.matrix import identity
from softscop.vector import Vector


def flat(matrix):
    return [value for row in matrix.rows() for value in row]


def test_zero_rotation_is_identity():
    assert flat(euler_rotation_matrix((0, 0, 0))) == pytest.approx(flat(identity(4)))


def test_rotation_preserves_length():
    rotation = euler_rotation_matrix((30, 45, 60))
    point = Vector(1.0, 2.0, 3.0, 0.0)
    assert (rotation * point).norm() == pytest.approx(point.norm())


def test_yaw_quarter_turn_maps_x_to_y():
    result = euler_rotation_matrix((0, 0, 90)) * Vector(1.0, 0.0, 0.0, 1.0)
    assert list(result) == pytest.approx([0.0, 1.0, 0.0, 1.0], abs=1e-9)


def test_default_model_is_turned_half_way():
    camera = Camera()
    result = camera.model_matrix * Vector(1.0, 0.0, 0.0, 1.0)
    assert list(result) == pytest.approx([-1.0, 0.0, 0.0, 1.0], abs=1e-9)


def test_negative_scale_collapses_model():
    camera = Camera(model_position=(1, 2, 3))
    camera.set_model_scale(-4)
    result = camera.model_matrix * Vector(7.0, 8.0, 9.0, 1.0)
    assert list(result) == pytest.approx([1.0, 2.0, 3.0, 1.0])


def test_view_maps_eye_to_origin():
    camera = Camera()
    eye = Vector(0.0, 0.0, 5.0, 1.0)
    assert list(camera.view_matrix * eye) == pytest.approx([0, 0, 0, 1])
    camera.move_view((1, 2, 0))
    moved_eye = Vector(1.0, 2.0, 5.0, 1.0)
    assert list(camera.view_matrix * moved_eye) == pytest.approx([0, 0, 0, 1])


def test_perspective_maps_near_and_far_planes():
    projection = Camera().projection_matrix
    near = projection * Vector(0.0, 0.0, -0.1, 1.0)
    far = projection * Vector(0.0, 0.0, -100.0, 1.0)
    assert near.z / near.w == pytest.approx(-1.0)
    assert far.z / far.w == pytest.approx(1.0)
    assert projection.rows()[3] == (0.0, 0.0, -1.0, 0.0)


def test_toggle_projection_round_trip():
    camera = Camera()
    perspective = flat(camera.projection_matrix)
    camera.toggle_projection()
    assert camera.projection_matrix.rows()[3] == (0.0, 0.0, 0.0, 1.0)
    camera.toggle_projection()
    assert flat(camera.projection_matrix) == pytest.approx(perspective)


def test_orthographic_mode_from_constructor_matches_toggle():
    toggled = Camera()
    toggled.toggle_projection()
    built = Camera(projection_mode=ProjectionMode.ORTHOGRAPHIC)
    assert flat(built.projection_matrix) == pytest.approx(flat(toggled.projection_matrix))


def test_viewport_maps_ndc_corners():
    camera = Camera()
    camera.set_viewport(200)
    low = camera.viewport_matrix * Vector(-1.0, -1.0, 0.0, 1.0)
    high = camera.viewport_matrix * Vector(1.0, 1.0, 0.0, 1.0)
    assert [low.x, low.y] == pytest.approx([0.0, 0.0])
    assert [high.x, high.y] == pytest.approx([200.0, 200.0])


def test_default_viewport_has_zero_size():
    camera = Camera()
    rows = camera.mvpv_matrix.rows()
    assert rows[0] == pytest.approx((0.0, 0.0, 0.0, 0.0))
    assert rows[1] == pytest.approx((0.0, 0.0, 0.0, 0.0))


def test_combined_matrices_follow_changes():
    camera = Camera()
    camera.set_viewport(100)
    camera.rotate_model((10, 20, 30))
    camera.move_view((0.5, 0, 0))
    camera.toggle_projection()
    expected_mvp = camera.projection_matrix * camera.view_matrix * camera.model_matrix
    assert flat(camera.mvp_matrix) == pytest.approx(flat(expected_mvp))
    expected_mvpv = camera.viewport_matrix * camera.mvp_matrix
    assert flat(camera.mvpv_matrix) == pytest.approx(flat(expected_mvpv))


def test_rotations_accumulate():
    camera = Camera()
    camera.rotate_model((0, 90, 0))
    camera.rotate_model((0, 90, 0))
    reference = Camera(model_rotation=(0, 360, 0))
    assert flat(camera.model_matrix) == pytest.approx(flat(reference.model_matrix), abs=1e-9)


def test_rotate_and_move_matches_separate_steps():
    combined = Camera()
    combined.rotate_and_move_model((5, 10, 15), (0.1, 0.2, 0.3))
    separate = Camera()
    separate.rotate_model((5, 10, 15))
    separate.move_model((0.1, 0.2, 0.3))
    assert flat(combined.model_matrix) == pytest.approx(flat(separate.model_matrix))


def test_view_rotation_is_inverse_of_model_rotation():
    camera = Camera(view_position=(0, 0, 0), model_rotation=(0, 0, 0))
    camera.rotate_view((0, 0, 40))
    camera.rotate_model((0, 0, 40))
    product = camera.view_matrix * camera.model_matrix
    assert flat(product) == pytest.approx(flat(identity(4)), abs=1e-9)


def test_bad_rotation_size_rejected():
    camera = Camera()
    with pytest.raises(ValueError):
        camera.rotate_model((1, 2))