"""Model, view, projection and viewport transforms for the renderer."""

from __future__ import annotations

import math
from enum import Enum

from .matrix import Matrix, mat4
from .vector import Vector

FIELD_OF_VIEW = 60.0
ASPECT_RATIO = 1.0
NEAR_PLANE = 0.1
FAR_PLANE = 100.0
ORTHO_EXTENT = 2.0


class ProjectionMode(Enum):
    """How the camera projects the scene onto the screen."""

    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"


def _vec3(values) -> Vector:
    vector = Vector(float(c) for c in values)
    if len(vector) != 3:
        raise ValueError("expected three components")
    return vector


def euler_rotation_matrix(rotation) -> Matrix:
    """Rotation from roll, pitch and yaw angles in degrees (applied x, then y, then z)."""
    roll, pitch, yaw = (math.radians(angle) for angle in rotation)
    cr, sr = math.cos(roll), math.sin(roll)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)
    rotate_x = mat4((
        1, 0, 0, 0,
        0, cr, -sr, 0,
        0, sr, cr, 0,
        0, 0, 0, 1,
    ))
    rotate_y = mat4((
        cp, 0, sp, 0,
        0, 1, 0, 0,
        -sp, 0, cp, 0,
        0, 0, 0, 1,
    ))
    rotate_z = mat4((
        cy, -sy, 0, 0,
        sy, cy, 0, 0,
        0, 0, 1, 0,
        0, 0, 0, 1,
    ))
    return rotate_z * rotate_y * rotate_x


def _translation(offset: Vector) -> Matrix:
    x, y, z = offset
    return mat4((
        1, 0, 0, x,
        0, 1, 0, y,
        0, 0, 1, z,
        0, 0, 0, 1,
    ))


def _perspective() -> Matrix:
    f = 1.0 / math.tan(math.radians(FIELD_OF_VIEW) / 2)
    near, far = NEAR_PLANE, FAR_PLANE
    return mat4((
        f / ASPECT_RATIO, 0, 0, 0,
        0, f, 0, 0,
        0, 0, (far + near) / (near - far), (2 * far * near) / (near - far),
        0, 0, -1, 0,
    ))


def _orthographic() -> Matrix:
    left, right = -ORTHO_EXTENT, ORTHO_EXTENT
    bottom, top = -ORTHO_EXTENT, ORTHO_EXTENT
    near, far = NEAR_PLANE, FAR_PLANE
    return mat4((
        2 / (right - left), 0, 0, -(right + left) / (right - left),
        0, 2 / (top - bottom), 0, -(top + bottom) / (top - bottom),
        0, 0, -2 / (far - near), -(far + near) / (far - near),
        0, 0, 0, 1,
    ))


def _viewport(size: int) -> Matrix:
    half = size / 2
    scale = mat4((
        half, 0, 0, 0,
        0, half, 0, 0,
        0, 0, 1, 0,
        0, 0, 0, 1,
    ))
    return scale * _translation(Vector(1.0, 1.0, 1.0))


class Camera:
    """Holds the scene transforms and rebuilds them lazily after changes."""

    def __init__(
        self,
        model_position=(0, 0, 0),
        model_rotation=(0, 180, 0),
        model_scale=1.0,
        view_position=(0, 0, 5),
        view_rotation=(0, 0, 0),
        projection_mode=ProjectionMode.PERSPECTIVE,
    ):
        self._model_position = _vec3(model_position)
        self._model_rotation = _vec3(model_rotation)
        self._model_scale = max(0.0, float(model_scale))
        self._view_position = _vec3(view_position)
        self._view_rotation = _vec3(view_rotation)
        self._projection_mode = ProjectionMode(projection_mode)

        self._model_matrix = self._build_model_matrix()
        self._view_matrix = self._build_view_matrix()
        self._projection_matrix = self._build_projection_matrix()
        self._viewport_matrix = _viewport(0)
        self._model_dirty = False
        self._view_dirty = False
        self._mvp_matrix = Matrix()
        self._mvpv_matrix = Matrix()
        self._combined_dirty = True

    def _build_model_matrix(self) -> Matrix:
        s = self._model_scale
        scale = mat4((
            s, 0, 0, 0,
            0, s, 0, 0,
            0, 0, s, 0,
            0, 0, 0, 1,
        ))
        rotation = euler_rotation_matrix(self._model_rotation)
        return _translation(self._model_position) * scale * rotation

    def _build_view_matrix(self) -> Matrix:
        return _translation(-self._view_position) * euler_rotation_matrix(-self._view_rotation)

    def _build_projection_matrix(self) -> Matrix:
        if self._projection_mode is ProjectionMode.PERSPECTIVE:
            return _perspective()
        return _orthographic()

    def _refresh_combined(self) -> None:
        if self._combined_dirty:
            self._mvp_matrix = self.projection_matrix * self.view_matrix * self.model_matrix
            self._mvpv_matrix = self._viewport_matrix * self._mvp_matrix
            self._combined_dirty = False

    def _model_changed(self) -> None:
        self._model_dirty = True
        self._combined_dirty = True

    def _view_changed(self) -> None:
        self._view_dirty = True
        self._combined_dirty = True

    @property
    def mvp_matrix(self) -> Matrix:
        """Projection x view x model."""
        self._refresh_combined()
        return self._mvp_matrix

    @property
    def mvpv_matrix(self) -> Matrix:
        """Viewport x projection x view x model."""
        self._refresh_combined()
        return self._mvpv_matrix

    @property
    def model_matrix(self) -> Matrix:
        if self._model_dirty:
            self._model_matrix = self._build_model_matrix()
            self._model_dirty = False
        return self._model_matrix

    @property
    def view_matrix(self) -> Matrix:
        if self._view_dirty:
            self._view_matrix = self._build_view_matrix()
            self._view_dirty = False
        return self._view_matrix

    @property
    def projection_matrix(self) -> Matrix:
        return self._projection_matrix

    @property
    def viewport_matrix(self) -> Matrix:
        return self._viewport_matrix

    def rotate_model(self, rotation) -> None:
        """Add the given angles (degrees) to the model rotation."""
        self._model_rotation = self._model_rotation + _vec3(rotation)
        self._model_changed()

    def move_model(self, position) -> None:
        """Add the given offset to the model position."""
        self._model_position = self._model_position + _vec3(position)
        self._model_changed()

    def rotate_and_move_model(self, rotation, position) -> None:
        """Rotate and move the model in one step."""
        self._model_rotation = self._model_rotation + _vec3(rotation)
        self._model_position = self._model_position + _vec3(position)
        self._model_changed()

    def set_model_scale(self, scale) -> None:
        """Set the uniform model scale; negative values become zero."""
        self._model_scale = max(0.0, float(scale))
        self._model_changed()

    def rotate_view(self, rotation) -> None:
        """Add the given angles (degrees) to the view rotation."""
        self._view_rotation = self._view_rotation + _vec3(rotation)
        self._view_changed()

    def move_view(self, position) -> None:
        """Add the given offset to the view position."""
        self._view_position = self._view_position + _vec3(position)
        self._view_changed()

    def toggle_projection(self) -> None:
        """Switch between perspective and orthographic projection."""
        if self._projection_mode is ProjectionMode.PERSPECTIVE:
            self._projection_mode = ProjectionMode.ORTHOGRAPHIC
        else:
            self._projection_mode = ProjectionMode.PERSPECTIVE
        self._projection_matrix = self._build_projection_matrix()
        self._combined_dirty = True

    def set_viewport(self, size) -> None:
        """Map normalised device coordinates onto a square of ``size`` pixels."""
        self._viewport_matrix = _viewport(size)
        self._combined_dirty = True