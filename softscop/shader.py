"""Vertex and fragment stages used by the software rasteriser."""

from __future__ import annotations

import random

from .vector import Vector

_LIGHT_DIRECTION = Vector(1.0, 1.0, -1.0).normalized()

_CEL_LEVELS = (
    (0.85, 1.0),
    (0.60, 0.80),
    (0.45, 0.60),
    (0.30, 0.45),
    (0.15, 0.30),
)


def _zero_bar() -> Vector:
    return Vector(0.0, 0.0, 0.0)


class Shader:
    """Transforms a face's vertices to screen space; keeps a flat white colour."""

    def __init__(self, model, texture, camera):
        self.model = model
        self.texture = texture
        self.camera = camera
        self.color = bytearray(b"\xff\xff\xff")
        self.uv = [Vector(0.0, 0.0) for _ in range(3)]
        self.mv = [Vector(0.0, 0.0, 0.0, 0.0) for _ in range(3)]
        self.mvp = [Vector(0.0, 0.0, 0.0, 0.0) for _ in range(3)]
        self.mvpv = [Vector(0.0, 0.0, 0.0, 0.0) for _ in range(3)]
        self.varying_intensity = Vector(0.0, 0.0, 0.0)

    def _position(self, face_index: int, vertex_index: int) -> Vector:
        index = self.model.faces[face_index][vertex_index]
        return Vector(self.model.vertices[index]).extend(1.0)

    def _transform_all(self, face_index: int, vertex_index: int) -> None:
        position = self._position(face_index, vertex_index)
        camera = self.camera
        self.mv[vertex_index] = camera.view_matrix * camera.model_matrix * position
        self.mvp[vertex_index] = camera.mvp_matrix * position
        self.mvpv[vertex_index] = camera.mvpv_matrix * position

    def _sample_texture(self, bar: Vector) -> None:
        texture = self.texture
        u = Vector(self.uv[0].x, self.uv[1].x, self.uv[2].x).dot(bar) * texture.width
        v = Vector(self.uv[0].y, self.uv[1].y, self.uv[2].y).dot(bar) * texture.height
        x = min(max(int(u), 0), texture.width - 1)
        y = min(max(int(v), 0), texture.height - 1)
        start = (x + y * texture.width) * texture.bytespp
        count = min(texture.bytespp, len(self.color))
        self.color[:count] = texture.data[start:start + count]

    def _load_uv(self, face_index: int, vertex_index: int) -> None:
        uv_index = self.model.face_uvs[face_index][vertex_index]
        self.uv[vertex_index] = self.model.uvs[uv_index]

    def _light(self, face_index: int, vertex_index: int) -> float:
        normal_index = self.model.face_normals[face_index][vertex_index]
        return self.model.normals[normal_index].dot(_LIGHT_DIRECTION)

    def vertex(self, face_index, vertex_index):
        """Compute the screen-space position of one vertex of a face."""
        self.mvpv[vertex_index] = self.camera.mvpv_matrix * self._position(
            face_index, vertex_index
        )

    def fragment(self, bar=None):
        """Set ``color`` for a pixel with barycentric coordinates ``bar``."""


class VertexOnlyShader(Shader):
    """Positions only; every pixel is white."""


class RandomColorShader(Shader):
    """Picks a random colour for each fragment call."""

    def fragment(self, bar=None):
        self.color[:] = bytes(random.randrange(255) for _ in range(3))


class TextureShader(Shader):
    """Colours pixels from the texture using interpolated uv coordinates."""

    def vertex(self, face_index, vertex_index):
        self._load_uv(face_index, vertex_index)
        self._transform_all(face_index, vertex_index)

    def fragment(self, bar=None):
        self._sample_texture(_zero_bar() if bar is None else bar)


class IntensityShader(Shader):
    """Grey cel shading from interpolated per-vertex light intensity."""

    def vertex(self, face_index, vertex_index):
        light = self._light(face_index, vertex_index)
        self.varying_intensity[vertex_index] = min(1.0, max(0.0, light))
        self._transform_all(face_index, vertex_index)

    def fragment(self, bar=None):
        intensity = self.varying_intensity.dot(_zero_bar() if bar is None else bar)
        level = next((value for limit, value in _CEL_LEVELS if intensity > limit), 0.0)
        self.color[:] = bytes([int(255 * level)] * 3)


class TextureIntensityShader(Shader):
    """Texture colour scaled by interpolated light intensity."""

    def vertex(self, face_index, vertex_index):
        self._load_uv(face_index, vertex_index)
        self.varying_intensity[vertex_index] = max(0.0, self._light(face_index, vertex_index))
        self._transform_all(face_index, vertex_index)

    def fragment(self, bar=None):
        bar = _zero_bar() if bar is None else bar
        self._sample_texture(bar)
        intensity = min(1.0, max(0.0, self.varying_intensity.dot(bar)))
        self.color[:] = bytes(int(channel * intensity) for channel in self.color)