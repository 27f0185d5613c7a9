"""Software rasteriser: points, lines and depth-tested triangles into an RGB buffer."""

from __future__ import annotations

import math
from enum import Enum

from .vector import Vector

_DEGENERATE = (-1.0, 1.0, 1.0)
_AREA_EPSILON = 1e-2


class DrawMode(Enum):
    """How each triangle of the model is drawn."""

    POINTS = "points"
    LINES = "lines"
    BARYCENTRIC_SIMPLE = "barycentric_simple"
    BARYCENTRIC_FULL = "barycentric_full"


def barycentric(a, b, c, p) -> Vector:
    """Barycentric coordinates of point ``p`` in triangle ``abc`` (2D points).

    A degenerate triangle yields ``(-1, 1, 1)``, which lies outside every triangle.
    """
    sx = Vector(c[0] - a[0], b[0] - a[0], a[0] - p[0])
    sy = Vector(c[1] - a[1], b[1] - a[1], a[1] - p[1])
    u = sx.cross(sy)
    if abs(u.z) > _AREA_EPSILON:
        return Vector(1.0 - (u.x + u.y) / u.z, u.y / u.z, u.x / u.z)
    return Vector(*_DEGENERATE)


def _project(v) -> tuple[float, float] | None:
    w = v[3]
    if w == 0:
        return None
    return v[0] / w, v[1] / w


class Renderer:
    """A square colour buffer with a matching depth buffer."""

    def __init__(self, resolution, bytespp=3):
        if bytespp < 1:
            raise ValueError("bytespp must be at least 1")
        self.bytespp = bytespp
        self.resize(resolution)

    def resize(self, resolution) -> None:
        """Reallocate the buffers for a new square resolution."""
        resolution = int(resolution)
        if resolution <= 0:
            raise ValueError("resolution must be positive")
        self.resolution = resolution
        self.image = bytearray(resolution * resolution * self.bytespp)
        self.zbuffer = [math.inf] * (resolution * resolution)

    def clear(self) -> None:
        """Blacken the image and reset the depth buffer."""
        self.image[:] = bytes(len(self.image))
        self.zbuffer = [math.inf] * (self.resolution * self.resolution)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.resolution and 0 <= y < self.resolution

    def _put(self, x: int, y: int, color) -> None:
        pixel = bytes(color)[: self.bytespp]
        if len(pixel) < self.bytespp:
            raise ValueError(f"colour needs {self.bytespp} channels")
        start = (y * self.resolution + x) * self.bytespp
        self.image[start:start + self.bytespp] = pixel

    def point(self, x, y, color) -> None:
        """Set one pixel; coordinates outside the image are ignored."""
        x, y = int(x), int(y)
        if self._inside(x, y):
            self._put(x, y, color)

    def line(self, x0, y0, x1, y1, color) -> None:
        """Bresenham line from (x0, y0) to (x1, y1); the start pixel is not drawn."""
        x0, y0, x1, y1 = int(x0), int(y0), int(x1), int(y1)
        res = self.resolution
        if (
            (x0 < 0 and x1 < 0)
            or (x0 >= res and x1 >= res)
            or (y0 < 0 and y1 < 0)
            or (y0 >= res and y1 >= res)
        ):
            return
        dx, dy = abs(x1 - x0), abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx - dy
        while x0 != x1 or y0 != y1:
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x0 += sx
            if e2 < dx:
                err += dx
                y0 += sy
            if self._inside(x0, y0):
                self._put(x0, y0, color)

    def draw_points(self, shader) -> None:
        """Plot the three projected vertices of the shader's current face."""
        for vertex in shader.mvpv:
            projected = _project(vertex)
            if projected is not None:
                self.point(*projected, shader.color)

    def draw_lines(self, shader) -> None:
        """Draw the outline of the shader's current face."""
        projected = [_project(v) for v in shader.mvpv]
        if any(p is None for p in projected):
            return
        corners = [(int(x), int(y)) for x, y in projected]
        for (ax, ay), (bx, by) in zip(corners, corners[1:] + corners[:1]):
            self.line(ax, ay, bx, by, shader.color)

    def _bounding_box(self, points) -> tuple[range, range]:
        last = self.resolution - 1
        xs = [int(p[0]) for p in points]
        ys = [int(p[1]) for p in points]
        x_lo, x_hi = min([last, *xs]), max([0, *xs])
        y_lo, y_hi = min([last, *ys]), max([0, *ys])
        return (
            range(max(x_lo, 0), min(x_hi, last) + 1),
            range(max(y_lo, 0), min(y_hi, last) + 1),
        )

    def draw_barycentric_simple(self, shader) -> None:
        """Fill the face with one colour and one depth for the whole triangle."""
        tri = shader.mvpv
        screen = [_project(v) for v in tri]
        if any(p is None for p in screen):
            return
        a, b, c = screen
        depth = (
            tri[0][2] * barycentric(a, b, c, a).x
            + tri[1][2] * barycentric(a, b, c, b).y
            + tri[2][2] * barycentric(a, b, c, c).z
        )
        xs, ys = self._bounding_box(screen)
        shader.fragment()
        res = self.resolution
        for x in xs:
            for y in ys:
                index = x + y * res
                if depth > self.zbuffer[index]:
                    continue
                bc = barycentric(a, b, c, (float(x), float(y)))
                if bc.x < 0 or bc.y < 0 or bc.z < 0:
                    continue
                self.zbuffer[index] = depth
                self._put(x, y, shader.color)

    def draw_barycentric_full(self, shader) -> None:
        """Fill the face with perspective-correct interpolation per pixel."""
        tri = shader.mvpv
        screen = [_project(v) for v in tri]
        if any(p is None for p in screen):
            return
        a, b, c = screen
        depths = Vector(tri[0][2], tri[1][2], tri[2][2])
        xs, ys = self._bounding_box(screen)
        res = self.resolution
        for x in xs:
            for y in ys:
                bc = barycentric(a, b, c, (float(x), float(y)))
                if bc.x < 0 or bc.y < 0 or bc.z < 0:
                    continue
                clip = Vector(bc.x / tri[0][3], bc.y / tri[1][3], bc.z / tri[2][3])
                total = clip.x + clip.y + clip.z
                if total == 0:
                    continue
                clip = clip / total
                depth = depths.dot(clip)
                index = x + y * res
                if depth > self.zbuffer[index]:
                    continue
                shader.fragment(clip)
                self.zbuffer[index] = depth
                self._put(x, y, shader.color)

    def draw(self, shader, mode) -> None:
        """Draw the shader's current face in the given mode."""
        handlers = {
            DrawMode.POINTS: self.draw_points,
            DrawMode.LINES: self.draw_lines,
            DrawMode.BARYCENTRIC_SIMPLE: self.draw_barycentric_simple,
            DrawMode.BARYCENTRIC_FULL: self.draw_barycentric_full,
        }
        handlers[DrawMode(mode)](shader)

    def render(self, model, shader, mode) -> bytearray:
        """Clear the buffers and draw every face of the model; return the image."""
        self.clear()
        for face_index, _ in enumerate(model.faces):
            for vertex_index in range(3):
                shader.vertex(face_index, vertex_index)
            self.draw(shader, mode)
        return self.image