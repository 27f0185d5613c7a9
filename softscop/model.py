"""Loading Wavefront OBJ models into triangle meshes."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from .vector import Vector

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class ModelError(Exception):
    """Raised when a model cannot be loaded; ``code`` tells what went wrong."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code


def _split(text: str, sep: str) -> list[str]:
    parts = text.split(sep)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def _parse_index(token: str) -> int:
    match = _INT_PREFIX.match(token or "0")
    if match is None:
        raise ModelError(-1, f"invalid face index: {token!r}")
    return int(match.group(1)) - 1


def _component(indices: list[int], position: int, element: str) -> int:
    try:
        return indices[position]
    except IndexError:
        raise ModelError(-1, f"face element {element!r} lacks component {position}") from None


def _fan_push(fan: list[int], index: int, out: list[tuple[int, int, int]]) -> None:
    fan.append(index)
    if len(fan) == 3:
        out.append(tuple(fan))
        fan[1] = fan[2]
        fan.pop()


def parse_face(text, has_uv, has_normals):
    """Parse the body of an ``f`` line into fan-triangulated index triples.

    Returns ``(faces, face_uvs, face_normals)`` with zero-based indices; the uv
    and normal lists stay empty unless ``has_uv``/``has_normals`` is set.
    """
    faces, face_uvs, face_normals = [], [], []
    fan_v, fan_vt, fan_vn = [], [], []
    for element in _split(text, " "):
        indices = [_parse_index(token) for token in _split(element, "/")]
        _fan_push(fan_v, _component(indices, 0, element), faces)
        if has_uv:
            _fan_push(fan_vt, _component(indices, 1, element), face_uvs)
        if has_normals:
            _fan_push(fan_vn, _component(indices, 2, element), face_normals)
    return faces, face_uvs, face_normals


def _read_floats(line: str, count: int) -> list[float]:
    values = []
    for token in line.split()[1:count + 1]:
        try:
            values.append(float(token))
        except ValueError:
            break
    return values + [0.0] * (count - len(values))


def spherical_texture_coords(vertices):
    """Texture coordinates from each vertex's spherical angles."""
    coords = []
    for v in vertices:
        theta = math.atan2(v.z, v.x)
        phi = math.acos(max(-1.0, min(1.0, v.y)))
        coords.append(Vector(1 - abs(theta) / (2 * math.pi), 1 - abs(phi) / math.pi))
    return coords


def cylindrical_texture_coords(vertices):
    """Texture coordinates from each vertex's cylindrical angle and height."""
    return [
        Vector(abs(math.atan2(v.z, v.x)) / (2 * math.pi), (v.y + 1.0) / 2.0)
        for v in vertices
    ]


def planar_texture_coords(vertices):
    """Texture coordinates from a projection onto the xy plane."""
    vertices = list(vertices)
    if not vertices:
        return []
    max_x = max(v.x for v in vertices)
    max_y = max(v.y for v in vertices)
    extent = max(max_x, max_y)
    return [
        Vector((v.x + extent) / (2 * extent), (v.y + extent) / (2 * extent))
        for v in vertices
    ]


def calculate_normals(vertices, faces):
    """Per-vertex normals averaged over the faces that use each vertex."""
    sums = [Vector(0.0, 0.0, 0.0) for _ in vertices]
    counts = [0] * len(sums)
    for a, b, c in faces:
        v0 = vertices[a]
        normal = (vertices[b] - v0).cross(vertices[c] - v0)
        for index in (a, b, c):
            sums[index] = sums[index] + normal
            counts[index] += 1
    return [
        (total / count).normalize() if count else total
        for total, count in zip(sums, counts)
    ]


def _check_indices(triangles, limit: int) -> None:
    for triangle in triangles:
        for index in triangle:
            if index < 0 or index >= limit:
                raise ModelError(1, f"face index {index + 1} out of range")


def _normalise(vertices: list[Vector]) -> list[Vector]:
    lows = [min(v[i] for v in vertices) for i in range(3)]
    highs = [max(v[i] for v in vertices) for i in range(3)]
    center = Vector((lo + hi) / 2 for lo, hi in zip(lows, highs))
    half_extent = max((hi - lo) / 2 for lo, hi in zip(lows, highs))
    if half_extent == 0:
        raise ModelError(2, "model has no extent")
    return [(v - center) / half_extent for v in vertices]


@dataclass
class Model:
    """A triangle mesh centred on the origin and scaled into [-1, 1]."""

    vertices: list = field(default_factory=list)
    uvs: list = field(default_factory=list)
    normals: list = field(default_factory=list)
    faces: list = field(default_factory=list)
    face_uvs: list = field(default_factory=list)
    face_normals: list = field(default_factory=list)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Model:
        """Build a model from OBJ text lines."""
        model = cls()
        for raw in lines:
            line = raw.rstrip("\n")
            if line.startswith("v "):
                model.vertices.append(Vector(_read_floats(line, 3)))
            elif line.startswith("vt "):
                model.uvs.append(Vector(_read_floats(line, 2)))
            elif line.startswith("vn "):
                model.normals.append(Vector(_read_floats(line, 3)))
            elif line.startswith("f "):
                faces, face_uvs, face_normals = parse_face(
                    line[2:], bool(model.uvs), bool(model.normals)
                )
                model.faces += faces
                model.face_uvs += face_uvs
                model.face_normals += face_normals
        model._validate()
        model._complete()
        return model

    @classmethod
    def from_file(cls, path) -> Model:
        """Load a model from an OBJ file."""
        try:
            handle = open(path, encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ModelError(1, f"cannot open file: {path}") from exc
        with handle:
            return cls.from_lines(handle)

    def _validate(self) -> None:
        _check_indices(self.faces, len(self.vertices))
        if self.face_uvs:
            _check_indices(self.face_uvs, len(self.uvs))
        if self.face_normals:
            _check_indices(self.face_normals, len(self.normals))

    def _complete(self) -> None:
        if not self.vertices:
            raise ModelError(2, "no model points in file")
        self.vertices = _normalise(self.vertices)

        if not self.uvs:
            if not self.face_uvs:
                self.face_uvs = list(self.faces)
                self.uvs = spherical_texture_coords(self.vertices)
            else:
                self.uvs = [Vector(v.x, v.y) for v in self.vertices]

        if not self.normals:
            if not self.face_normals:
                self.face_normals = list(self.faces)
                self.normals = calculate_normals(self.vertices, self.faces)
            else:
                self.normals = [Vector(v) for v in self.vertices]

        if not len(self.faces) == len(self.face_uvs) == len(self.face_normals):
            raise ModelError(3, "faces, uv faces and normal faces differ in count")

    def describe(self) -> str:
        """Counts of the loaded elements, one per line."""
        return "\n".join(
            (
                f"verts:\t{len(self.vertices)}",
                f"uv:\t\t{len(self.uvs)}",
                f"norms:\t{len(self.normals)}",
                f"faces:\t{len(self.faces)}",
                f"faces_uv:\t{len(self.face_uvs)}",
                f"faces_norms:\t{len(self.face_normals)}",
            )
        )