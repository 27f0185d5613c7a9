"""Small fixed-size vectors (2 to 4 components) used by the renderer."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

MIN_SIZE = 2
MAX_SIZE = 4


def _check_size(size: int) -> None:
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise ValueError(
            f"vector must have between {MIN_SIZE} and {MAX_SIZE} components, got {size}"
        )


def _format_component(value: float) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class Vector:
    """A mutable vector of 2, 3 or 4 numeric components."""

    __slots__ = ("_data",)

    def __init__(self, *args):
        if len(args) == 1 and isinstance(args[0], Iterable):
            values = list(args[0])
        else:
            values = list(args)
        _check_size(len(values))
        self._data = values

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._data):
            raise IndexError(f"vector index {index} out of range")
        return index

    def _check_same_size(self, other: Vector) -> None:
        if len(other._data) != len(self._data):
            raise ValueError(
                f"vector sizes differ: {len(self._data)} and {len(other._data)}"
            )

    def __getitem__(self, index):
        return self._data[self._check_index(index)]

    def __setitem__(self, index, value):
        self._data[self._check_index(index)] = value

    def __len__(self):
        return len(self._data)

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self._data == other._data

    __hash__ = None

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_same_size(other)
        return Vector(a + b for a, b in zip(self._data, other._data))

    def __sub__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_same_size(other)
        return Vector(a - b for a, b in zip(self._data, other._data))

    def __neg__(self):
        return Vector(-c for c in self._data)

    def __mul__(self, scalar):
        if isinstance(scalar, bool) or not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector(c * scalar for c in self._data)

    def __truediv__(self, scalar):
        if isinstance(scalar, bool) or not isinstance(scalar, (int, float)):
            return NotImplemented
        if scalar == 0:
            raise ZeroDivisionError("vector division by zero")
        return Vector(c / scalar for c in self._data)

    def __str__(self):
        return "[" + ", ".join(_format_component(c) for c in self._data) + "]"

    def __repr__(self):
        return f"Vector({', '.join(repr(c) for c in self._data)})"

    def dot(self, other: Vector) -> float:
        """Scalar product with a vector of the same size."""
        self._check_same_size(other)
        return sum(a * b for a, b in zip(self._data, other._data))

    def cross(self, other: Vector) -> Vector:
        """Cross product; both vectors must have three components."""
        if len(self._data) != 3 or len(other._data) != 3:
            raise ValueError("cross product needs two 3-component vectors")
        ax, ay, az = self._data
        bx, by, bz = other._data
        return Vector(ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(sum(c * c for c in self._data))

    def normalize(self) -> Vector:
        """Scale to unit length in place (zero vectors are left alone)."""
        length = self.norm()
        if length > 0:
            factor = 1 / length
            self._data = [c * factor for c in self._data]
        return self

    def normalized(self) -> Vector:
        """Return a unit-length copy."""
        return Vector(self._data).normalize()

    def to_int(self) -> Vector:
        """Convert to integer components, rounding floats by adding one half."""
        return Vector(int(c + 0.5) if isinstance(c, float) else int(c) for c in self._data)

    def extend(self, *args) -> Vector:
        """Return a longer vector with the given components appended."""
        return Vector(self._data + list(args))

    @property
    def x(self):
        return self[0]

    @x.setter
    def x(self, value):
        self[0] = value

    @property
    def y(self):
        return self[1]

    @y.setter
    def y(self, value):
        self[1] = value

    @property
    def z(self):
        return self[2]

    @z.setter
    def z(self, value):
        self[2] = value

    @property
    def w(self):
        return self[3]

    @w.setter
    def w(self, value):
        self[3] = value