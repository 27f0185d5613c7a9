"""Dense float matrices with row-major storage."""

from __future__ import annotations

from itertools import islice

from .vector import Vector


class Matrix:
    """A rows x cols matrix of floats."""

    __slots__ = ("_data", "shape")

    def __init__(self, values=None, rows=4, cols=4):
        if rows <= 0 or cols <= 0:
            raise ValueError("matrix dimensions must be positive")
        if values is None:
            self._data = [[0.0] * cols for _ in range(rows)]
        else:
            flat = [float(v) for v in values]
            if len(flat) != rows * cols:
                raise ValueError(
                    f"expected {rows * cols} values for a {rows}x{cols} matrix, got {len(flat)}"
                )
            it = iter(flat)
            self._data = [list(islice(it, cols)) for _ in range(rows)]
        self.shape = (rows, cols)

    def __getitem__(self, index):
        if not 0 <= index < self.shape[0]:
            raise IndexError(f"matrix row {index} out of range")
        return self._data[index]

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._data == other._data

    __hash__ = None

    def __mul__(self, other):
        rows, cols = self.shape
        if isinstance(other, Matrix):
            if other.shape[0] != cols:
                raise ValueError(f"cannot multiply {self.shape} by {other.shape}")
            columns = list(zip(*other._data))
            values = (
                sum(a * b for a, b in zip(row, column))
                for row in self._data
                for column in columns
            )
            return Matrix(values, rows, other.shape[1])
        if isinstance(other, Vector):
            if len(other) != cols:
                raise ValueError(
                    f"cannot multiply a {rows}x{cols} matrix by a {len(other)}-vector"
                )
            return Vector(sum(a * b for a, b in zip(row, other)) for row in self._data)
        return NotImplemented

    def __str__(self):
        lines = ("\t" + "\t".join(f"{v:g}" for v in row) for row in self._data)
        return "[" + "\n".join(lines) + "\t]"

    def rows(self):
        """Return the rows as a list of tuples."""
        return [tuple(row) for row in self._data]


def mat4(values):
    """Build a 4x4 matrix from 16 row-major values."""
    return Matrix(values, 4, 4)


def identity(size=4):
    """Return the size x size identity matrix."""
    return Matrix(
        (1.0 if i == j else 0.0 for i in range(size) for j in range(size)), size, size
    )