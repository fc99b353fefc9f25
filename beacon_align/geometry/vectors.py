"""
Integer 3D vectors and 3x3 matrices.

Point3 doubles as an absolute beacon position and as an offset vector.
Matrix3 is a tuple of three Point3 rows.
"""

import numbers
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from ..exceptions import MalformedInputError


def is_integer(value) -> bool:
    """True for Python and numpy integers; bool is an int subclass but never a coordinate."""
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


@dataclass(frozen=True, order=True)
class Point3:
    """An integer point (x, y, z)."""
    x: int
    y: int
    z: int

    @classmethod
    def from_sequence(cls, values: Sequence) -> 'Point3':
        """
        Build a point from a 3-element sequence of integers.

        Raises:
            MalformedInputError: if the sequence is not three integers
        """
        if len(values) != 3:
            raise MalformedInputError(f"Expected 3 coordinates, got {len(values)}: {values!r}")
        if not all(is_integer(value) for value in values):
            raise MalformedInputError(f"Non-integer coordinate in {values!r}")
        return cls(*(int(value) for value in values))

    def to_tuple(self) -> Tuple[int, int, int]:
        """Return point as (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    def to_list(self) -> List[int]:
        """Return point as [x, y, z] list."""
        return [self.x, self.y, self.z]

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_tuple())

    def __getitem__(self, index: int) -> int:
        return self.to_tuple()[index]

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"


ORIGIN = Point3(0, 0, 0)

Matrix3 = Tuple[Point3, Point3, Point3]


def matrix_from_rows(rows: Sequence[Sequence[int]]) -> Matrix3:
    """
    Build a Matrix3 from three integer rows.

    Raises:
        MalformedInputError: if rows is not 3x3 integers
    """
    if len(rows) != 3:
        raise MalformedInputError(f"Expected 3 rows, got {len(rows)}")
    return tuple(Point3.from_sequence(list(row)) for row in rows)


def add(a: Point3, b: Point3) -> Point3:
    return Point3(a.x + b.x, a.y + b.y, a.z + b.z)


def subtract(a: Point3, b: Point3) -> Point3:
    return Point3(a.x - b.x, a.y - b.y, a.z - b.z)


def dot(a: Point3, b: Point3) -> int:
    return sum(u * v for u, v in zip(a, b))


def cross(a: Point3, b: Point3) -> Point3:
    """Standard 3D cross product a x b."""
    return Point3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def normal_plane(p1: Point3, p2: Point3, p3: Point3) -> Point3:
    """
    Normal of the triangle (p1, p2, p3) from its two edges out of p1.

    Zero when the three points are collinear.
    """
    return cross(subtract(p2, p1), subtract(p3, p1))


def apply(matrix: Matrix3, v: Point3) -> Point3:
    """Row-major matrix-vector product."""
    return Point3(dot(matrix[0], v), dot(matrix[1], v), dot(matrix[2], v))


def transpose(matrix: Matrix3) -> Matrix3:
    row1, row2, row3 = matrix
    return (
        Point3(row1.x, row2.x, row3.x),
        Point3(row1.y, row2.y, row3.y),
        Point3(row1.z, row2.z, row3.z),
    )


def multiply(m1: Matrix3, m2: Matrix3) -> Matrix3:
    """
    Matrix product m1 . m2.

    Each column of m2 is transformed by m1; the results are the columns
    of the product.
    """
    columns = tuple(apply(m1, column) for column in transpose(m2))
    return transpose(columns)


def negate(matrix: Matrix3) -> Matrix3:
    return tuple(Point3(-row.x, -row.y, -row.z) for row in matrix)


def determinant(matrix: Matrix3) -> int:
    (a, b, c), (d, e, f), (g, h, i) = matrix
    return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


def manhattan_distance(p: Point3, q: Point3) -> int:
    return sum(abs(c) for c in subtract(p, q))


def euclidean_distance_squared(p: Point3, q: Point3) -> int:
    delta = subtract(p, q)
    return dot(delta, delta)
