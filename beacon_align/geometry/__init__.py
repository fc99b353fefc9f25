"""
Integer vector algebra and the axis-aligned rotation group.
"""

from .vectors import (
    Point3,
    is_integer,
    Matrix3,
    ORIGIN,
    matrix_from_rows,
    add,
    subtract,
    dot,
    cross,
    normal_plane,
    apply,
    multiply,
    negate,
    transpose,
    determinant,
    manhattan_distance,
    euclidean_distance_squared,
)
from .rotations import (
    IDENTITY,
    ROTATION_X,
    ROTATION_Y,
    ROTATION_Z,
    GENERATORS,
    ROTATIONS,
    axis_powers,
    generate_rotations,
)

__all__ = [
    'Point3', 'is_integer', 'Matrix3', 'ORIGIN', 'matrix_from_rows',
    'add', 'subtract', 'dot', 'cross', 'normal_plane',
    'apply', 'multiply', 'negate', 'transpose', 'determinant',
    'manhattan_distance', 'euclidean_distance_squared',
    'IDENTITY', 'ROTATION_X', 'ROTATION_Y', 'ROTATION_Z',
    'GENERATORS', 'ROTATIONS', 'axis_powers', 'generate_rotations',
]
