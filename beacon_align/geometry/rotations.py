"""
The 24 proper rotations that map the integer lattice onto itself.

The group is generated from a quarter turn about each axis:

      (0 -1 0)     (0 0 -1)     (1 0  0)
    z (1  0 0)   y (0 1  0)   x (0 0 -1)
      (0  0 1)     (1 0  0)     (0 1  0)

Negating a 3x3 rotation flips its determinant to -1, which is a reflection,
so the group is closed under multiplication only.
"""

import logging
from typing import List, Sequence, Tuple

from ..exceptions import BeaconAlignError
from .vectors import Matrix3, determinant, matrix_from_rows, multiply

logger = logging.getLogger(__name__)

IDENTITY: Matrix3 = matrix_from_rows([[1, 0, 0], [0, 1, 0], [0, 0, 1]])

ROTATION_X: Matrix3 = matrix_from_rows([[1, 0, 0], [0, 0, -1], [0, 1, 0]])
ROTATION_Y: Matrix3 = matrix_from_rows([[0, 0, -1], [0, 1, 0], [1, 0, 0]])
ROTATION_Z: Matrix3 = matrix_from_rows([[0, -1, 0], [1, 0, 0], [0, 0, 1]])

GENERATORS: Tuple[Matrix3, ...] = (ROTATION_X, ROTATION_Y, ROTATION_Z)

GROUP_ORDER = 24


def axis_powers(generator: Matrix3) -> List[Matrix3]:
    """Return g, g^2 and g^3 (g^4 is the identity)."""
    square = multiply(generator, generator)
    return [generator, square, multiply(square, generator)]


def generate_rotations(generators: Sequence[Matrix3] = GENERATORS) -> Tuple[Matrix3, ...]:
    """
    Enumerate the rotation group in a fixed order.

    Breadth-first from the identity: each level multiplies the previous
    level by every axis power, x powers first, then y, then z. The order
    is what makes "first matching rotation" reproducible.

    Raises:
        BeaconAlignError: if the generators do not close to the 24 proper rotations
    """
    powers = [power for generator in generators for power in axis_powers(generator)]

    found = [IDENTITY]
    seen = {IDENTITY}
    frontier = [IDENTITY]
    while frontier:
        next_frontier = []
        for matrix in frontier:
            for power in powers:
                product = multiply(power, matrix)
                if product not in seen:
                    seen.add(product)
                    found.append(product)
                    next_frontier.append(product)
        frontier = next_frontier

    if len(found) != GROUP_ORDER or any(determinant(m) != 1 for m in found):
        raise BeaconAlignError(f"Expected {GROUP_ORDER} proper rotations, got {len(found)}")

    logger.debug(f"Generated {len(found)} rotations")
    return tuple(found)


# Shared, read-only
ROTATIONS: Tuple[Matrix3, ...] = generate_rotations()
