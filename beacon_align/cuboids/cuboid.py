"""
Axis-aligned cuboids and their geometric primitives.

A cuboid covers inclusive integer ranges on x, y and z. Vertices, edges and
faces are derived on demand.
"""

import logging
from dataclasses import dataclass, replace
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from ..exceptions import MalformedInputError
from ..geometry import Point3, is_integer

logger = logging.getLogger(__name__)

Range = Tuple[int, int]
Edge = Tuple[Point3, Point3]
Face = Tuple[Point3, Point3, Point3, Point3]


@dataclass(frozen=True)
class Cuboid:
    """An axis-aligned box switched on or off."""
    x: Range
    y: Range
    z: Range
    on: bool = True

    @classmethod
    def from_ranges(cls, on: bool, x: Sequence[int], y: Sequence[int], z: Sequence[int]) -> 'Cuboid':
        """
        Build a cuboid from three (start, end) ranges.

        Raises:
            MalformedInputError: if a range is not two integers with start <= end
        """
        ranges = []
        for name, bounds in (('x', x), ('y', y), ('z', z)):
            if len(bounds) != 2 or not all(is_integer(b) for b in bounds):
                raise MalformedInputError(f"{name} range must be two integers, got {bounds!r}")
            start, end = (int(b) for b in bounds)
            if start > end:
                raise MalformedInputError(f"{name} range is inverted: {start}..{end}")
            ranges.append((start, end))
        return cls(*ranges, on=bool(on))

    @property
    def coords(self) -> Tuple[Range, Range, Range]:
        return (self.x, self.y, self.z)

    @property
    def volume(self) -> int:
        """Number of integer cells covered."""
        return ((self.x[1] - self.x[0] + 1)
                * (self.y[1] - self.y[0] + 1)
                * (self.z[1] - self.z[0] + 1))

    def __str__(self) -> str:
        mode = 'on' if self.on else 'off'
        return f"{mode} x={self.x[0]}..{self.x[1]},y={self.y[0]}..{self.y[1]},z={self.z[0]}..{self.z[1]}"


def vertices(cuboid: Cuboid) -> List[Point3]:
    """The 8 corners, x-major, then y, then z."""
    return [Point3(x, y, z) for x in cuboid.x for y in cuboid.y for z in cuboid.z]


def distinct_vertices(cuboid: Cuboid) -> List[Point3]:
    """
    Corners without repeats.

    A cuboid one cell thick on some axis has coincident corners: a flat
    cuboid has 4, a line 2, a single cell 1.
    """
    return list(dict.fromkeys(vertices(cuboid)))


def edges(cuboid: Cuboid) -> List[Edge]:
    """
    Vertex pairs joined by a cuboid edge.

    Of all pairs of distinct corners, an edge differs on exactly one axis;
    face and body diagonals differ on more. A flat cuboid has 4 edges, a
    line 1 and a single cell none.
    """
    return [
        (a, b) for a, b in combinations(distinct_vertices(cuboid), 2)
        if sum(1 for u, v in zip(a, b) if u != v) == 1
    ]


def faces(cuboid: Cuboid) -> List[Face]:
    """
    Groups of 4 distinct corners sharing one coordinate value.

    A flat cuboid is its own single face; lines and single cells have none.
    """
    return [
        group for group in combinations(distinct_vertices(cuboid), 4)
        if any(len({v[axis] for v in group}) == 1 for axis in range(3))
    ]


def point_within(cuboid: Cuboid, point: Point3) -> bool:
    """Inclusive containment test on all three axes."""
    return (cuboid.x[0] <= point.x <= cuboid.x[1]
            and cuboid.y[0] <= point.y <= cuboid.y[1]
            and cuboid.z[0] <= point.z <= cuboid.z[1])


def edge_intersects_face(edge: Edge, face: Sequence[Point3]) -> bool:
    """
    Whether an edge passes through a face rather than just touching it.

    The edge varies along exactly one axis. The face must be constant on
    that axis, the edge's other two coordinates must fall inside the face
    rectangle (inclusive), and the edge's endpoints must lie strictly on
    either side of the face plane.
    """
    start, end = edge
    varying = [axis for axis in range(3) if start[axis] != end[axis]]
    if len(varying) != 1:
        return False
    axis = varying[0]

    plane = {v[axis] for v in face}
    if len(plane) != 1:
        return False
    face_coord = plane.pop()

    for other in (i for i in range(3) if i != axis):
        lo = min(v[other] for v in face)
        hi = max(v[other] for v in face)
        if not lo <= start[other] <= hi:
            return False

    low, high = sorted((start[axis], end[axis]))
    return low < face_coord < high


def cuboids_intersection(cuboid1: Cuboid, cuboid2: Cuboid) -> List[Tuple[Edge, Face]]:
    """
    Edges of cuboid1 that pass through faces of cuboid2.

    Does not report total containment; see contains().
    """
    return [
        (edge, face)
        for edge in edges(cuboid1)
        for face in faces(cuboid2)
        if edge_intersects_face(edge, face)
    ]


def contains(outer: Cuboid, inner: Cuboid) -> bool:
    """True when every corner of inner lies within outer."""
    return all(point_within(outer, v) for v in vertices(inner))


def overlap(cuboid1: Cuboid, cuboid2: Cuboid) -> Optional[Cuboid]:
    """
    The cuboid shared by both, with cuboid1's mode, or None if disjoint.
    """
    ranges = []
    for (start1, end1), (start2, end2) in zip(cuboid1.coords, cuboid2.coords):
        start, end = max(start1, start2), min(end1, end2)
        if start > end:
            return None
        ranges.append((start, end))
    return replace(cuboid1, x=ranges[0], y=ranges[1], z=ranges[2])
