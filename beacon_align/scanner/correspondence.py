"""
Correspondence solver: recovers the rigid transform between two scanners.

Two reports are matched through a triangle of beacons whose three pairwise
distances appear in both. The triangle's normal fixes the rotation, one
matched vertex fixes the translation, and every beacon is then checked
against the candidate transform.
"""

import logging
from dataclasses import dataclass
from itertools import permutations
from math import comb
from typing import Iterator, Mapping, Optional, Sequence, Set, Tuple

import numpy as np

from ..config import MIN_OVERLAP_BEACONS, TRIANGLE_SIZE
from ..geometry import (
    ORIGIN,
    ROTATIONS,
    IDENTITY,
    Matrix3,
    Point3,
    add,
    apply,
    multiply,
    normal_plane,
    subtract,
    transpose,
)
from .distances import DistanceIndex
from .report import ScannerReport

logger = logging.getLogger(__name__)

Triangle = Tuple[Point3, Point3, Point3]


@dataclass(frozen=True)
class RigidTransform:
    """
    Rotation plus translation from frame B into frame A.

    A point p in frame B sits at rotation . p + translation in frame A.
    """
    rotation: Matrix3
    translation: Point3

    def apply(self, point: Point3) -> Point3:
        return add(apply(self.rotation, point), self.translation)

    def compose(self, other: 'RigidTransform') -> 'RigidTransform':
        """Transform that applies `other` first, then `self`."""
        return RigidTransform(
            rotation=multiply(self.rotation, other.rotation),
            translation=self.apply(other.translation),
        )

    def inverse(self) -> 'RigidTransform':
        rotation = transpose(self.rotation)
        back = apply(rotation, self.translation)
        return RigidTransform(rotation=rotation, translation=Point3(-back.x, -back.y, -back.z))

    def as_numpy(self) -> Tuple[np.ndarray, np.ndarray]:
        """Rotation (3 x 3) and translation (3,) as integer arrays."""
        rotation = np.array([row.to_list() for row in self.rotation], dtype=np.int64)
        return rotation, np.array(self.translation.to_list(), dtype=np.int64)


IDENTITY_TRANSFORM = RigidTransform(rotation=IDENTITY, translation=ORIGIN)


def count_matches(transform: RigidTransform, index_a: DistanceIndex, index_b: DistanceIndex) -> int:
    """Number of B beacons that land exactly on an A beacon under `transform`."""
    points_b = index_b.report.as_numpy()
    if len(points_b) == 0:
        return 0
    rotation, translation = transform.as_numpy()
    mapped = points_b @ rotation.T + translation
    beacons_a = {p.to_tuple() for p in index_a.report.beacons}
    return sum(1 for row in mapped.tolist() if tuple(row) in beacons_a)


class CorrespondenceSolver:
    """
    Finds the transform mapping report B's frame into report A's frame.

    Candidates are searched in a fixed order (ascending common distance,
    then pairs in distance map order, then permutations of the B triangle,
    then rotations in group order) and the first one that maps at least
    `min_overlap` beacons wins.
    """

    def __init__(self, rotations: Sequence[Matrix3] = ROTATIONS,
                 min_overlap: int = MIN_OVERLAP_BEACONS):
        """
        Args:
            rotations: Rotations to try, in search order
            min_overlap: Beacons that must coincide to accept a transform
        """
        self.rotations = tuple(rotations)
        self.min_overlap = min_overlap
        # Pairs among the triangle's vertices
        self.min_common_distances = comb(TRIANGLE_SIZE, 2)

    def solve(self, index_a: DistanceIndex, index_b: DistanceIndex) -> Optional[RigidTransform]:
        """
        Align report B onto report A.

        Returns:
            The transform, or None when the reports do not share enough beacons
        """
        common = index_a.common_distances(index_b)
        if len(common) < self.min_common_distances:
            logger.debug(f"Scanners {index_a.scanner_id}/{index_b.scanner_id}: "
                         f"only {len(common)} common distances, no overlap")
            return None

        common_set = set(common)
        for distance in common:
            for p1, p2 in index_a.pairs_at(distance):
                for q1, q2 in index_b.pairs_at(distance):
                    transform = self._solve_from_pair(index_a, index_b, (p1, p2), (q1, q2), common_set)
                    if transform is not None:
                        logger.debug(f"Scanners {index_a.scanner_id}/{index_b.scanner_id}: "
                                     f"aligned with translation {transform.translation}")
                        return transform

        logger.debug(f"Scanners {index_a.scanner_id}/{index_b.scanner_id}: "
                     f"{len(common)} common distances but no consistent transform")
        return None

    def solve_reports(self, report_a: ScannerReport, report_b: ScannerReport) -> Optional[RigidTransform]:
        """Index both reports, then solve."""
        return self.solve(DistanceIndex(report_a), DistanceIndex(report_b))

    def _solve_from_pair(self, index_a: DistanceIndex, index_b: DistanceIndex,
                         pair_a: Tuple[Point3, Point3], pair_b: Tuple[Point3, Point3],
                         common: Set[int]) -> Optional[RigidTransform]:
        p1, p2 = pair_a
        for p3 in self._third_points(index_a, p1, p2, common):
            triangle_a = (p1, p2, p3)
            for r1, r2 in index_b.pairs_at(index_a.distance(p1, p3)):
                candidates = {pair_b[0], pair_b[1], r1, r2}
                if len(candidates) != TRIANGLE_SIZE:
                    continue
                for triangle_b in self._matching_orderings(index_a, index_b, triangle_a, candidates):
                    transform = self._fit(triangle_a, triangle_b)
                    if transform is None:
                        continue
                    if count_matches(transform, index_a, index_b) >= self.min_overlap:
                        return transform
        return None

    @staticmethod
    def _third_points(index_a: DistanceIndex, p1: Point3, p2: Point3,
                      common: Set[int]) -> Iterator[Point3]:
        """Points p3 of A whose distance to p1 is also a common distance."""
        for (p, q), distance in index_a.distances.items():
            if distance not in common:
                continue
            if p == p1 and q != p2:
                yield q
            elif q == p1 and p != p2:
                yield p

    @staticmethod
    def _matching_orderings(index_a: DistanceIndex, index_b: DistanceIndex,
                            triangle_a: Triangle, candidates: Set[Point3]) -> Iterator[Triangle]:
        """Orderings of the B points whose edge lengths match triangle_a's."""
        p1, p2, p3 = triangle_a
        wanted = (index_a.distance(p1, p2), index_a.distance(p1, p3), index_a.distance(p2, p3))
        for q1, q2, q3 in permutations(sorted(candidates)):
            found = (index_b.distance(q1, q2), index_b.distance(q1, q3), index_b.distance(q2, q3))
            if found == wanted:
                yield (q1, q2, q3)

    def _fit(self, triangle_a: Triangle, triangle_b: Triangle) -> Optional[RigidTransform]:
        """Rotation and translation carrying triangle_b onto triangle_a."""
        p1, p2, p3 = triangle_a
        q1, q2, q3 = triangle_b

        normal_a = normal_plane(p1, p2, p3)
        if normal_a == ORIGIN:
            # Collinear points leave the rotation about their line free
            return None
        normal_b = normal_plane(q1, q2, q3)

        edges_a = (subtract(p2, p1), subtract(p3, p1))
        edges_b = (subtract(q2, q1), subtract(q3, q1))
        for rotation in self.rotations:
            if apply(rotation, normal_b) != normal_a:
                continue
            if all(apply(rotation, eb) == ea for ea, eb in zip(edges_a, edges_b)):
                return RigidTransform(rotation=rotation, translation=subtract(p1, apply(rotation, q1)))
        return None


def find_rotation_and_translation(reports: Mapping[int, ScannerReport], scanner_a: int, scanner_b: int,
                                  solver: Optional[CorrespondenceSolver] = None) -> Optional[RigidTransform]:
    """
    Transform mapping scanner_b's frame into scanner_a's frame, or None.

    Args:
        reports: Reports keyed by scanner id
        scanner_a: Reference scanner
        scanner_b: Scanner to align
        solver: Solver to use (default settings if omitted)
    """
    solver = solver or CorrespondenceSolver()
    return solver.solve_reports(reports[scanner_a], reports[scanner_b])
