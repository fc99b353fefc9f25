"""
Pairwise distance invariants for a scanner report.

Squared Euclidean distance between two beacons survives any rotation and
translation, so equal distances in two reports hint at shared beacons.
"""

import logging
from itertools import combinations
from typing import Dict, Iterable, List, Tuple

from ..geometry import Point3, euclidean_distance_squared
from .report import ScannerReport

logger = logging.getLogger(__name__)

PointPair = Tuple[Point3, Point3]
DistanceMap = Dict[PointPair, int]
InverseDistanceMap = Dict[int, Tuple[PointPair, ...]]


def build_distance_map(points: Iterable[Point3]) -> DistanceMap:
    """
    Map every unordered pair of distinct points to its squared distance.

    Pairs are generated from the points in sorted order, so each pair is
    stored once with its smaller point first.
    """
    return {
        (p, q): euclidean_distance_squared(p, q)
        for p, q in combinations(sorted(set(points)), 2)
    }


def invert_distance_map(distance_map: DistanceMap) -> InverseDistanceMap:
    """
    Map each distance to every pair realizing it, in distance map order.

    Colliding distances keep all of their pairs; the solver tries each.
    """
    inverse: Dict[int, List[PointPair]] = {}
    for pair, distance in distance_map.items():
        inverse.setdefault(distance, []).append(pair)
    return {distance: tuple(pairs) for distance, pairs in inverse.items()}


def lookup(distance_map: DistanceMap, p: Point3, q: Point3) -> int:
    """
    Order-independent distance lookup.

    Raises:
        KeyError: if (p, q) is not a pair of the map
    """
    if (p, q) in distance_map:
        return distance_map[(p, q)]
    return distance_map[(q, p)]


class DistanceIndex:
    """
    Distance map and inverse distance map of one report.

    Built once; read-only afterward, so indexes can be shared between
    threads matching different report pairs.
    """

    def __init__(self, report: ScannerReport):
        self.report = report
        self.distances: DistanceMap = build_distance_map(report.beacons)
        self.inverse: InverseDistanceMap = invert_distance_map(self.distances)

        ambiguous = sum(1 for pairs in self.inverse.values() if len(pairs) > 1)
        if ambiguous:
            logger.debug(f"Scanner {report.scanner_id}: {ambiguous} distances shared by several pairs")

    @property
    def scanner_id(self) -> int:
        return self.report.scanner_id

    def distance(self, p: Point3, q: Point3) -> int:
        return lookup(self.distances, p, q)

    def pairs_at(self, distance: int) -> Tuple[PointPair, ...]:
        """All pairs at the given distance (empty if none)."""
        return self.inverse.get(distance, ())

    def is_ambiguous(self, distance: int) -> bool:
        return len(self.pairs_at(distance)) > 1

    def common_distances(self, other: 'DistanceIndex') -> List[int]:
        """Distances present in both indexes, ascending."""
        return sorted(self.inverse.keys() & other.inverse.keys())

    def __repr__(self) -> str:
        return (f"DistanceIndex(scanner={self.scanner_id}, pairs={len(self.distances)}, "
                f"distances={len(self.inverse)})")
