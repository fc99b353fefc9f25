"""
Scanner report: the beacons one scanner observed in its own frame.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from ..geometry import Point3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScannerReport:
    """
    Beacon positions reported by a single scanner.

    Positions are relative to the scanner, in its own unrotated frame.
    Duplicate positions collapse into one beacon.
    """
    scanner_id: int
    beacons: FrozenSet[Point3] = field(default_factory=frozenset)

    @classmethod
    def from_points(cls, scanner_id: int, points: Iterable[Sequence[int]]) -> 'ScannerReport':
        """
        Build a report from raw coordinate triples.

        Args:
            scanner_id: Index of the scanner
            points: Iterable of (x, y, z) integer sequences or Point3 values

        Raises:
            MalformedInputError: if any triple is malformed
        """
        beacons = []
        for point in points:
            if not isinstance(point, Point3):
                point = Point3.from_sequence(list(point))
            beacons.append(point)

        unique = frozenset(beacons)
        if len(unique) != len(beacons):
            logger.warning(f"Scanner {scanner_id}: dropped {len(beacons) - len(unique)} duplicate beacons")
        return cls(scanner_id=scanner_id, beacons=unique)

    def sorted_beacons(self) -> List[Point3]:
        """Beacons in ascending (x, y, z) order."""
        return sorted(self.beacons)

    def as_numpy(self) -> np.ndarray:
        """
        Get beacons as numpy array (N x 3), in sorted order.

        Returns:
            Integer array of shape (N, 3) with x, y, z columns
        """
        if not self.beacons:
            return np.zeros((0, 3), dtype=np.int64)
        return np.array([p.to_list() for p in self.sorted_beacons()], dtype=np.int64)

    def get_bounds(self) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
        """
        Get the bounding box of the report.

        Returns:
            Tuple of (min_point, max_point) where each is (x, y, z)
        """
        if not self.beacons:
            return ((0, 0, 0), (0, 0, 0))

        points = self.as_numpy()
        min_pt = tuple(int(v) for v in points.min(axis=0))
        max_pt = tuple(int(v) for v in points.max(axis=0))
        return (min_pt, max_pt)

    def __len__(self) -> int:
        return len(self.beacons)

    def __iter__(self) -> Iterator[Point3]:
        return iter(self.sorted_beacons())

    def __contains__(self, point: object) -> bool:
        return point in self.beacons
