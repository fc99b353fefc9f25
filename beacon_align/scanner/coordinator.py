"""
Alignment coordinator that chains pairwise transforms into one beacon map.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..config import MAX_WORKERS
from ..exceptions import AlignmentError, MalformedInputError
from ..geometry import Point3, manhattan_distance
from .correspondence import IDENTITY_TRANSFORM, CorrespondenceSolver, RigidTransform
from .distances import DistanceIndex
from .report import ScannerReport

logger = logging.getLogger(__name__)

ScannerPair = Tuple[int, int]


class AlignmentState(Enum):
    """Coordinator state enumeration."""
    IDLE = "idle"
    MATCHING = "matching"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass
class AlignmentProgress:
    """Current assembly progress information."""
    state: AlignmentState
    located: int
    total: int

    def to_dict(self) -> dict:
        """Plain-dict snapshot for progress listeners and log lines."""
        return {
            'state': self.state.value,
            'located': self.located,
            'total': self.total,
            'progress_percent': (self.located / self.total * 100) if self.total > 0 else 0
        }


@dataclass(frozen=True)
class ScanMap:
    """
    All scanners and beacons expressed in the reference scanner's frame.

    transforms maps each scanner id to the transform from its frame into
    the reference frame; the translation is the scanner's position.
    """
    reference_id: Optional[int]
    transforms: Dict[int, RigidTransform] = field(default_factory=dict)
    beacons: FrozenSet[Point3] = field(default_factory=frozenset)

    @property
    def beacon_count(self) -> int:
        return len(self.beacons)

    @property
    def scanner_positions(self) -> Dict[int, Point3]:
        return {scanner_id: t.translation for scanner_id, t in self.transforms.items()}

    def max_scanner_distance(self) -> int:
        """Largest Manhattan distance between any two scanners (0 for fewer than two)."""
        positions = list(self.scanner_positions.values())
        return max((manhattan_distance(p, q) for p, q in combinations(positions, 2)), default=0)


class AlignmentCoordinator:
    """
    Coordinates pairwise matching across a set of scanner reports.

    Each report is indexed once. Report pairs are independent, so matching
    runs on a thread pool; the indexes are read-only and shared.
    """

    def __init__(self, reports: Iterable[ScannerReport],
                 solver: Optional[CorrespondenceSolver] = None,
                 max_workers: int = MAX_WORKERS):
        """
        Args:
            reports: Scanner reports, with distinct scanner ids
            solver: Correspondence solver (default settings if omitted)
            max_workers: Thread pool size for pairwise matching

        Raises:
            MalformedInputError: if two reports share a scanner id
        """
        self.reports: Dict[int, ScannerReport] = {}
        for report in reports:
            if report.scanner_id in self.reports:
                raise MalformedInputError(f"Duplicate scanner id {report.scanner_id}")
            self.reports[report.scanner_id] = report

        self.solver = solver or CorrespondenceSolver()
        self.max_workers = max_workers

        self._indexes: Dict[int, DistanceIndex] = {
            scanner_id: DistanceIndex(report) for scanner_id, report in self.reports.items()
        }
        self._state = AlignmentState.IDLE
        self._located = 0
        self._on_progress: List[Callable[[AlignmentProgress], None]] = []

        logger.info(f"Indexed {len(self.reports)} scanner reports")

    def match_pair(self, scanner_a: int, scanner_b: int) -> Optional[RigidTransform]:
        """Transform from scanner_b's frame into scanner_a's frame, or None."""
        return self.solver.solve(self._indexes[scanner_a], self._indexes[scanner_b])

    def match_pairs(self, pairs: Optional[Iterable[ScannerPair]] = None) -> Dict[ScannerPair, RigidTransform]:
        """
        Match report pairs concurrently.

        Args:
            pairs: (a, b) scanner id pairs; every unordered pair if omitted

        Returns:
            Transforms for the pairs that overlap, keyed by (a, b)
        """
        if pairs is None:
            pairs = combinations(sorted(self.reports), 2)
        pairs = list(pairs)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            results = list(executor.map(lambda pair: self.match_pair(*pair), pairs))

        matches = {pair: result for pair, result in zip(pairs, results) if result is not None}
        logger.info(f"Matched {len(matches)} of {len(pairs)} scanner pairs")
        return matches

    def assemble(self) -> ScanMap:
        """
        Place every scanner in the frame of the lowest scanner id.

        Breadth-first: each newly located scanner is matched against the
        scanners not yet located.

        Raises:
            AlignmentError: if some scanners share no overlap chain with the reference
        """
        if not self.reports:
            return ScanMap(reference_id=None)

        reference_id = min(self.reports)
        transforms: Dict[int, RigidTransform] = {reference_id: IDENTITY_TRANSFORM}
        frontier = [reference_id]
        self._located = 1
        self._set_state(AlignmentState.MATCHING)

        while frontier:
            next_frontier = []
            for located_id in frontier:
                unlocated = [s for s in sorted(self.reports) if s not in transforms]
                if not unlocated:
                    break
                matches = self.match_pairs((located_id, other) for other in unlocated)
                for (_, other), transform in sorted(matches.items()):
                    transforms[other] = transforms[located_id].compose(transform)
                    next_frontier.append(other)
                    logger.debug(f"Scanner {other} located via {located_id} at {transforms[other].translation}")
                self._located = len(transforms)
                self._notify_progress()
            frontier = next_frontier

        unreachable = set(self.reports) - set(transforms)
        if unreachable:
            self._set_state(AlignmentState.ERROR)
            raise AlignmentError(unreachable)

        beacons = frozenset(
            transforms[scanner_id].apply(beacon)
            for scanner_id, report in self.reports.items()
            for beacon in report.beacons
        )
        self._set_state(AlignmentState.COMPLETE)
        logger.info(f"Assembled {len(transforms)} scanners, {len(beacons)} unique beacons")
        return ScanMap(reference_id=reference_id, transforms=transforms, beacons=beacons)

    def _set_state(self, state: AlignmentState):
        """Set coordinator state."""
        old_state = self._state
        self._state = state
        if old_state != state:
            logger.info(f"Alignment state: {old_state.value} -> {state.value}")
            self._notify_progress()

    def _notify_progress(self):
        """Notify listeners of current progress."""
        progress = self.get_progress()
        for callback in self._on_progress:
            try:
                callback(progress)
            except Exception as e:
                logger.error(f"Error in progress callback: {e}")

    def get_progress(self) -> AlignmentProgress:
        """Get current assembly progress."""
        return AlignmentProgress(state=self._state, located=self._located, total=len(self.reports))

    def get_state(self) -> AlignmentState:
        """Get current coordinator state."""
        return self._state

    def on_progress(self, callback: Callable[[AlignmentProgress], None]):
        """Register callback for progress updates."""
        self._on_progress.append(callback)
