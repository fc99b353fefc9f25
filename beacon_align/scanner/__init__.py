"""
Scanner modules for indexing reports, matching pairs and assembling the beacon map.
"""

from .report import ScannerReport
from .distances import DistanceIndex, build_distance_map, invert_distance_map, lookup
from .correspondence import (
    RigidTransform,
    IDENTITY_TRANSFORM,
    CorrespondenceSolver,
    count_matches,
    find_rotation_and_translation,
)
from .coordinator import AlignmentCoordinator, AlignmentProgress, AlignmentState, ScanMap

__all__ = [
    'ScannerReport',
    'DistanceIndex', 'build_distance_map', 'invert_distance_map', 'lookup',
    'RigidTransform', 'IDENTITY_TRANSFORM', 'CorrespondenceSolver',
    'count_matches', 'find_rotation_and_translation',
    'AlignmentCoordinator', 'AlignmentProgress', 'AlignmentState', 'ScanMap',
]
