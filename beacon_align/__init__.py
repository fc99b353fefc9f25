"""
Beacon Align - scanner alignment from pairwise distance invariants,
plus a cuboid on/off reactor.
"""

from .exceptions import AlignmentError, BeaconAlignError, MalformedInputError, SearchExhausted
from .geometry import Point3, ROTATIONS
from .scanner import (
    AlignmentCoordinator,
    CorrespondenceSolver,
    DistanceIndex,
    RigidTransform,
    ScanMap,
    ScannerReport,
)
from .cuboids import Cuboid, Reactor
from .logging_config import setup_logging

__version__ = "1.0.0"

__all__ = [
    'AlignmentError', 'BeaconAlignError', 'MalformedInputError', 'SearchExhausted',
    'Point3', 'ROTATIONS',
    'AlignmentCoordinator', 'CorrespondenceSolver', 'DistanceIndex',
    'RigidTransform', 'ScanMap', 'ScannerReport',
    'Cuboid', 'Reactor',
    'setup_logging',
]
