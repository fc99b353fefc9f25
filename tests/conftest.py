"""
Shared test fixtures for alignment and reactor tests.
"""
import numpy as np
import pytest

from beacon_align.geometry import ROTATIONS, Point3, apply, subtract, transpose
from beacon_align.scanner import RigidTransform, ScannerReport


def random_beacons(rng, count, spread=1000, exclude=()):
    """`count` distinct random integer points in [-spread, spread]^3."""
    taken = set(exclude)
    points = []
    while len(points) < count:
        candidate = Point3(*(int(v) for v in rng.integers(-spread, spread + 1, size=3)))
        if candidate not in taken:
            taken.add(candidate)
            points.append(candidate)
    return points


def observe(scanner_id, world_points, transform):
    """Report of `world_points` as seen by a scanner placed by `transform`.

    `transform` maps the scanner's frame into the world frame.
    """
    back = transpose(transform.rotation)
    local = [apply(back, subtract(p, transform.translation)) for p in world_points]
    return ScannerReport.from_points(scanner_id, local)


@pytest.fixture
def rng():
    """Seeded generator so every run sees the same beacons."""
    return np.random.default_rng(19)


@pytest.fixture
def placement():
    """Where scanner B sits relative to scanner A."""
    return RigidTransform(rotation=ROTATIONS[17], translation=Point3(68, -1246, -43))


@pytest.fixture
def overlapping_reports(rng, placement):
    """Scanner 0 (world frame) and scanner 1 sharing exactly 12 beacons."""
    shared = random_beacons(rng, 12)
    only_a = random_beacons(rng, 13, exclude=shared)
    only_b = random_beacons(rng, 13, exclude=shared + only_a)

    report_a = ScannerReport.from_points(0, shared + only_a)
    report_b = observe(1, shared + only_b, placement)
    return report_a, report_b, shared


@pytest.fixture
def disjoint_reports(rng):
    """Two scanners with no beacon in common."""
    beacons_a = random_beacons(rng, 25)
    beacons_b = random_beacons(rng, 25, exclude=beacons_a)
    return ScannerReport.from_points(0, beacons_a), ScannerReport.from_points(1, beacons_b)


@pytest.fixture
def scanner_chain(rng):
    """Three scanners: 0 overlaps 1, 1 overlaps 2, 0 and 2 share nothing.

    Returns the reports, the world placement of each scanner and the
    full set of world beacons.
    """
    placements = {
        0: RigidTransform(rotation=ROTATIONS[0], translation=Point3(0, 0, 0)),
        1: RigidTransform(rotation=ROTATIONS[5], translation=Point3(1105, -1205, 1229)),
        2: RigidTransform(rotation=ROTATIONS[22], translation=Point3(-92, -2380, -20)),
    }
    shared_01 = random_beacons(rng, 12)
    shared_12 = random_beacons(rng, 12, exclude=shared_01)
    only_0 = random_beacons(rng, 10, exclude=shared_01 + shared_12)
    only_2 = random_beacons(rng, 10, exclude=shared_01 + shared_12 + only_0)

    world = {
        0: shared_01 + only_0,
        1: shared_01 + shared_12,
        2: shared_12 + only_2,
    }
    reports = [observe(i, world[i], placements[i]) for i in sorted(world)]
    beacons = set(shared_01 + shared_12 + only_0 + only_2)
    return reports, placements, beacons
