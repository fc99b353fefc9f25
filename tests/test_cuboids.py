"""Tests for cuboid primitives and the reactor."""
import numpy as np
import pytest

from beacon_align.exceptions import MalformedInputError, SearchExhausted
from beacon_align.geometry import Point3
from beacon_align.cuboids import (
    Cuboid,
    Reactor,
    contains,
    cuboids_intersection,
    distinct_vertices,
    edge_intersects_face,
    edges,
    faces,
    initialize,
    overlap,
    point_within,
    reboot,
    vertices,
)

FACE = [Point3(10, 10, 10), Point3(10, 10, 12), Point3(10, 12, 10), Point3(10, 12, 12)]


def lit_cells(steps, lo=-10, hi=10):
    """Count lit cells by brute force on a small grid."""
    size = hi - lo + 1
    grid = np.zeros((size, size, size), dtype=bool)
    for step in steps:
        (x0, x1), (y0, y1), (z0, z1) = step.coords
        grid[x0 - lo:x1 - lo + 1, y0 - lo:y1 - lo + 1, z0 - lo:z1 - lo + 1] = step.on
    return int(grid.sum())


@pytest.fixture
def example_steps():
    return [
        Cuboid.from_ranges(True, (10, 12), (10, 12), (10, 12)),
        Cuboid.from_ranges(True, (11, 13), (11, 13), (11, 13)),
        Cuboid.from_ranges(False, (9, 11), (9, 11), (9, 11)),
        Cuboid.from_ranges(True, (10, 10), (10, 10), (10, 10)),
    ]


class TestCuboid:
    """Test construction and derived geometry."""

    def test_from_ranges(self):
        cuboid = Cuboid.from_ranges(False, (-5, 5), (0, 0), (2, 3))
        assert not cuboid.on
        assert cuboid.volume == 11 * 1 * 2
        assert str(cuboid) == "off x=-5..5,y=0..0,z=2..3"

    def test_inverted_range(self):
        with pytest.raises(MalformedInputError):
            Cuboid.from_ranges(True, (5, -5), (0, 0), (0, 0))

    def test_wrong_arity(self):
        with pytest.raises(MalformedInputError):
            Cuboid.from_ranges(True, (1, 2, 3), (0, 0), (0, 0))

    def test_vertices(self):
        cuboid = Cuboid.from_ranges(True, (0, 1), (0, 2), (0, 3))
        corners = vertices(cuboid)
        assert len(set(corners)) == 8
        assert corners[0] == Point3(0, 0, 0)
        assert corners[-1] == Point3(1, 2, 3)

    def test_edges(self):
        cuboid = Cuboid.from_ranges(True, (0, 1), (0, 2), (0, 3))
        found = edges(cuboid)
        assert len(found) == 12
        for a, b in found:
            assert sum(1 for u, v in zip(a, b) if u != v) == 1

    def test_faces(self):
        cuboid = Cuboid.from_ranges(True, (0, 1), (0, 2), (0, 3))
        found = faces(cuboid)
        assert len(found) == 6
        for face in found:
            assert any(len({v[axis] for v in face}) == 1 for axis in range(3))

    def test_numpy_bounds(self):
        cuboid = Cuboid.from_ranges(True, (np.int64(0), np.int64(2)), (0, 2), (0, 2))
        assert cuboid.volume == 27
        assert type(cuboid.x[0]) is int

    def test_bool_bounds_rejected(self):
        with pytest.raises(MalformedInputError):
            Cuboid.from_ranges(True, (False, True), (0, 0), (0, 0))

    @pytest.mark.parametrize("ranges, corners, edge_count, face_count", [
        (((3, 3), (3, 3), (3, 3)), 1, 0, 0),
        (((0, 4), (3, 3), (3, 3)), 2, 1, 0),
        (((0, 4), (0, 2), (3, 3)), 4, 4, 1),
    ])
    def test_degenerate_cuboids(self, ranges, corners, edge_count, face_count):
        cuboid = Cuboid.from_ranges(True, *ranges)
        assert len(distinct_vertices(cuboid)) == corners
        found = edges(cuboid)
        assert len(found) == edge_count
        assert all(a != b for a, b in found)
        assert len(faces(cuboid)) == face_count

    def test_point_within_vertices(self):
        cuboid = Cuboid.from_ranges(True, (-3, 4), (7, 9), (-1, 0))
        assert all(point_within(cuboid, v) for v in vertices(cuboid))

    def test_point_within_bounds(self):
        cuboid = Cuboid.from_ranges(True, (0, 2), (0, 2), (0, 2))
        assert point_within(cuboid, Point3(1, 1, 1))
        assert not point_within(cuboid, Point3(3, 1, 1))
        assert not point_within(cuboid, Point3(1, -1, 1))


class TestEdgeIntersectsFace:
    """Test edge/face crossing."""

    def test_edge_crosses_face(self):
        assert edge_intersects_face((Point3(-10, 11, 11), Point3(15, 11, 11)), FACE)

    def test_edge_beyond_face(self):
        assert not edge_intersects_face((Point3(15, 11, 11), Point3(25, 11, 11)), FACE)

    def test_reversed_edge(self):
        assert edge_intersects_face((Point3(15, 11, 11), Point3(-10, 11, 11)), FACE)

    def test_edge_touching_face(self):
        assert not edge_intersects_face((Point3(10, 11, 11), Point3(15, 11, 11)), FACE)

    def test_edge_outside_rectangle(self):
        assert not edge_intersects_face((Point3(-10, 13, 11), Point3(15, 13, 11)), FACE)

    def test_edge_on_face_boundary(self):
        assert edge_intersects_face((Point3(-10, 12, 10), Point3(15, 12, 10)), FACE)

    def test_parallel_edge(self):
        assert not edge_intersects_face((Point3(10, 11, 5), Point3(10, 11, 15)), FACE)

    def test_degenerate_edge(self):
        assert not edge_intersects_face((Point3(10, 11, 11), Point3(10, 11, 11)), FACE)


class TestCuboidRelations:
    """Test intersection, containment and overlap."""

    def test_crossing_cuboids(self):
        long_bar = Cuboid.from_ranges(True, (-10, 15), (11, 11), (11, 11))
        box = Cuboid.from_ranges(True, (10, 20), (10, 12), (10, 12))
        hits = cuboids_intersection(long_bar, box)
        assert hits
        assert all(edge_intersects_face(edge, face) for edge, face in hits)

    def test_line_through_plate(self):
        line = Cuboid.from_ranges(True, (0, 10), (2, 2), (2, 2))
        plate = Cuboid.from_ranges(True, (5, 5), (0, 4), (0, 4))
        hits = cuboids_intersection(line, plate)
        assert len(hits) == 1
        (start, end), face = hits[0]
        assert (start, end) == (Point3(0, 2, 2), Point3(10, 2, 2))
        assert {v.x for v in face} == {5}

    def test_disjoint_cuboids(self):
        a = Cuboid.from_ranges(True, (0, 1), (0, 1), (0, 1))
        b = Cuboid.from_ranges(True, (5, 6), (5, 6), (5, 6))
        assert cuboids_intersection(a, b) == []
        assert overlap(a, b) is None

    def test_containment(self):
        outer = Cuboid.from_ranges(True, (0, 10), (0, 10), (0, 10))
        inner = Cuboid.from_ranges(True, (2, 3), (2, 3), (2, 3))
        assert contains(outer, inner)
        assert not contains(inner, outer)
        assert cuboids_intersection(inner, outer) == []

    def test_overlap(self):
        a = Cuboid.from_ranges(False, (0, 5), (0, 5), (0, 5))
        b = Cuboid.from_ranges(True, (3, 9), (-2, 1), (5, 5))
        shared = overlap(a, b)
        assert shared.coords == ((3, 5), (0, 1), (5, 5))
        assert not shared.on


class TestReactor:
    """Test union volume."""

    def test_example(self, example_steps):
        assert reboot(example_steps) == 39

    def test_matches_brute_force(self, rng):
        steps = []
        for _ in range(12):
            ranges = [tuple(sorted(int(v) for v in rng.integers(-10, 11, size=2))) for _ in range(3)]
            steps.append(Cuboid.from_ranges(bool(rng.integers(0, 2)), *ranges))
        assert reboot(steps) == lit_cells(steps)

    def test_off_on_empty(self):
        assert reboot([Cuboid.from_ranges(False, (0, 3), (0, 3), (0, 3))]) == 0

    def test_repeated_on(self):
        step = Cuboid.from_ranges(True, (0, 2), (0, 2), (0, 2))
        reactor = Reactor()
        reactor.run([step, step, step])
        assert reactor.volume == 27
        assert reactor.node_count == 1
        assert len(reactor) == 3

    def test_region(self):
        steps = [
            Cuboid.from_ranges(True, (-60, -51), (0, 0), (0, 0)),
            Cuboid.from_ranges(True, (45, 60), (0, 0), (0, 0)),
        ]
        assert initialize(steps) == 6
        assert reboot(steps) == 26

    def test_node_budget(self):
        reactor = Reactor(node_budget=2)
        reactor.apply(Cuboid.from_ranges(True, (0, 4), (0, 4), (0, 4)))
        with pytest.raises(SearchExhausted):
            reactor.apply(Cuboid.from_ranges(True, (2, 6), (2, 6), (2, 6)))
        assert reactor.volume == 125
