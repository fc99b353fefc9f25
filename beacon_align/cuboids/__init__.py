"""
Cuboid primitives and the on/off reactor.
"""

from .cuboid import (
    Cuboid,
    vertices,
    distinct_vertices,
    edges,
    faces,
    point_within,
    edge_intersects_face,
    cuboids_intersection,
    contains,
    overlap,
)
from .reactor import Reactor, reboot, initialize, region_cuboid

__all__ = [
    'Cuboid', 'vertices', 'distinct_vertices', 'edges', 'faces', 'point_within',
    'edge_intersects_face', 'cuboids_intersection', 'contains', 'overlap',
    'Reactor', 'reboot', 'initialize', 'region_cuboid',
]
