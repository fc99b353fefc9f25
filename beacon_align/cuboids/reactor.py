"""
Reactor: union volume of cuboids switched on and off in sequence.

Volume is kept as a weighted sum of cuboids (inclusion-exclusion). Each new
step cancels its overlap with every weighted cuboid already present; an "on"
step then adds itself with weight +1.
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import Dict, Iterable, Optional, Sequence

from ..config import INITIALIZATION_REGION, REACTOR_NODE_BUDGET
from ..exceptions import SearchExhausted
from .cuboid import Cuboid, overlap

logger = logging.getLogger(__name__)


class Reactor:
    """
    Tracks which cells are on after a sequence of cuboid steps.
    """

    def __init__(self, node_budget: int = REACTOR_NODE_BUDGET):
        """
        Args:
            node_budget: Maximum number of weighted cuboids kept
        """
        self.node_budget = node_budget
        # Keys are normalized to on=True; the weight carries the sign
        self._weights: Dict[Cuboid, int] = {}
        self._steps = 0

    def apply(self, step: Cuboid):
        """
        Switch the cells of `step` on or off.

        Raises:
            SearchExhausted: if the weighted cuboids would exceed the node budget
        """
        key = replace(step, on=True)
        updates = Counter()
        for cuboid, weight in self._weights.items():
            shared = overlap(cuboid, key)
            if shared is not None:
                updates[shared] -= weight
        if step.on:
            updates[key] += 1

        merged = dict(self._weights)
        for cuboid, delta in updates.items():
            weight = merged.get(cuboid, 0) + delta
            if weight:
                merged[cuboid] = weight
            else:
                merged.pop(cuboid, None)

        if len(merged) > self.node_budget:
            logger.warning(f"Reactor exceeded node budget at step {self._steps}: {len(merged)} cuboids")
            raise SearchExhausted(self.node_budget)

        self._weights = merged
        self._steps += 1

    def run(self, steps: Iterable[Cuboid], region: Optional[Cuboid] = None) -> int:
        """
        Apply every step and return the lit volume.

        Args:
            steps: Cuboid steps in order
            region: If given, only cells inside this cuboid are considered
        """
        for step in steps:
            if region is not None:
                step = overlap(step, region)
                if step is None:
                    continue
            self.apply(step)
        logger.info(f"Reactor: {self._steps} steps applied, {len(self._weights)} weighted cuboids, "
                     f"volume {self.volume}")
        return self.volume

    @property
    def volume(self) -> int:
        """Number of cells currently on."""
        return sum(weight * cuboid.volume for cuboid, weight in self._weights.items())

    @property
    def node_count(self) -> int:
        return len(self._weights)

    def __len__(self) -> int:
        return self._steps


def region_cuboid(ranges: Sequence[Sequence[int]] = INITIALIZATION_REGION) -> Cuboid:
    """Cuboid covering the given (x, y, z) ranges."""
    return Cuboid.from_ranges(True, *ranges)


def reboot(steps: Iterable[Cuboid], region: Optional[Cuboid] = None,
           node_budget: int = REACTOR_NODE_BUDGET) -> int:
    """Lit volume after running `steps` through a fresh reactor."""
    return Reactor(node_budget=node_budget).run(steps, region=region)


def initialize(steps: Iterable[Cuboid], node_budget: int = REACTOR_NODE_BUDGET) -> int:
    """Lit volume inside the initialization region only."""
    return reboot(steps, region=region_cuboid(), node_budget=node_budget)
