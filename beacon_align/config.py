"""
Configuration for beacon alignment and the cuboid reactor.
Thresholds, search budgets and logging defaults.
"""

import logging

# =============================================================================
# Scanner Alignment
# =============================================================================

MIN_OVERLAP_BEACONS = 12  # Beacons two scanners must share to be aligned
TRIANGLE_SIZE = 3         # Points needed to fix rotation and translation

# Pairwise matching runs on a thread pool (one task per report pair)
MAX_WORKERS = 4

# =============================================================================
# Cuboid Reactor
# =============================================================================

# Upper bound on signed cuboids tracked by the reactor
REACTOR_NODE_BUDGET = 1_000_000

# Initialization region (inclusive ranges for x, y, z)
INITIALIZATION_REGION = ((-50, 50), (-50, 50), (-50, 50))

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = logging.INFO
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'
PACKAGE_LOGGER = 'beacon_align'
