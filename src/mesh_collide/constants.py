# MIT License (see LICENSE)
"""
Numeric defaults used throughout the collision core.

These are defaults only; per-query values are carried by CollisionConfig.
"""
from __future__ import annotations

# Squared-norm threshold below which a candidate separating axis is treated
# as degenerate. A near-zero axis (e.g. the cross product of two parallel
# edges) carries no separating information and must never reject a pair.
DEFAULT_AXIS_EPS: float = 1e-8

# Number of triangles of mesh A handed to each narrow-phase task.
DEFAULT_CHUNK_SIZE: int = 32

# Tolerance used when checking that a rotation matrix is orthonormal.
ROTATION_TOL: float = 1e-6

# Upper bound on triangle pairs evaluated by one batched SAT call. Bounds the
# temporary arrays (about 1 KiB per pair) and sets how often a narrow-phase
# task checks for early termination.
PAIR_BLOCK: int = 16384
