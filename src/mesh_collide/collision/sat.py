# MIT License (see LICENSE)
"""
Separating Axis Theorem (SAT) test for triangle-triangle intersection.

Two convex sets are disjoint iff some axis exists onto which their
projections do not overlap. For a pair of triangles in 3D, it suffices to
check 11 candidate axes:

- the two face normals (nU, nV),
- the nine cross products edgeU[i] × edgeV[j].

Key concepts:
- Projection interval: [min, max] of the three vertex dot products.
- Touching intervals count as overlapping, so contact is reported as
  intersection.
- Degenerate axes (|axis|² < eps, e.g. parallel edges) always pass. A
  zero-area triangle therefore may over-report overlap; this is a known
  approximation, biased toward false positives.

Two forms are provided:
- axis_overlap / tri_tri_intersect / separating_axis: one triangle pair,
  short-circuiting on the first separating axis.
- tri_tri_intersect_many: the same 11-axis decision over broadcastable
  stacks of triangles, used by the narrow phase.

Both forms evaluate the same arithmetic in the same order, so they agree on
every pair including exact-touch cases.
"""
from __future__ import annotations

import numpy as np

from ..constants import DEFAULT_AXIS_EPS
from ..util import f64, norm2, dot3, cross3

# Type aliases for clarity
Vec3 = np.ndarray  # Shape (3,), dtype float64
Tri = np.ndarray   # Shape (3, 3): three corners, each [x, y, z]


def axis_overlap(axis: Vec3, tri_u: Tri, tri_v: Tri, eps: float = DEFAULT_AXIS_EPS) -> bool:
    """
    Check whether two triangles' projections overlap on an axis.

    Args:
        axis: Candidate separating axis (need not be normalized).
        tri_u: Corners of triangle U, shape (3, 3).
        tri_v: Corners of triangle V, shape (3, 3).
        eps: Squared-norm threshold for a degenerate axis.

    Returns:
        True if the axis is degenerate or the intervals overlap (touching
        included); False if the axis separates the triangles.
    """
    if norm2(axis) < eps:
        return True

    min_u = max_u = dot3(axis, tri_u[0])
    for i in (1, 2):
        p = dot3(axis, tri_u[i])
        min_u = min(min_u, p)
        max_u = max(max_u, p)

    min_v = max_v = dot3(axis, tri_v[0])
    for i in (1, 2):
        p = dot3(axis, tri_v[i])
        min_v = min(min_v, p)
        max_v = max(max_v, p)

    return not (max_u < min_v or max_v < min_u)


def _candidate_axes(tri_u: Tri, tri_v: Tri):
    """
    Yield the 11 SAT axes lazily, face normals first.

    Edges follow the winding: e0 = v1 - v0, e1 = v2 - v1, e2 = v0 - v2.
    """
    edge_u = (tri_u[1] - tri_u[0], tri_u[2] - tri_u[1], tri_u[0] - tri_u[2])
    edge_v = (tri_v[1] - tri_v[0], tri_v[2] - tri_v[1], tri_v[0] - tri_v[2])

    yield cross3(edge_u[0], edge_u[1])
    yield cross3(edge_v[0], edge_v[1])
    for i in range(3):
        for j in range(3):
            yield cross3(edge_u[i], edge_v[j])


def separating_axis(tri_u, tri_v, eps: float = DEFAULT_AXIS_EPS) -> Vec3 | None:
    """
    Find the first axis that separates two triangles.

    Args:
        tri_u: Corners of triangle U, shape (3, 3).
        tri_v: Corners of triangle V, shape (3, 3).
        eps: Squared-norm threshold for a degenerate axis.

    Returns:
        The (unnormalized) separating axis, or None if all 11 axes overlap.
    """
    tri_u = f64(tri_u)
    tri_v = f64(tri_v)
    for axis in _candidate_axes(tri_u, tri_v):
        if not axis_overlap(axis, tri_u, tri_v, eps):
            return axis
    return None


def tri_tri_intersect(tri_u, tri_v, eps: float = DEFAULT_AXIS_EPS) -> bool:
    """
    Test whether two triangles intersect using the 11-axis SAT.

    Exact for non-degenerate triangles; touching and shared-edge/vertex
    configurations report True.

    Args:
        tri_u: Corners of triangle U, shape (3, 3).
        tri_v: Corners of triangle V, shape (3, 3).
        eps: Squared-norm threshold for a degenerate axis.

    Returns:
        True if no separating axis exists.
    """
    return separating_axis(tri_u, tri_v, eps) is None


# =============================================================================
# Batched kernel
# =============================================================================

def _cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Cross product over the trailing axis, same operation order as cross3."""
    return np.stack([
        a[..., 1] * b[..., 2] - a[..., 2] * b[..., 1],
        a[..., 2] * b[..., 0] - a[..., 0] * b[..., 2],
        a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0],
    ], axis=-1)


def _dot(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Dot product over the trailing axis, same operation order as dot3."""
    return a[..., 0] * b[..., 0] + a[..., 1] * b[..., 1] + a[..., 2] * b[..., 2]


def tri_tri_intersect_many(tris_u, tris_v, eps: float = DEFAULT_AXIS_EPS) -> np.ndarray:
    """
    Vectorized 11-axis SAT over stacks of triangle pairs.

    Shapes broadcast like numpy arrays on the leading (batch) dimensions:
    e.g. tris_u (k, 1, 3, 3) against tris_v (1, m, 3, 3) yields a (k, m)
    result testing every U triangle against every V triangle.

    Args:
        tris_u: Triangle corners, shape (..., 3, 3).
        tris_v: Triangle corners, shape (..., 3, 3).
        eps: Squared-norm threshold for a degenerate axis.

    Returns:
        Boolean array over the broadcast batch shape; True where the pair
        intersects.
    """
    U = np.asarray(tris_u, dtype=np.float64)
    V = np.asarray(tris_v, dtype=np.float64)
    batch = np.broadcast_shapes(U.shape[:-2], V.shape[:-2])

    # Rolling by one corner gives [v1, v2, v0] - [v0, v1, v2] = e0, e1, e2
    edge_u = np.roll(U, -1, axis=-2) - U
    edge_v = np.roll(V, -1, axis=-2) - V

    normal_u = _cross(edge_u[..., 0, :], edge_u[..., 1, :])
    normal_v = _cross(edge_v[..., 0, :], edge_v[..., 1, :])
    # (..., 3, 3, 3) -> (..., 9, 3), row-major over (i, j)
    edge_axes = _cross(edge_u[..., :, None, :], edge_v[..., None, :, :])
    edge_axes = np.broadcast_to(edge_axes, batch + (3, 3, 3)).reshape(batch + (9, 3))

    axes = np.concatenate([
        np.broadcast_to(normal_u, batch + (3,))[..., None, :],
        np.broadcast_to(normal_v, batch + (3,))[..., None, :],
        edge_axes,
    ], axis=-2)  # (..., 11, 3)

    # Project every corner on every axis: (..., 11, 3 corners)
    proj_u = _dot(axes[..., :, None, :], U[..., None, :, :])
    proj_v = _dot(axes[..., :, None, :], V[..., None, :, :])

    gap = (proj_u.max(axis=-1) < proj_v.min(axis=-1)) | (proj_v.max(axis=-1) < proj_u.min(axis=-1))
    degenerate = _dot(axes, axes) < eps
    separated = gap & ~degenerate
    return ~separated.any(axis=-1)
