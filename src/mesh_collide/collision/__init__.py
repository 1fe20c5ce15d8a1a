# MIT License (see LICENSE)
"""
Collision detection subsystem.

This subpackage provides:
    - Broadphase: Whole-mesh world AABB overlap gate.
    - SAT: 11-axis triangle-triangle separating axis test.
    - Narrowphase: Parallel scan over all triangle pairs with early exit.
    - Query: The collide() facade tying the stages together.

Typical usage:
    from mesh_collide.collision import collide

    if collide(mesh_a, tf_a, mesh_b, tf_b):
        # handle collision
"""
from .broadphase import aabb_for_mesh, aabb_overlap, broadphase_overlap
from .sat import axis_overlap, separating_axis, tri_tri_intersect, tri_tri_intersect_many
from .narrowphase import NarrowPhase, narrowphase_scan
from .query import CollisionQuery, CollisionResult, collide, collide_query

__all__ = [
    # Broadphase
    "aabb_for_mesh",
    "aabb_overlap",
    "broadphase_overlap",
    # SAT
    "axis_overlap",
    "separating_axis",
    "tri_tri_intersect",
    "tri_tri_intersect_many",
    # Narrowphase
    "NarrowPhase",
    "narrowphase_scan",
    # Query
    "CollisionQuery",
    "CollisionResult",
    "collide",
    "collide_query",
]
