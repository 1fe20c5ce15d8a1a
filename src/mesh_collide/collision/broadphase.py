# MIT License (see LICENSE)
"""
Broadphase collision rejection using whole-object bounding boxes.

Each mesh is mapped into world space under its transform and reduced to a
single axis-aligned bounding box (AABB). Two meshes whose boxes are
disjoint on any world axis cannot touch, so the narrow phase is skipped.

Key concepts:
- The AABB is recomputed from every transformed vertex on each query;
  nothing is cached on the mesh.
- The test is conservative: it never rejects a touching pair, but an
  overlapping box pair may still turn out to be separated.
- A mesh without vertices has no box and never overlaps anything.
"""
from __future__ import annotations

from ..types import AABB, Mesh, Transform


def aabb_for_mesh(mesh: Mesh, transform: Transform) -> AABB | None:
    """
    Calculate the world-space AABB of a transformed mesh.

    Args:
        mesh: Mesh whose vertices are bounded.
        transform: Rigid transform placing the mesh in the world.

    Returns:
        The bounding box, or None if the mesh has no vertices.
    """
    if mesh.num_vertices == 0:
        return None
    return AABB.from_points(mesh.world_vertices(transform))


def aabb_overlap(a: AABB | None, b: AABB | None) -> bool:
    """Overlap on all three axes; a missing box never overlaps."""
    if a is None or b is None:
        return False
    return a.overlaps(b)


def broadphase_overlap(mesh_a: Mesh, tf_a: Transform, mesh_b: Mesh, tf_b: Transform) -> bool:
    """
    Decide whether two transformed meshes may be colliding.

    Args:
        mesh_a: First mesh.
        tf_a: World transform of the first mesh.
        mesh_b: Second mesh.
        tf_b: World transform of the second mesh.

    Returns:
        False if either mesh has no vertices or the world boxes are disjoint;
        True otherwise.
    """
    if mesh_a.num_vertices == 0 or mesh_b.num_vertices == 0:
        return False
    return aabb_overlap(aabb_for_mesh(mesh_a, tf_a), aabb_for_mesh(mesh_b, tf_b))
