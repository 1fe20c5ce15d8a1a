# MIT License (see LICENSE)
"""
mesh_collide - Mesh-to-mesh collision detection for rigid bodies.

Given two triangle meshes, each placed in the world by its own rigid
transform, decide whether their surfaces intersect. Detection runs in two
stages: a whole-object AABB broadphase, then a parallel narrowphase that
tests every triangle pair with the 11-axis Separating Axis Theorem.

Main entry points:
    - collide: Boolean collision query between two transformed meshes.
    - Mesh: Immutable vertex + triangle index buffers.
    - Transform: Rigid rotation + translation.
    - CollisionConfig: Epsilon, worker count and scan mode.

Submodules:
    - collision: Broadphase, SAT, narrowphase and the query facade.
    - meshgen: Sphere and box mesh builders.
    - io: JSON serialization of meshes and transforms.

Example:
    from mesh_collide import collide, Transform
    from mesh_collide.meshgen import sphere_mesh

    ball = sphere_mesh(1.0, stacks=16, slices=16)
    hit = collide(ball, Transform.identity(),
                  ball, Transform.from_translation((1.0, 0.0, 0.0)))
"""
from .types import Mesh, Transform, AABB
from .config import CollisionConfig
from .collision import CollisionQuery, CollisionResult, collide, collide_query
from .logging_config import setup_logging

__all__ = [
    # Query
    "collide",
    "collide_query",
    "CollisionQuery",
    "CollisionResult",
    "CollisionConfig",
    # Geometry
    "Mesh",
    "Transform",
    "AABB",
    # Logging
    "setup_logging",
]
