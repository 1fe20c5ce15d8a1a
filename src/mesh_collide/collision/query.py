# MIT License (see LICENSE)
"""
Collision query facade: broadphase gate followed by the narrowphase scan.

collide() is the one operation external collaborators (scene layers,
visualizers, benchmark drivers) are expected to call. Inputs are checked
here, before any geometry work; malformed meshes or transforms raise and
no partial result is produced.

Pipeline:
    1. Validate meshes and transforms.
    2. Broadphase: world AABB overlap. Disjoint boxes -> no collision,
       triangle data is never touched.
    3. Narrowphase: parallel SAT over all triangle pairs, stopping at the
       first hit unless the config asks for an exhaustive count.

The query is pure: identical inputs give identical answers, and swapping
the two bodies does not change the boolean result.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

import numpy as np

from ..config import CollisionConfig
from ..types import Mesh, Transform
from .broadphase import broadphase_overlap
from .narrowphase import NarrowPhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class CollisionResult:
    """
    Outcome of a collision query.

    Attributes:
        collided: True if any triangle pair intersects.
        pair_count: Colliding pairs found. Exact in exhaustive mode,
                    otherwise capped at 1.
        pairs: [K, 2] array of colliding (i, j) triangle indices, sorted.
               Only populated in exhaustive mode.
        broadphase_overlap: Whether the bounding boxes overlapped. False
                            when an empty mesh short-circuits the query.
    """
    collided: bool
    pair_count: int = 0
    pairs: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=np.int64))
    broadphase_overlap: bool = False

    def __bool__(self) -> bool:
        return self.collided


@dataclass(frozen=True)
class CollisionQuery:
    """
    Per-call bundle of two meshes and their world transforms.

    Attributes:
        mesh_a: First mesh.
        transform_a: World transform of the first mesh.
        mesh_b: Second mesh.
        transform_b: World transform of the second mesh.
    """
    mesh_a: Mesh
    transform_a: Transform
    mesh_b: Mesh
    transform_b: Transform

    def validate(self) -> None:
        """
        Reject malformed input before any geometry is processed.

        Raises:
            TypeError: If an argument is not a Mesh / Transform.
            ValueError: If a triangle index is out of bounds.
        """
        for name in ("mesh_a", "mesh_b"):
            if not isinstance(getattr(self, name), Mesh):
                raise TypeError(f"{name} must be a Mesh, got {type(getattr(self, name)).__name__}")
        for name in ("transform_a", "transform_b"):
            if not isinstance(getattr(self, name), Transform):
                raise TypeError(f"{name} must be a Transform, got {type(getattr(self, name)).__name__}")
        self.mesh_a.validate()
        self.mesh_b.validate()

    def run(self, config: CollisionConfig | None = None) -> CollisionResult:
        return collide_query(self, config)


def collide_query(query: CollisionQuery, config: CollisionConfig | None = None) -> CollisionResult:
    """
    Run the full broadphase + narrowphase pipeline on a query.

    Args:
        query: Meshes and transforms to test.
        config: Optional configuration; defaults to CollisionConfig().

    Returns:
        CollisionResult describing the outcome.

    Raises:
        TypeError, ValueError: On malformed input (see CollisionQuery.validate).
    """
    query.validate()
    cfg = config if config is not None else CollisionConfig()
    a, b = query.mesh_a, query.mesh_b

    if a.is_empty or b.is_empty:
        logger.debug("Empty mesh in query (%d/%d triangles), no collision", a.num_triangles, b.num_triangles)
        return CollisionResult(collided=False)

    if not broadphase_overlap(a, query.transform_a, b, query.transform_b):
        logger.debug("Broadphase rejected pair")
        return CollisionResult(collided=False)

    count, pairs = NarrowPhase(cfg).scan(a, query.transform_a, b, query.transform_b)
    return CollisionResult(
        collided=count > 0,
        pair_count=count,
        pairs=pairs,
        broadphase_overlap=True,
    )


def collide(
    mesh_a: Mesh,
    transform_a: Transform,
    mesh_b: Mesh,
    transform_b: Transform,
    config: CollisionConfig | None = None,
) -> bool:
    """
    Test whether two transformed meshes intersect.

    Args:
        mesh_a: First mesh.
        transform_a: World transform of the first mesh.
        mesh_b: Second mesh.
        transform_b: World transform of the second mesh.
        config: Optional configuration (epsilon, worker count, chunking).

    Returns:
        True if any triangle of A intersects (or touches) any triangle of B.

    Raises:
        TypeError: If an argument has the wrong type.
        ValueError: If a triangle references a vertex outside its mesh.
    """
    return collide_query(CollisionQuery(mesh_a, transform_a, mesh_b, transform_b), config).collided
