# MIT License (see LICENSE)
"""
Core type definitions for mesh collision queries.

Defines the fundamental data structures:
- Vector3: alias for a float64 numpy array of shape (3,)
- Transform: rigid transform (rotation + translation), applied as p' = R·p + t
- Mesh: vertex buffer + triangle index buffer, immutable and shareable
- AABB: world-space axis-aligned bounding box, derived per query

Meshes never store a transform. The same Mesh instance can be queried
concurrently under any number of different transforms.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .constants import ROTATION_TOL
from .util import f64, axis_angle_matrix, quaternion_matrix

# Type alias for clarity
Vector3 = np.ndarray  # Shape (3,), dtype float64


def _readonly(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


# =============================================================================
# Rigid Transform
# =============================================================================

@dataclass(frozen=True, eq=False)
class Transform:
    """
    Rigid transform mapping local coordinates into world space.

    p_world = rotation @ p_local + translation

    Attributes:
        rotation: 3x3 orthonormal rotation matrix with determinant +1.
        translation: Translation vector [x, y, z].

    Raises:
        ValueError: On wrong shapes, non-finite entries, or a rotation that
                    is not a proper rotation (within ROTATION_TOL).
    """
    rotation: np.ndarray
    translation: np.ndarray

    def __post_init__(self) -> None:
        """Coerce to read-only float64 arrays and check rigidity."""
        R = f64(self.rotation)
        t = f64(self.translation)
        if R.shape != (3, 3):
            raise ValueError(f"Rotation must be a 3x3 matrix, got shape {R.shape}")
        if t.shape != (3,):
            raise ValueError(f"Translation must have 3 components, got shape {t.shape}")
        if not (np.all(np.isfinite(R)) and np.all(np.isfinite(t))):
            raise ValueError("Transform entries must be finite")
        if not np.allclose(R @ R.T, np.eye(3), atol=ROTATION_TOL):
            raise ValueError("Rotation matrix must be orthonormal")
        if abs(np.linalg.det(R) - 1.0) > ROTATION_TOL:
            raise ValueError("Rotation matrix must have determinant +1 (no reflection)")
        object.__setattr__(self, "rotation", _readonly(R))
        object.__setattr__(self, "translation", _readonly(t))

    @classmethod
    def identity(cls) -> Transform:
        return cls(np.eye(3), np.zeros(3))

    @classmethod
    def from_translation(cls, translation) -> Transform:
        return cls(np.eye(3), translation)

    @classmethod
    def from_axis_angle(cls, axis, angle: float, translation=(0.0, 0.0, 0.0)) -> Transform:
        """Rotation of `angle` radians about `axis`, followed by `translation`."""
        return cls(axis_angle_matrix(axis, angle), translation)

    @classmethod
    def from_quaternion(cls, q, translation=(0.0, 0.0, 0.0)) -> Transform:
        """Rotation from a (w, x, y, z) quaternion, followed by `translation`."""
        return cls(quaternion_matrix(q), translation)

    @classmethod
    def from_matrix(cls, m) -> Transform:
        """
        Build from a 4x4 homogeneous matrix.

        The bottom row must be [0, 0, 0, 1].
        """
        m = f64(m)
        if m.shape != (4, 4):
            raise ValueError(f"Homogeneous matrix must be 4x4, got shape {m.shape}")
        if not np.allclose(m[3], (0.0, 0.0, 0.0, 1.0)):
            raise ValueError("Homogeneous matrix bottom row must be [0, 0, 0, 1]")
        return cls(m[:3, :3], m[:3, 3])

    def matrix(self) -> np.ndarray:
        """Return the 4x4 homogeneous matrix."""
        m = np.eye(4)
        m[:3, :3] = self.rotation
        m[:3, 3] = self.translation
        return m

    def apply(self, points) -> np.ndarray:
        """
        Transform a point (3,) or a stack of points (..., 3) into world space.
        """
        p = np.asarray(points, dtype=np.float64)
        return p @ self.rotation.T + self.translation


# =============================================================================
# Triangle Mesh
# =============================================================================

@dataclass(frozen=True, eq=False)
class Mesh:
    """
    Triangle mesh defined by a vertex buffer and a triangle index buffer.

    Each triangle is a row of three indices into `vertices`. Edges are taken
    as e0 = v1 - v0, e1 = v2 - v1, e2 = v0 - v2 and the face normal as
    e0 × e1. Winding only fixes the sign of the normal, which the overlap
    test ignores.

    Both arrays are made read-only on construction so the mesh can be shared
    by concurrent queries without locking.

    Attributes:
        vertices: Array [N, 3] of local-space vertex positions.
        triangles: Array [M, 3] of vertex indices.
    """
    vertices: np.ndarray
    triangles: np.ndarray

    def __post_init__(self) -> None:
        """Coerce vertices to float64 [N, 3] and triangles to int64 [M, 3]."""
        verts = f64(self.vertices)
        if verts.size == 0:
            verts = verts.reshape(0, 3)
        if verts.ndim != 2 or verts.shape[1] != 3:
            raise ValueError(f"Vertices must have shape (N, 3), got {verts.shape}")
        if not np.all(np.isfinite(verts)):
            raise ValueError("Vertex coordinates must be finite")

        raw_tris = np.asarray(self.triangles)
        if raw_tris.size == 0:
            tris = np.zeros((0, 3), dtype=np.int64)
        else:
            if not np.issubdtype(raw_tris.dtype, np.integer):
                raise ValueError(f"Triangle indices must be integers, got dtype {raw_tris.dtype}")
            tris = np.array(raw_tris, dtype=np.int64)
        if tris.ndim != 2 or tris.shape[1] != 3:
            raise ValueError(f"Triangles must have shape (M, 3), got {tris.shape}")

        object.__setattr__(self, "vertices", _readonly(verts))
        object.__setattr__(self, "triangles", _readonly(tris))

    @property
    def num_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def num_triangles(self) -> int:
        return int(self.triangles.shape[0])

    @property
    def is_empty(self) -> bool:
        """True when the mesh has no vertices or no triangles."""
        return self.num_vertices == 0 or self.num_triangles == 0

    def validate(self) -> None:
        """
        Check that every triangle index addresses an existing vertex.

        Raises:
            ValueError: If any index lies outside [0, num_vertices).
        """
        if self.num_triangles == 0:
            return
        bad = (self.triangles < 0) | (self.triangles >= self.num_vertices)
        if bad.any():
            row = int(np.argwhere(bad)[0][0])
            raise ValueError(
                f"Triangle {row} has vertex indices {self.triangles[row].tolist()} "
                f"outside [0, {self.num_vertices})"
            )

    def world_vertices(self, transform: Transform) -> np.ndarray:
        """All vertices mapped into world space, shape [N, 3]."""
        return transform.apply(self.vertices)

    def world_triangles(self, transform: Transform) -> np.ndarray:
        """
        World-space triangle corners, shape [M, 3, 3] (triangle, corner, xyz).

        Assumes validate() has passed.
        """
        return self.world_vertices(transform)[self.triangles]


# =============================================================================
# Axis-Aligned Bounding Box
# =============================================================================

@dataclass(frozen=True, eq=False)
class AABB:
    """
    World-space axis-aligned bounding box.

    Attributes:
        min: Lower corner [x, y, z].
        max: Upper corner [x, y, z].
    """
    min: np.ndarray
    max: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", f64(self.min))
        object.__setattr__(self, "max", f64(self.max))

    @classmethod
    def from_points(cls, points: np.ndarray) -> AABB:
        """Tightest box around a non-empty [N, 3] point array."""
        return cls(points.min(axis=0), points.max(axis=0))

    def overlaps(self, other: AABB) -> bool:
        """
        True if the boxes overlap on all three axes.

        Boxes touching at a face, edge or corner count as overlapping.
        """
        for axis in range(3):
            if self.max[axis] < other.min[axis] or other.max[axis] < self.min[axis]:
                return False
        return True
