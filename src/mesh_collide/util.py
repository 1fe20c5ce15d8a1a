# MIT License (see LICENSE)
"""
Utility functions for 3D vector math and array conversion.

Small helpers shared by the geometry types and the collision kernels.
Vectors are numpy arrays of shape (3,); stacked vectors use a trailing
axis of length 3.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """Copy an array-like (nested lists, tuples, arrays) into a new float64 array."""
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """|v|², compared against the axis epsilon to spot degenerate SAT axes."""
    return float(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def norm(v: np.ndarray) -> float:
    return float(np.sqrt(norm2(v)))


def dot3(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product of two 3D vectors as a Python float."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross3(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    3D cross product a × b.

    Written out by hand: np.cross carries noticeable per-call overhead for
    single vectors and this sits in the inner SAT loop.
    """
    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ], dtype=np.float64)


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    v scaled to length 1, or the zero vector when |v| < eps.

    Callers building rotations treat the zero result as an invalid axis.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(3, dtype=np.float64)
    return v / n


def axis_angle_matrix(axis, angle: float) -> np.ndarray:
    """
    Rotation matrix for a right-handed rotation of `angle` radians about `axis`.

    Rodrigues' formula: R = I + sin(θ)K + (1 - cos(θ))K²
    where K is the skew-symmetric cross-product matrix of the unit axis.
    """
    k = unit(f64(axis))
    if not k.any():
        raise ValueError(f"Rotation axis must be non-zero, got {axis}")
    kx, ky, kz = k
    K = np.array([
        [0.0, -kz, ky],
        [kz, 0.0, -kx],
        [-ky, kx, 0.0],
    ], dtype=np.float64)
    s, c = np.sin(angle), np.cos(angle)
    return np.eye(3) + s * K + (1.0 - c) * (K @ K)


def quaternion_matrix(q) -> np.ndarray:
    """
    Rotation matrix for a quaternion given as (w, x, y, z).

    The quaternion is normalized first, so any non-zero scaling is accepted.
    """
    q = f64(q)
    if q.shape != (4,):
        raise ValueError(f"Quaternion must have 4 components (w, x, y, z), got shape {q.shape}")
    n = float(np.sqrt(np.dot(q, q)))
    if n < 1e-12:
        raise ValueError("Quaternion must be non-zero")
    w, x, y, z = q / n
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ], dtype=np.float64)
