# MIT License (see LICENSE)
"""
Deterministic mesh builders for tests, examples and callers without their
own geometry source.
"""
from __future__ import annotations

import numpy as np

from .types import Mesh


def sphere_mesh(radius: float, stacks: int, slices: int) -> Mesh:
    """
    UV sphere centred at the origin.

    Vertices form a (stacks + 1) x (slices + 1) grid over
    phi = pi * i / stacks (polar, from +z) and theta = 2 * pi * j / slices.
    The seam column j == slices duplicates j == 0 and each pole row holds
    slices + 1 coincident vertices, so pole triangles are degenerate slivers.

    Each grid quad is split into (first, second, first + 1) and
    (second, second + 1, first + 1) with first = i * (slices + 1) + j and
    second = first + slices + 1, giving 2 * stacks * slices triangles.

    Args:
        radius: Sphere radius, > 0.
        stacks: Latitude bands, >= 2.
        slices: Longitude segments, >= 3.
    """
    if radius <= 0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")
    if stacks < 2 or slices < 3:
        raise ValueError(f"Sphere needs stacks >= 2 and slices >= 3, got ({stacks}, {slices})")

    phi = np.pi * np.arange(stacks + 1) / stacks
    theta = 2.0 * np.pi * np.arange(slices + 1) / slices
    phi, theta = np.meshgrid(phi, theta, indexing="ij")

    vertices = np.stack([
        radius * np.sin(phi) * np.cos(theta),
        radius * np.sin(phi) * np.sin(theta),
        radius * np.cos(phi),
    ], axis=-1).reshape(-1, 3)

    i, j = np.meshgrid(np.arange(stacks), np.arange(slices), indexing="ij")
    first = (i * (slices + 1) + j).ravel()
    second = first + slices + 1

    triangles = np.empty((2 * first.size, 3), dtype=np.int64)
    triangles[0::2] = np.column_stack([first, second, first + 1])
    triangles[1::2] = np.column_stack([second, second + 1, first + 1])

    return Mesh(vertices, triangles)


# Corner k has coordinates (+/-hx, +/-hy, +/-hz) with bit 0 -> x, bit 1 -> y, bit 2 -> z
_BOX_TRIANGLES = np.array([
    [0, 2, 1], [1, 2, 3],  # -z
    [4, 5, 6], [5, 7, 6],  # +z
    [0, 1, 4], [1, 5, 4],  # -y
    [2, 6, 3], [3, 6, 7],  # +y
    [0, 4, 2], [2, 4, 6],  # -x
    [1, 3, 5], [3, 7, 5],  # +x
], dtype=np.int64)


def box_mesh(half_extents=(0.5, 0.5, 0.5)) -> Mesh:
    """
    Closed box centred at the origin: 8 vertices, 12 triangles.

    Args:
        half_extents: (hx, hy, hz), all > 0. Default is the unit cube.
    """
    hx, hy, hz = (float(h) for h in half_extents)
    if hx <= 0 or hy <= 0 or hz <= 0:
        raise ValueError(f"Box extents must be positive, got ({hx}, {hy}, {hz})")
    vertices = np.array([
        [hx if k & 1 else -hx, hy if k & 2 else -hy, hz if k & 4 else -hz]
        for k in range(8)
    ], dtype=np.float64)
    return Mesh(vertices, _BOX_TRIANGLES)
