# MIT License (see LICENSE)
"""
JSON serialization and deserialization for meshes and transforms.

Lets scene layers and tools exchange geometry with the collision core
without a binary mesh format.

JSON Schema Overview:
---------------------
Mesh:
{
  "vertices": [[x, y, z], ...],    # Required, may be empty
  "triangles": [[i, j, k], ...]    # Required, may be empty; indices into vertices
}

Transform:
{
  "rotation": [[r00, r01, r02],    # Optional 3x3 rotation, default: identity
               [r10, r11, r12],
               [r20, r21, r22]],
  "translation": [x, y, z]         # Optional, default: [0, 0, 0]
}
"""
from __future__ import annotations
import json
from typing import Any

import numpy as np

from ..types import Mesh, Transform


def load_mesh_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a mesh file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_mesh(path: str) -> Mesh:
    """
    Load a Mesh from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If required fields are missing or malformed.
    """
    return mesh_from_json(load_mesh_raw(path))


def save_mesh(mesh: Mesh, path: str) -> None:
    """Write a Mesh to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(mesh_to_json(mesh), f, indent=2)


def mesh_to_json(mesh: Mesh) -> dict[str, Any]:
    """Serialize a Mesh to a JSON-compatible dict."""
    return {
        "vertices": mesh.vertices.tolist(),
        "triangles": mesh.triangles.tolist(),
    }


def mesh_from_json(data: dict[str, Any]) -> Mesh:
    """
    Build a Mesh from a JSON dict.

    Index bounds are not checked here; collide() validates them before use.

    Raises:
        ValueError: If a field is missing or has the wrong shape or type.
    """
    for key in ("vertices", "triangles"):
        if key not in data:
            raise ValueError(f"Mesh definition missing required '{key}' field.")

    try:
        vertices = np.array(data["vertices"], dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Mesh vertices must be a list of [x, y, z] numbers: {e}") from e

    triangles = np.array(data["triangles"])
    if triangles.size and not np.issubdtype(triangles.dtype, np.integer):
        raise ValueError(f"Mesh triangles must be integer index triples, got dtype {triangles.dtype}")

    return Mesh(vertices, triangles)


def transform_to_json(transform: Transform) -> dict[str, Any]:
    """Serialize a Transform to a JSON-compatible dict."""
    return {
        "rotation": transform.rotation.tolist(),
        "translation": transform.translation.tolist(),
    }


def transform_from_json(data: dict[str, Any]) -> Transform:
    """
    Build a Transform from a JSON dict.

    Missing fields fall back to identity rotation / zero translation.

    Raises:
        ValueError: If the rotation is not a proper rotation matrix or a
                    field has the wrong shape.
    """
    rotation = data.get("rotation", np.eye(3).tolist())
    translation = data.get("translation", [0.0, 0.0, 0.0])
    return Transform(rotation, translation)
