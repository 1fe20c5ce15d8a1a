# MIT License (see LICENSE)
"""
Input/Output utilities for collision geometry.

This subpackage provides:
    - JSON serialization: Save and load meshes to/from JSON files.
    - Transform (de)serialization for scene descriptions.

Typical usage:
    from mesh_collide.io import load_mesh, save_mesh, mesh_to_json

    mesh = load_mesh("part.json")
    save_mesh(mesh, "copy.json")
"""
from .json_io import (
    load_mesh,
    load_mesh_raw,
    save_mesh,
    mesh_to_json,
    mesh_from_json,
    transform_to_json,
    transform_from_json,
)

__all__ = [
    # Loading
    "load_mesh",
    "load_mesh_raw",
    # Saving
    "save_mesh",
    # Serialization
    "mesh_to_json",
    "mesh_from_json",
    "transform_to_json",
    "transform_from_json",
]
