# MIT License (see LICENSE)
"""
Per-query configuration for the collision pipeline.
"""
from __future__ import annotations
import os
from dataclasses import dataclass

from .constants import DEFAULT_AXIS_EPS, DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class CollisionConfig:
    """
    Tunable parameters for a collision query.

    Attributes:
        axis_eps: Squared-norm threshold below which a SAT axis is treated
                  as degenerate and passes as overlapping. Default 1e-8.
        max_workers: Narrow-phase worker threads. None uses os.cpu_count();
                     1 runs the scan inline without a thread pool.
        chunk_size: Triangles of mesh A scheduled per narrow-phase task.
                    Smaller chunks react faster to early termination,
                    larger chunks amortize scheduling overhead.
        exhaustive: If True, evaluate every triangle pair (no early exit)
                    and report the exact count and list of colliding pairs.
    """
    axis_eps: float = DEFAULT_AXIS_EPS
    max_workers: int | None = None
    chunk_size: int = DEFAULT_CHUNK_SIZE
    exhaustive: bool = False

    def __post_init__(self) -> None:
        if not self.axis_eps >= 0.0:
            raise ValueError(f"axis_eps must be non-negative, got {self.axis_eps}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")

    @property
    def workers(self) -> int:
        """Resolved worker count."""
        if self.max_workers is not None:
            return self.max_workers
        return os.cpu_count() or 1
