# MIT License (see LICENSE)
"""
Narrowphase scan over all triangle pairs of two meshes.

Runs only after the broadphase reports overlapping boxes. Every pair
(triangle i of A, triangle j of B) is tested with the 11-axis SAT; the
answer is an OR over all pair results, so it does not depend on evaluation
order or on how many workers take part.

Scheduling:
- Triangles of A are split into chunks of `chunk_size` rows. Each chunk is
  one task on a ThreadPoolExecutor and is tested against all of B in
  blocks of at most PAIR_BLOCK pairs with the batched SAT kernel (numpy
  releases the GIL inside the heavy array operations).
- Each task returns its own local hits; the caller reduces them.
- A threading.Event is the only shared mutable state. It is set on the
  first hit and checked before every block, so remaining tasks stop early.
  Setting it is idempotent and the result never depends on when other
  workers observe it.
- In exhaustive mode the event is ignored, every pair is evaluated and the
  full sorted list of colliding pairs is returned.
"""
from __future__ import annotations
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..config import CollisionConfig
from ..constants import PAIR_BLOCK
from ..types import Mesh, Transform
from .sat import tri_tri_intersect_many

logger = logging.getLogger(__name__)

_NO_PAIRS = np.zeros((0, 2), dtype=np.int64)
_NO_PAIRS.setflags(write=False)


class NarrowPhase:
    """
    Parallel triangle-pair scanner.

    Holds only configuration; all per-query state (world triangles, the
    termination flag, the executor) is created inside scan(), so one
    instance can serve concurrent queries.

    Attributes:
        config: Query configuration (epsilon, workers, chunking, mode).

    Example:
        narrow = NarrowPhase(CollisionConfig(max_workers=4))
        count, pairs = narrow.scan(mesh_a, tf_a, mesh_b, tf_b)
    """

    def __init__(self, config: CollisionConfig | None = None) -> None:
        self.config = config if config is not None else CollisionConfig()

    def scan(
        self,
        mesh_a: Mesh,
        tf_a: Transform,
        mesh_b: Mesh,
        tf_b: Transform,
    ) -> tuple[int, np.ndarray]:
        """
        Test all triangle pairs of two transformed meshes.

        Args:
            mesh_a: First mesh (indices already validated).
            tf_a: World transform of the first mesh.
            mesh_b: Second mesh (indices already validated).
            tf_b: World transform of the second mesh.

        Returns:
            Tuple (count, pairs) where:
            - count: number of colliding pairs in exhaustive mode, otherwise
              1 if any pair collides and 0 if none does.
            - pairs: [K, 2] array of colliding (i, j) triangle indices sorted
              lexicographically in exhaustive mode, otherwise empty.
        """
        n_a, n_b = mesh_a.num_triangles, mesh_b.num_triangles
        if n_a == 0 or n_b == 0:
            return 0, _NO_PAIRS

        cfg = self.config
        tris_a = mesh_a.world_triangles(tf_a)
        tris_b = mesh_b.world_triangles(tf_b)

        chunks = [(lo, min(lo + cfg.chunk_size, n_a)) for lo in range(0, n_a, cfg.chunk_size)]
        workers = min(cfg.workers, len(chunks))
        found = threading.Event()

        logger.debug(
            "Scanning %d x %d triangle pairs in %d chunks with %d worker(s)%s",
            n_a, n_b, len(chunks), workers, " (exhaustive)" if cfg.exhaustive else "",
        )

        if workers == 1:
            results = [self._scan_rows(tris_a, tris_b, lo, hi, found) for lo, hi in chunks]
        else:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="narrowphase") as pool:
                futures = [
                    pool.submit(self._scan_rows, tris_a, tris_b, lo, hi, found)
                    for lo, hi in chunks
                ]
                results = [f.result() for f in futures]

        hits = [r for r in results if len(r)]
        if not hits:
            return 0, _NO_PAIRS

        if not cfg.exhaustive:
            logger.debug("Collision found, remaining pairs skipped")
            return 1, _NO_PAIRS

        pairs = np.concatenate(hits)
        pairs = pairs[np.lexsort((pairs[:, 1], pairs[:, 0]))]
        return int(len(pairs)), pairs

    def _scan_rows(
        self,
        tris_a: np.ndarray,
        tris_b: np.ndarray,
        lo: int,
        hi: int,
        found: threading.Event,
    ) -> np.ndarray:
        """
        Test rows [lo, hi) of A against every triangle of B.

        Returns the colliding pairs seen by this task as global (i, j)
        indices. Outside exhaustive mode this is at most one pair, and the
        task returns as soon as it finds it or sees the flag set.
        """
        cfg = self.config
        n_b = len(tris_b)
        step = max(1, PAIR_BLOCK // (hi - lo))
        rows = tris_a[lo:hi, None]
        hits = []

        for start in range(0, n_b, step):
            if not cfg.exhaustive and found.is_set():
                break
            mask = tri_tri_intersect_many(rows, tris_b[None, start:start + step], cfg.axis_eps)
            if not mask.any():
                continue
            ii, jj = np.nonzero(mask)
            pairs = np.column_stack([ii + lo, jj + start]).astype(np.int64)
            if not cfg.exhaustive:
                found.set()
                return pairs[:1]
            hits.append(pairs)

        if hits:
            return np.concatenate(hits)
        return _NO_PAIRS


def narrowphase_scan(
    mesh_a: Mesh,
    tf_a: Transform,
    mesh_b: Mesh,
    tf_b: Transform,
    config: CollisionConfig | None = None,
) -> tuple[int, np.ndarray]:
    """Functional wrapper around NarrowPhase(config).scan(...)."""
    return NarrowPhase(config).scan(mesh_a, tf_a, mesh_b, tf_b)
