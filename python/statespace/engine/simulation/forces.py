"""Force-directed layout: all-pairs repulsion plus springs along edges.

Every frame reads one snapshot of the node positions, sums all forces into
a separate array and only then integrates velocities and positions, so the
result does not depend on the order nodes are stored in.
"""

from __future__ import annotations

import logging

import numpy as np

from statespace.config import ForceConfig
from statespace.models.graph import LayoutGraph

logger = logging.getLogger(__name__)

ROW_CHUNK = 512


class ForceSimulator:
    """Advances the layout of a :class:`LayoutGraph` one frame per :meth:`step`.

    The random generator is only consulted when two nodes coincide; pass a
    seeded ``numpy.random.Generator`` for reproducible runs.
    """

    def __init__(
        self,
        graph: LayoutGraph,
        config: ForceConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.graph = graph
        self.config = config if config is not None else ForceConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.frame = 0

    def step(self) -> None:
        positions = self.graph.positions()
        if len(positions) == 0:
            return

        forces = self.repulsive_forces(positions) + self.attractive_forces(positions)

        velocities = (self.graph.velocities() + forces) * self.config.damping
        self.graph.apply_kinematics(positions + velocities, velocities, forces)
        self.frame += 1

    # -- forces ---------------------------------------------------------------

    def repulsive_forces(self, positions: np.ndarray) -> np.ndarray:
        """Force on each node pushing it away from every other node."""
        cfg = self.config
        n = len(positions)
        forces = np.zeros_like(positions)
        nudge = cfg.repulsion_strength * cfg.coincident_multiplier

        # Row blocks keep the pairwise arrays at ROW_CHUNK x n.
        for start in range(0, n, ROW_CHUNK):
            stop = min(start + ROW_CHUNK, n)
            diff = positions[start:stop, None, :] - positions[None, :, :]
            dist = np.linalg.norm(diff, axis=-1)

            others = np.ones(dist.shape, dtype=bool)
            others[np.arange(stop - start), np.arange(start, stop)] = False
            far = others & (dist >= cfg.near_distance)
            near = others & ~far

            # strength / d^2 along diff / d
            with np.errstate(divide="ignore", invalid="ignore"):
                scale = np.where(far, cfg.repulsion_strength / dist**3, 0.0)
            forces[start:stop] = np.sum(diff * scale[..., None], axis=1)

            if near.any():
                rows, _ = np.nonzero(near)
                logger.debug("Nudging %d coincident node pairs.", len(rows))
                np.add.at(forces, rows + start, self._random_directions(len(rows)) * nudge)

        return forces

    def attractive_forces(self, positions: np.ndarray) -> np.ndarray:
        """Spring force along each edge, applied to both endpoints."""
        cfg = self.config
        forces = np.zeros_like(positions)
        index = self.graph.edge_index()
        if index.size == 0:
            return forces

        source, target = index[:, 0], index[:, 1]
        delta = positions[target] - positions[source]
        dist = np.linalg.norm(delta, axis=-1)
        active = dist >= cfg.near_distance

        with np.errstate(divide="ignore", invalid="ignore"):
            scale = np.where(
                active, cfg.spring_strength * (dist - cfg.spring_length) / dist, 0.0
            )
        pull = delta * scale[:, None]
        np.add.at(forces, source, pull)
        np.subtract.at(forces, target, pull)
        return forces

    # -- helpers --------------------------------------------------------------

    def _random_directions(self, count: int) -> np.ndarray:
        """Uniformly distributed unit vectors, one per row."""
        vectors = self.rng.standard_normal((count, 3))
        norms = np.linalg.norm(vectors, axis=-1, keepdims=True)
        return vectors / np.maximum(norms, np.finfo(float).tiny)
