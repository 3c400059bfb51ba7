"""Layout graph store: one node per configuration, one edge per move."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np


def _zero() -> np.ndarray:
    return np.zeros(3)


@dataclass
class GraphNode:
    """A discovered configuration and its kinematic state in the layout."""

    id: str
    position: np.ndarray = field(default_factory=_zero)
    velocity: np.ndarray = field(default_factory=_zero)
    acceleration: np.ndarray = field(default_factory=_zero)

    @property
    def label(self) -> str:
        return f"Node {self.id}"


@dataclass(frozen=True)
class GraphEdge:
    """A single move application, from ``source`` to ``target``."""

    source: str
    target: str


class LayoutGraph:
    """Owns every :class:`GraphNode` and :class:`GraphEdge`.

    Topology is append-only: nodes are added once per new configuration and
    never removed, edges are added once per move encountered (duplicates in
    the move relation are kept).  The force simulator reads positions through
    :meth:`positions` and writes them back with :meth:`apply_kinematics`.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, GraphNode] = {}
        self._index: dict[str, int] = {}
        self._edges: list[GraphEdge] = []
        self._edge_index: np.ndarray | None = None

    # -- topology -------------------------------------------------------------

    def add_node(self, node_id: str, position: np.ndarray) -> GraphNode:
        if node_id in self._nodes:
            raise KeyError(f"Node {node_id!r} already exists.")
        node = GraphNode(id=node_id, position=np.asarray(position, dtype=float).copy())
        self._index[node_id] = len(self._nodes)
        self._nodes[node_id] = node
        return node

    def add_edge(self, source: str, target: str) -> GraphEdge:
        if source not in self._nodes or target not in self._nodes:
            raise KeyError(f"Edge {source!r} -> {target!r} references an unknown node.")
        edge = GraphEdge(source, target)
        self._edges.append(edge)
        self._edge_index = None
        return edge

    # -- queries --------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes.values())

    def node(self, node_id: str) -> GraphNode:
        return self._nodes[node_id]

    @property
    def nodes(self) -> list[GraphNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[GraphEdge]:
        return list(self._edges)

    def index_of(self, node_id: str) -> int:
        return self._index[node_id]

    def edge_index(self) -> np.ndarray:
        """Return an ``(m, 2)`` int array of ``(source, target)`` node indices."""
        if self._edge_index is None:
            pairs = [(self._index[e.source], self._index[e.target]) for e in self._edges]
            self._edge_index = np.array(pairs, dtype=np.intp).reshape(-1, 2)
        return self._edge_index

    # -- kinematics -----------------------------------------------------------

    def positions(self) -> np.ndarray:
        """Snapshot of all node positions as an ``(n, 3)`` array, in insertion order."""
        if not self._nodes:
            return np.zeros((0, 3))
        return np.array([n.position for n in self._nodes.values()], dtype=float)

    def velocities(self) -> np.ndarray:
        if not self._nodes:
            return np.zeros((0, 3))
        return np.array([n.velocity for n in self._nodes.values()], dtype=float)

    def apply_kinematics(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        accelerations: np.ndarray,
    ) -> None:
        """Write one frame's integrated state back onto the nodes."""
        for i, node in enumerate(self._nodes.values()):
            node.position = positions[i].copy()
            node.velocity = velocities[i].copy()
            node.acceleration = accelerations[i].copy()

    def edge_segments(self) -> np.ndarray:
        """Return ``(m, 2, 3)`` endpoint coordinates, rebuilt from current positions."""
        positions = self.positions()
        index = self.edge_index()
        if index.size == 0:
            return np.zeros((0, 2, 3))
        return positions[index]

    def kinetic_energy(self) -> float:
        """Sum of ``|v|^2 / 2`` over all nodes (unit mass)."""
        velocities = self.velocities()
        return float(0.5 * np.sum(velocities * velocities))
