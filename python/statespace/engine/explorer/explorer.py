"""Exhaustive depth-first exploration of the reachable state space."""

from __future__ import annotations

import logging

import numpy as np

from statespace.config import ExplorerConfig
from statespace.engine.movegen import moves_of
from statespace.errors import StateSpaceLimitError
from statespace.models.graph import LayoutGraph
from statespace.models.puzzle import PuzzleState

logger = logging.getLogger(__name__)


class StateSpaceExplorer:
    """Discovers every configuration reachable from a start state.

    Each new configuration becomes a node in :attr:`graph` and every move
    application becomes an edge, including moves that lead back to a
    configuration seen before.  The traversal uses an explicit stack, so
    the reachable space is bounded by heap memory rather than recursion
    depth; the visiting order is the same as a recursive depth-first walk
    over :func:`moves_of`.

    A *graph* passed in may already hold nodes, for instance from an earlier
    exploration.  Those ids start out visited: reaching one again only adds
    an edge, and they count towards ``max_states``.
    """

    def __init__(
        self,
        graph: LayoutGraph | None = None,
        rng: np.random.Generator | None = None,
        config: ExplorerConfig | None = None,
    ) -> None:
        self.graph = graph if graph is not None else LayoutGraph()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.config = config if config is not None else ExplorerConfig()
        self.visited: set[str] = {node.id for node in self.graph}

    def explore(self, initial: PuzzleState) -> set[str]:
        """Run the traversal to completion and return the visited ids."""
        stack: list[tuple[PuzzleState, PuzzleState | None]] = [(initial, None)]

        while stack:
            state, parent = stack.pop()

            if state.id in self.visited:
                if parent is not None:
                    self.graph.add_edge(parent.id, state.id)
                continue

            self._visit(state)
            if parent is not None:
                self.graph.add_edge(parent.id, state.id)

            # Reversed so the first successor is popped first.
            for child in reversed(moves_of(state)):
                stack.append((child, state))

        logger.info(
            "Explored %d configurations and %d moves.",
            len(self.visited),
            len(self.graph.edges),
        )
        return self.visited

    # -- helpers --------------------------------------------------------------

    def _visit(self, state: PuzzleState) -> None:
        limit = self.config.max_states
        if limit is not None and len(self.visited) >= limit:
            raise StateSpaceLimitError(limit)

        logger.debug("Visiting: %s", state.id)
        self.visited.add(state.id)
        spread = self.config.initial_spread
        self.graph.add_node(state.id, self.rng.uniform(-spread, spread, size=3))


def explore(
    initial: PuzzleState,
    graph: LayoutGraph | None = None,
    rng: np.random.Generator | None = None,
    max_states: int | None = None,
) -> LayoutGraph:
    """Explore from *initial* and return the populated layout graph."""
    explorer = StateSpaceExplorer(
        graph=graph, rng=rng, config=ExplorerConfig(max_states=max_states)
    )
    explorer.explore(initial)
    return explorer.graph
