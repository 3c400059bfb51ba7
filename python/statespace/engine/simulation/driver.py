"""Frame loop around :class:`ForceSimulator`."""

from __future__ import annotations

import logging
from collections.abc import Callable

from statespace.engine.simulation.forces import ForceSimulator
from statespace.models.graph import LayoutGraph

logger = logging.getLogger(__name__)

# Called after every frame; returning False ends the loop.
FrameCallback = Callable[[LayoutGraph, int], bool | None]


class SimulationDriver:
    """Steps the simulation once per displayed frame.

    *wait_for_frame* is the host's frame-sync primitive (for example
    ``pygame.time.Clock.tick``).  Every step counts as one unit of simulated
    time no matter how long the host actually waited.
    """

    def __init__(
        self,
        simulator: ForceSimulator,
        on_frame: FrameCallback | None = None,
        wait_for_frame: Callable[[], object] | None = None,
    ) -> None:
        self.simulator = simulator
        self.on_frame = on_frame
        self.wait_for_frame = wait_for_frame
        self.frames = 0

    @property
    def graph(self) -> LayoutGraph:
        return self.simulator.graph

    def tick(self) -> bool:
        """Advance one frame.  Returns False if the frame callback asked to stop."""
        self.simulator.step()
        self.frames += 1
        if self.on_frame is None:
            return True
        return self.on_frame(self.graph, self.frames) is not False

    def run(self, max_frames: int | None = None) -> int:
        """Loop until *max_frames* or the callback stops it; return frames run.

        With no limit and no callback this never returns.
        """
        logger.info("Simulating %d nodes and %d edges.", len(self.graph), len(self.graph.edges))
        start = self.frames
        while max_frames is None or self.frames - start < max_frames:
            if self.wait_for_frame is not None:
                self.wait_for_frame()
            if not self.tick():
                break
        return self.frames - start
