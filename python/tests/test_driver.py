"""Simulation driver frame loop."""

from __future__ import annotations

import numpy as np

from statespace.engine.simulation import ForceSimulator, SimulationDriver
from statespace.models.graph import LayoutGraph


def _simulator() -> ForceSimulator:
    graph = LayoutGraph()
    graph.add_node("a", np.array([0.0, 0.0, 0.0]))
    graph.add_node("b", np.array([1.0, 0.0, 0.0]))
    graph.add_edge("a", "b")
    return ForceSimulator(graph, rng=np.random.default_rng(0))


def test_run_stops_after_max_frames() -> None:
    sim = _simulator()
    driver = SimulationDriver(sim)
    assert driver.run(max_frames=25) == 25
    assert driver.frames == 25
    assert sim.frame == 25


def test_callback_sees_every_frame_in_order() -> None:
    seen: list[int] = []
    driver = SimulationDriver(_simulator(), on_frame=lambda g, frame: seen.append(frame))
    driver.run(max_frames=4)
    assert seen == [1, 2, 3, 4]


def test_callback_returning_false_stops_the_loop() -> None:
    driver = SimulationDriver(_simulator(), on_frame=lambda g, frame: frame < 3)
    # No frame limit: the callback is the only way out.
    assert driver.run() == 3


def test_wait_for_frame_called_before_each_step() -> None:
    events: list[str] = []
    sim = _simulator()
    original_step = sim.step

    def step() -> None:
        events.append("step")
        original_step()

    sim.step = step  # type: ignore[method-assign]
    driver = SimulationDriver(sim, wait_for_frame=lambda: events.append("wait"))
    driver.run(max_frames=2)
    assert events == ["wait", "step", "wait", "step"]


def test_callback_reads_updated_positions() -> None:
    captured: list[np.ndarray] = []
    driver = SimulationDriver(
        _simulator(), on_frame=lambda g, frame: captured.append(g.edge_segments())
    )
    driver.tick()
    segment = captured[0][0]
    np.testing.assert_allclose(segment[0], driver.graph.node("a").position)
    np.testing.assert_allclose(segment[1], driver.graph.node("b").position)
    assert segment[0][0] != 0.0


def test_run_resumes_counting_from_current_frame() -> None:
    driver = SimulationDriver(_simulator())
    driver.run(max_frames=3)
    assert driver.run(max_frames=2) == 2
    assert driver.frames == 5
