"""Force simulator: exact single-frame results and long-run stability."""

from __future__ import annotations

import numpy as np
import pytest

from statespace.config import ForceConfig
from statespace.engine.explorer import explore
from statespace.engine.simulation import ForceSimulator
from statespace.models.graph import LayoutGraph
from statespace.models.presets import default_state


def _graph(points: list[tuple[float, float, float]], edges: list[tuple[int, int]] = ()) -> LayoutGraph:
    graph = LayoutGraph()
    for i, p in enumerate(points):
        graph.add_node(f"n{i}", np.array(p, dtype=float))
    for a, b in edges:
        graph.add_edge(f"n{a}", f"n{b}")
    return graph


def _random_graph(rng: np.random.Generator, n: int = 80) -> LayoutGraph:
    """Random points plus a ring and some chords; two nodes start coincident."""
    points = rng.uniform(-1.0, 1.0, size=(n, 3))
    points[1] = points[0]
    edges = [(i, (i + 1) % n) for i in range(n)]
    edges += [tuple(pair) for pair in rng.integers(0, n, size=(n // 4, 2)) if pair[0] != pair[1]]
    return _graph([tuple(p) for p in points], edges)


def test_explored_graph_stays_finite() -> None:
    graph = explore(default_state(), rng=np.random.default_rng(9))
    sim = ForceSimulator(graph, rng=np.random.default_rng(10))
    for _ in range(5):
        sim.step()
    assert np.all(np.isfinite(graph.positions()))


# -- single frame -------------------------------------------------------------


def test_repulsion_only() -> None:
    graph = _graph([(0, 0, 0), (1, 0, 0)])
    ForceSimulator(graph).step()

    a, b = graph.node("n0"), graph.node("n1")
    # force 0.3 / 1^2, velocity damped by 0.2
    np.testing.assert_allclose(a.acceleration, [-0.3, 0, 0])
    np.testing.assert_allclose(a.velocity, [-0.06, 0, 0])
    np.testing.assert_allclose(a.position, [-0.06, 0, 0])
    np.testing.assert_allclose(b.position, [1.06, 0, 0])


def test_repulsion_falls_off_with_square_of_distance() -> None:
    graph = _graph([(0, 0, 0), (0, 2, 0)])
    sim = ForceSimulator(graph)
    forces = sim.repulsive_forces(graph.positions())
    np.testing.assert_allclose(forces, [[0, -0.075, 0], [0, 0.075, 0]])


def test_stretched_spring_pulls_together() -> None:
    graph = _graph([(0, 0, 0), (1, 0, 0)], edges=[(0, 1)])
    ForceSimulator(graph).step()

    # repulsion -0.3 plus spring 0.3 * (1 - 0.2) = 0.24
    a, b = graph.node("n0"), graph.node("n1")
    assert a.acceleration[0] == pytest.approx(-0.06)
    assert a.position[0] == pytest.approx(-0.012)
    assert b.position[0] == pytest.approx(1.012)


def test_compressed_spring_pushes_apart() -> None:
    graph = _graph([(0, 0, 0), (0, 0, 0.1)], edges=[(0, 1)])
    sim = ForceSimulator(graph)
    forces = sim.attractive_forces(graph.positions())
    # 0.3 * (0.1 - 0.2) = -0.03 along +z for the source
    np.testing.assert_allclose(forces, [[0, 0, -0.03], [0, 0, 0.03]])


def test_duplicate_edges_add_up() -> None:
    single = _graph([(0, 0, 0), (1, 0, 0)], edges=[(0, 1)])
    double = _graph([(0, 0, 0), (1, 0, 0)], edges=[(0, 1), (1, 0)])
    f1 = ForceSimulator(single).attractive_forces(single.positions())
    f2 = ForceSimulator(double).attractive_forces(double.positions())
    np.testing.assert_allclose(f2, 2 * f1)


def test_coincident_edge_contributes_nothing() -> None:
    graph = _graph([(0.5, 0.5, 0.5), (0.5, 0.5, 0.5)], edges=[(0, 1)])
    forces = ForceSimulator(graph).attractive_forces(graph.positions())
    np.testing.assert_array_equal(forces, np.zeros((2, 3)))


def test_forces_read_frame_start_snapshot() -> None:
    points = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)]
    forward = _graph(points, edges=[(0, 1), (1, 2), (2, 3)])
    backward = LayoutGraph()
    for i in reversed(range(len(points))):
        backward.add_node(f"n{i}", np.array(points[i], dtype=float))
    for a, b in [(0, 1), (1, 2), (2, 3)]:
        backward.add_edge(f"n{a}", f"n{b}")

    ForceSimulator(forward).step()
    ForceSimulator(backward).step()

    for i in range(len(points)):
        np.testing.assert_allclose(
            forward.node(f"n{i}").position, backward.node(f"n{i}").position
        )


# -- coincident nodes ---------------------------------------------------------


def test_coincident_nodes_get_strong_nudge() -> None:
    graph = _graph([(0, 0, 0), (0, 0, 0)])
    ForceSimulator(graph, rng=np.random.default_rng(11)).step()

    for node in graph:
        # 0.3 * 1000 force, damped by 0.2
        assert np.linalg.norm(node.acceleration) == pytest.approx(300.0)
        assert np.linalg.norm(node.velocity) == pytest.approx(60.0)
        assert np.all(np.isfinite(node.position))


def test_coincident_nudge_is_reproducible_with_seed() -> None:
    a = _graph([(1, 1, 1), (1, 1, 1), (1, 1, 1)])
    b = _graph([(1, 1, 1), (1, 1, 1), (1, 1, 1)])
    ForceSimulator(a, rng=np.random.default_rng(42)).step()
    ForceSimulator(b, rng=np.random.default_rng(42)).step()
    np.testing.assert_array_equal(a.positions(), b.positions())


def test_nudge_multiplier_is_configurable() -> None:
    graph = _graph([(0, 0, 0), (0, 0, 0)])
    config = ForceConfig(coincident_multiplier=10.0)
    ForceSimulator(graph, config, rng=np.random.default_rng(0)).step()
    assert np.linalg.norm(graph.node("n0").acceleration) == pytest.approx(3.0)


# -- stability ----------------------------------------------------------------


@pytest.mark.parametrize("damping", [0.05, 0.2, 0.5])
def test_no_divergence(damping: float) -> None:
    graph = _random_graph(np.random.default_rng(7))
    sim = ForceSimulator(graph, ForceConfig(damping=damping), rng=np.random.default_rng(8))
    for _ in range(50):
        sim.step()
    assert np.all(np.isfinite(graph.positions()))
    assert np.all(np.isfinite(graph.velocities()))
    assert sim.frame == 50


def test_energy_decays_on_small_graph() -> None:
    graph = _graph([(0, 0, 0), (0.3, 0, 0), (0, 0.3, 0)], edges=[(0, 1), (1, 2), (2, 0)])
    sim = ForceSimulator(graph)
    for _ in range(300):
        sim.step()
    assert graph.kinetic_energy() < 1e-8


def test_empty_graph_step_is_noop() -> None:
    sim = ForceSimulator(LayoutGraph())
    sim.step()
    assert sim.frame == 0


# -- config -------------------------------------------------------------------


@pytest.mark.parametrize("damping", [0.0, 1.0, -0.5, 1.5])
def test_damping_must_be_strictly_inside_unit_interval(damping: float) -> None:
    with pytest.raises(ValueError):
        ForceConfig(damping=damping)


def test_near_distance_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ForceConfig(near_distance=0.0)
