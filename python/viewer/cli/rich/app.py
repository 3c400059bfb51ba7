"""Rich terminal frontend — explores a layout and streams the simulation.

Shows the starting board, a summary of the explored state-space graph, and
a live table of the layout settling frame by frame.
"""

from __future__ import annotations

import logging

import numpy as np
import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from statespace.config import ExplorerConfig, ForceConfig
from statespace.engine.codec import EMPTY, LABELS, decode
from statespace.engine.explorer import StateSpaceExplorer
from statespace.engine.movegen import moves_of
from statespace.engine.simulation import ForceSimulator, SimulationDriver
from statespace.models.graph import LayoutGraph
from statespace.models.puzzle import PuzzleState

logger = logging.getLogger(__name__)

console = Console()

BLOCK_STYLES = ["red", "blue", "green", "yellow", "magenta", "dark_orange", "pink1", "cyan", "bright_magenta", "green_yellow"]

# Live table refresh interval, in frames.
REFRESH_EVERY = 5


# -- rendering ----------------------------------------------------------------


def _render_board(state: PuzzleState) -> Table:
    """Return a Rich Table drawing each block in its own colour."""
    table = Table(
        show_header=False,
        show_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(state.size):
        table.add_column(width=1, justify="center")

    for row in decode(state.id, state.size):
        cells: list[str] = []
        for label in row:
            if label == EMPTY:
                cells.append("[dim]·[/dim]")
            else:
                style = BLOCK_STYLES[LABELS.index(label) % len(BLOCK_STYLES)]
                cells.append(f"[bold {style}]{label}[/bold {style}]")
        table.add_row(*cells)

    return table


def _summary(state: PuzzleState, graph: LayoutGraph) -> Table:
    table = Table(box=rich.box.ROUNDED, show_header=False, border_style="dim")
    table.add_column(style="dim")
    table.add_column(justify="right", style="bold yellow")
    table.add_row("Board", f"{state.size}×{state.size}")
    table.add_row("Blocks", str(len(state.blocks)))
    table.add_row("Moves from start", str(len(moves_of(state))))
    table.add_row("Configurations", str(len(graph)))
    table.add_row("Edges", str(len(graph.edges)))
    return table


def _frame_table(graph: LayoutGraph, frame: int) -> Table:
    positions = graph.positions()
    extent = float(np.ptp(positions, axis=0).max()) if len(positions) else 0.0

    table = Table(box=rich.box.SIMPLE, border_style="cyan")
    table.add_column("Frame", justify="right", style="bold cyan")
    table.add_column("Kinetic energy", justify="right", style="yellow")
    table.add_column("Extent", justify="right", style="yellow")
    table.add_row(str(frame), f"{graph.kinetic_energy():.6f}", f"{extent:.3f}")
    return table


# -- public entry point -------------------------------------------------------


def run(
    state: PuzzleState,
    frames: int = 300,
    seed: int | None = None,
    max_states: int | None = None,
    force_config: ForceConfig | None = None,
) -> LayoutGraph:
    """Explore *state*, then simulate *frames* frames while showing progress."""
    rng = np.random.default_rng(seed)
    explorer = StateSpaceExplorer(rng=rng, config=ExplorerConfig(max_states=max_states))

    with console.status("[bold cyan]Exploring state space…"):
        explorer.explore(state)
    graph = explorer.graph

    console.print()
    console.print(
        Align.center(
            Panel(
                Group(Align.center(_render_board(state)), Text(""), Align.center(_summary(state, graph))),
                title="[bold]S T A T E   S P A C E[/bold]",
                border_style="bright_blue",
                padding=(1, 2),
            )
        )
    )

    simulator = ForceSimulator(graph, force_config, rng=rng)

    with Live(_frame_table(graph, 0), console=console, refresh_per_second=20) as live:

        def on_frame(g: LayoutGraph, frame: int) -> None:
            if frame % REFRESH_EVERY == 0:
                live.update(_frame_table(g, frame))

        driver = SimulationDriver(simulator, on_frame=on_frame)
        driver.run(max_frames=frames)
        live.update(_frame_table(graph, driver.frames))

    logger.info("Simulated %d frames, kinetic energy %.6f.", driver.frames, graph.kinetic_energy())

    return graph
