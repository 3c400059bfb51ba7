#!/usr/bin/env python3
"""Sliding-block state-space explorer.

Usage::

    python main.py                        # interactive menu
    python main.py -f rich --frames 500   # Rich terminal, 500 frames
    python main.py -f pygame --seed 7     # Pygame 3D viewer
    python main.py -l two_blocks -f rich  # bundled layout from data/
    python main.py -l path/to/layout.json
"""

import importlib
import sys
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from statespace.config import ForceConfig  # noqa: E402
from statespace.errors import StateSpaceError  # noqa: E402
from statespace.models.presets import default_state, load_layout  # noqa: E402
from statespace.models.puzzle import PuzzleState  # noqa: E402
from statespace.utils.logging_utils import get_level_from_string, setup_logging  # noqa: E402

console = Console()


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "viewer.cli.rich.app",
    Frontend.pygame: "viewer.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _launch(
    frontend: Frontend,
    state: PuzzleState,
    frames: int,
    seed: Optional[int],
    max_states: Optional[int],
    force_config: ForceConfig,
) -> None:
    mod = importlib.import_module(_RUNNERS[frontend])
    if frontend is Frontend.rich:
        mod.run(state, frames=frames, seed=seed, max_states=max_states, force_config=force_config)
    else:
        mod.run(state, seed=seed, max_states=max_states, force_config=force_config)


def _resolve_layout(layout: Path) -> Path:
    """Find *layout* as given, or as a bundled file under ``DATA_DIR``."""
    candidates = [layout, DATA_DIR / layout, DATA_DIR / layout.with_suffix(".json")]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise typer.BadParameter(
        f"No layout file {layout} (also looked in {DATA_DIR}).",
        param_hint="'--layout'",
    )


def _menu_loop(launch: Callable[[Frontend], None]) -> None:
    while True:
        print()
        print("  ====================================")
        print("        S T A T E   S P A C E         ")
        print("  ====================================")
        print()
        print("  1.  Explore  (Rich Terminal)")
        print("  2.  Explore  (Pygame 3D Viewer)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return
        if choice == "1":
            launch(Frontend.rich)
        elif choice == "2":
            launch(Frontend.pygame)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    layout: Optional[Path] = typer.Option(
        None, "-l", "--layout",
        help=(
            "JSON layout file, or the name of one bundled in data/ "
            "(e.g. two_blocks). Defaults to the built-in seven-block 5x5 puzzle."
        ),
    ),
    frames: int = typer.Option(
        300, "--frames",
        min=1,
        help="Frames to simulate in the Rich frontend. The pygame viewer ignores it and runs until closed.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for initial node positions and coincidence nudges.",
    ),
    max_states: Optional[int] = typer.Option(
        None, "--max-states",
        min=1,
        help="Abort exploration after this many configurations.",
    ),
    damping: float = typer.Option(
        ForceConfig.damping, "--damping",
        help="Per-frame velocity damping, strictly between 0 and 1.",
    ),
    log_level: str = typer.Option(
        "warning", "--log-level",
        help="debug, info, warning or error.",
    ),
) -> None:
    """Explore a sliding-block puzzle and lay out its state space."""
    setup_logging(get_level_from_string(log_level))

    try:
        force_config = ForceConfig(damping=damping)
        state = load_layout(_resolve_layout(layout)) if layout is not None else default_state()

        def launch(chosen: Frontend) -> None:
            _launch(chosen, state, frames, seed, max_states, force_config)

        if frontend is None:
            _menu_loop(launch)
        else:
            launch(frontend)
    except (StateSpaceError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
