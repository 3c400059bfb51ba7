"""Pygame viewer — draws the state-space graph while the layout settles.

Nodes are projected with a simple perspective camera that orbits the
origin.  Drag with the left mouse button to rotate, scroll to zoom, press
R to re-centre and Esc / Q to quit.
"""

from __future__ import annotations

import logging
import math

import numpy as np
import pygame

from statespace.config import ExplorerConfig, ForceConfig
from statespace.engine.explorer import StateSpaceExplorer
from statespace.engine.simulation import ForceSimulator, SimulationDriver
from statespace.models.graph import LayoutGraph
from statespace.models.puzzle import PuzzleState

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_SURFACE1 = (69, 71, 90)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_GREEN = (166, 227, 161)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 900, 700
FPS = 60
NODE_RADIUS = 4
CAMERA_DISTANCE = 5.0
FOCAL_LENGTH = 600.0


# ---------------------------------------------------------------------------
# Camera
# ---------------------------------------------------------------------------
class _Camera:
    """Orbit camera around the origin: yaw/pitch in radians plus zoom."""

    __slots__ = ("yaw", "pitch", "zoom")

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.yaw = 0.0
        self.pitch = 0.0
        self.zoom = 1.0

    def rotate(self, dx: float, dy: float) -> None:
        self.yaw += dx * 0.01
        self.pitch = max(-math.pi / 2, min(math.pi / 2, self.pitch + dy * 0.01))

    def project(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Return screen ``(x, y)`` coordinates and a visibility mask."""
        cy, sy = math.cos(self.yaw), math.sin(self.yaw)
        cp, sp = math.cos(self.pitch), math.sin(self.pitch)
        x = points[:, 0] * cy + points[:, 2] * sy
        z = -points[:, 0] * sy + points[:, 2] * cy
        y = points[:, 1] * cp - z * sp
        z = points[:, 1] * sp + z * cp

        depth = CAMERA_DISTANCE / self.zoom - z
        visible = depth > 0.1
        scale = FOCAL_LENGTH / np.where(visible, depth, 1.0)
        screen = np.stack((WIN_W / 2 + x * scale, WIN_H / 2 - y * scale), axis=-1)
        return screen, visible


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, graph: LayoutGraph, simulator: ForceSimulator, root_id: str) -> None:
        self._graph = graph
        self._root_id = root_id
        self._camera = _Camera()
        self._dragging = False

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("State Space")
        self._clock = pygame.time.Clock()
        self._f_small = pygame.font.SysFont("Helvetica", 14)

        self._driver = SimulationDriver(
            simulator,
            on_frame=self._on_frame,
            wait_for_frame=lambda: self._clock.tick(FPS),
        )

    # ── events ──────────────────────────────────────────────────────────────

    def _handle_events(self) -> bool:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                return False
            if ev.type == pygame.KEYDOWN:
                if ev.key in (pygame.K_ESCAPE, pygame.K_q):
                    return False
                if ev.key == pygame.K_r:
                    self._camera.reset()
            elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                self._dragging = True
            elif ev.type == pygame.MOUSEBUTTONUP and ev.button == 1:
                self._dragging = False
            elif ev.type == pygame.MOUSEMOTION and self._dragging:
                self._camera.rotate(*ev.rel)
            elif ev.type == pygame.MOUSEWHEEL:
                self._camera.zoom = max(0.1, self._camera.zoom * (1.1 ** ev.y))
        return True

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw(self, frame: int) -> None:
        self._surf.fill(COL_BASE)
        graph = self._graph
        positions = graph.positions()
        if len(positions):
            # Keep the layout's centre of mass at the orbit centre.
            offset = positions.mean(axis=0)
            screen, visible = self._camera.project(positions - offset)

            for a, b in graph.edge_index():
                if visible[a] and visible[b]:
                    pygame.draw.aaline(self._surf, COL_SURFACE1, screen[a], screen[b])

            root = graph.index_of(self._root_id)
            for i, (x, y) in enumerate(screen):
                if not visible[i]:
                    continue
                colour = COL_GREEN if i == root else COL_BLUE
                radius = NODE_RADIUS + 2 if i == root else NODE_RADIUS
                pygame.draw.circle(self._surf, colour, (int(x), int(y)), radius)

        hud = self._f_small.render(
            f"{len(graph)} states   {len(graph.edges)} moves   frame {frame}   "
            f"energy {graph.kinetic_energy():.4f}",
            True,
            COL_TEXT,
        )
        self._surf.blit(hud, (12, 10))
        hint = self._f_small.render("drag: rotate   wheel: zoom   R: reset   Q: quit", True, COL_SUBTEXT)
        self._surf.blit(hint, (12, WIN_H - 26))
        pygame.display.flip()

    def _on_frame(self, graph: LayoutGraph, frame: int) -> bool:
        if not self._handle_events():
            return False
        self._draw(frame)
        return True

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        try:
            self._driver.run()
        finally:
            pygame.quit()
        logger.info("Viewer closed after %d frames.", self._driver.frames)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    state: PuzzleState,
    seed: int | None = None,
    max_states: int | None = None,
    force_config: ForceConfig | None = None,
) -> None:
    """Explore *state* and open the viewer; runs until the window is closed."""
    rng = np.random.default_rng(seed)
    explorer = StateSpaceExplorer(rng=rng, config=ExplorerConfig(max_states=max_states))
    explorer.explore(state)
    logger.debug("Opening viewer on %d configurations.", len(explorer.graph))

    simulator = ForceSimulator(explorer.graph, force_config, rng=rng)
    app = PygameApp(explorer.graph, simulator, root_id=state.id)
    app.run_loop()
