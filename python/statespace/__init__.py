"""Sliding-block state-space exploration and force-directed graph layout."""

from statespace.engine.explorer import StateSpaceExplorer, explore
from statespace.engine.movegen import moves_of
from statespace.engine.simulation import ForceSimulator, SimulationDriver
from statespace.models import Block, LayoutGraph, PuzzleState

__all__ = [
    "Block",
    "ForceSimulator",
    "LayoutGraph",
    "PuzzleState",
    "SimulationDriver",
    "StateSpaceExplorer",
    "explore",
    "moves_of",
]
