"""Tunable constants for exploration and the force simulation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ForceConfig:
    """Physical constants of the force-directed layout.

    ``coincident_multiplier`` scales the nudge applied to two nodes that sit
    on top of each other.  It is an ad hoc constant, not a physical limit.
    """

    repulsion_strength: float = 0.3
    spring_length: float = 0.2
    spring_strength: float = 0.3
    damping: float = 0.2
    near_distance: float = 0.001
    coincident_multiplier: float = 1000.0

    def __post_init__(self) -> None:
        if not 0.0 < self.damping < 1.0:
            raise ValueError(
                f"damping must lie strictly between 0 and 1, got {self.damping}."
            )
        if self.near_distance <= 0.0:
            raise ValueError(
                f"near_distance must be positive, got {self.near_distance}."
            )


@dataclass(frozen=True)
class ExplorerConfig:
    """Settings for the state-space traversal."""

    # Half-width of the cube new nodes are scattered in.
    initial_spread: float = 1.0
    max_states: int | None = None
