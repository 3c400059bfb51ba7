"""Exception types raised by the state-space core."""

from __future__ import annotations


class StateSpaceError(Exception):
    """Base class for every error the core raises on purpose."""


class LayoutError(StateSpaceError, ValueError):
    """The initial block layout is malformed (overlap, out of bounds, ...)."""


class StateSpaceLimitError(StateSpaceError):
    """Exploration discovered more states than the caller allowed."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"State space exceeds the limit of {limit} configurations."
        )
        self.limit = limit
