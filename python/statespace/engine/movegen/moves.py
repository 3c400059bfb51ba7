"""Single-step move generation."""

from __future__ import annotations

from dataclasses import dataclass

from statespace.errors import LayoutError
from statespace.models.puzzle import PuzzleState


@dataclass(frozen=True)
class Move:
    """Slide block ``block_index`` by ``delta`` (-1 or +1) along its own axis."""

    block_index: int
    delta: int


def _leading_cell(state: PuzzleState, index: int, delta: int) -> tuple[int, int]:
    """Cell the block would newly cover when shifted by *delta*."""
    block = state.blocks[index]
    if block.is_horizontal:
        x = block.x - 1 if delta < 0 else block.x + block.length
        return x, block.y
    y = block.y - 1 if delta < 0 else block.y + block.length
    return block.x, y


def _is_legal(state: PuzzleState, index: int, delta: int) -> bool:
    x, y = _leading_cell(state, index, delta)
    if not (0 <= x < state.size and 0 <= y < state.size):
        return False
    return state.is_empty(x, y)


def _shift(state: PuzzleState, move: Move) -> PuzzleState:
    block = state.blocks[move.block_index]
    return state.with_block(move.block_index, block.shifted(move.delta))


def legal_moves(state: PuzzleState) -> list[Move]:
    """Return every legal move, by block index, decrement before increment."""
    return [
        Move(index, delta)
        for index in range(len(state.blocks))
        for delta in (-1, 1)
        if _is_legal(state, index, delta)
    ]


def apply_move(state: PuzzleState, move: Move) -> PuzzleState:
    """Apply *move* to *state*.

    Raises :class:`~statespace.errors.LayoutError` if the move would leave the
    board, run into another block, or is not a single step.
    """
    if not 0 <= move.block_index < len(state.blocks):
        raise LayoutError(f"There is no block {move.block_index} to move.")
    if move.delta not in (-1, 1):
        raise LayoutError(f"Moves are single steps, got delta {move.delta}.")
    if not _is_legal(state, move.block_index, move.delta):
        x, y = _leading_cell(state, move.block_index, move.delta)
        raise LayoutError(
            f"Block {move.block_index} cannot move by {move.delta}: cell ({x}, {y}) "
            "is off the board or occupied."
        )
    return _shift(state, move)


def moves_of(state: PuzzleState) -> list[PuzzleState]:
    """Return the configurations one legal move away from *state*."""
    return [_shift(state, move) for move in legal_moves(state)]
