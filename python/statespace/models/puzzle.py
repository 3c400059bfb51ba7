"""Block and puzzle-state value types."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace

from statespace.engine.codec import EMPTY, block_cells, encode, validate_layout


@dataclass(frozen=True)
class Block:
    """A straight run of ``length`` cells starting at ``(x, y)``.

    Horizontal blocks extend (and slide) along x, vertical ones along y.
    """

    x: int
    y: int
    is_horizontal: bool
    length: int

    def cells(self) -> Iterator[tuple[int, int]]:
        return block_cells(self)

    def shifted(self, delta: int) -> Block:
        """Return a copy moved *delta* cells along the block's own axis."""
        if self.is_horizontal:
            return replace(self, x=self.x + delta)
        return replace(self, y=self.y + delta)


@dataclass(frozen=True, eq=False)
class PuzzleState:
    """One configuration: an ordered tuple of blocks on a square board.

    Equality and hashing go through :attr:`id`, the canonical encoding.
    """

    size: int
    blocks: tuple[Block, ...]
    id: str = field(default="")

    def __post_init__(self) -> None:
        if not self.id:
            object.__setattr__(self, "id", encode(self.blocks, self.size))

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_blocks(cls, size: int, blocks: Iterable[Block]) -> PuzzleState:
        """Validate *blocks* and build the state.

        Raises :class:`~statespace.errors.LayoutError` for overlapping or
        out-of-bounds layouts.
        """
        blocks = tuple(blocks)
        validate_layout(blocks, size)
        return cls(size=size, blocks=blocks)

    def with_block(self, index: int, block: Block) -> PuzzleState:
        """Return a new state with block *index* replaced (not re-validated)."""
        blocks = self.blocks[:index] + (block,) + self.blocks[index + 1 :]
        return PuzzleState(size=self.size, blocks=blocks)

    # -- queries --------------------------------------------------------------

    def is_empty(self, x: int, y: int) -> bool:
        return self.id[y * self.size + x] == EMPTY

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleState):
            return NotImplemented
        return self.size == other.size and self.id == other.id

    def __hash__(self) -> int:
        return hash((self.size, self.id))
