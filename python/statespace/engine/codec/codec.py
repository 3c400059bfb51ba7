"""Canonical string encoding of a block layout.

A layout on a ``size x size`` board is encoded row-major as ``size * size``
characters.  Each cell holds the label of the block covering it (the i-th
block gets the i-th label) or :data:`EMPTY`.  Two layouts are the same
configuration exactly when their encodings are equal.
"""

from __future__ import annotations

import string
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from statespace.errors import LayoutError

if TYPE_CHECKING:
    from statespace.models.puzzle import Block

EMPTY = "."
LABELS = string.ascii_uppercase + string.ascii_lowercase + string.digits


def block_cells(block: Block) -> Iterator[tuple[int, int]]:
    """Yield the ``(x, y)`` cells covered by *block*."""
    for i in range(block.length):
        if block.is_horizontal:
            yield block.x + i, block.y
        else:
            yield block.x, block.y + i


def encode(blocks: Sequence[Block], size: int) -> str:
    """Return the identifier of *blocks* on a *size* board.

    Overlap is not detected here; callers are expected to have validated
    the layout (see :func:`validate_layout`).
    """
    if len(blocks) > len(LABELS):
        raise LayoutError(
            f"At most {len(LABELS)} blocks can be encoded, got {len(blocks)}."
        )
    cells = [EMPTY] * (size * size)
    for index, block in enumerate(blocks):
        label = LABELS[index]
        for x, y in block_cells(block):
            cells[y * size + x] = label
    return "".join(cells)


def decode(identifier: str, size: int) -> list[list[str]]:
    """Split an identifier back into rows of cell labels."""
    if len(identifier) != size * size:
        raise LayoutError(
            f"Expected {size * size} cells for a {size}×{size} board, "
            f"got {len(identifier)}."
        )
    return [list(identifier[r * size : (r + 1) * size]) for r in range(size)]


def validate_layout(blocks: Sequence[Block], size: int) -> None:
    """Raise :class:`LayoutError` unless *blocks* is a legal layout."""
    if size <= 0:
        raise LayoutError(f"Board size must be positive, got {size}.")
    if len(blocks) > len(LABELS):
        raise LayoutError(
            f"At most {len(LABELS)} blocks are supported, got {len(blocks)}."
        )

    owner: dict[tuple[int, int], int] = {}
    for index, block in enumerate(blocks):
        if block.length <= 0:
            raise LayoutError(
                f"Block {index} has non-positive length {block.length}."
            )
        for x, y in block_cells(block):
            if not (0 <= x < size and 0 <= y < size):
                raise LayoutError(
                    f"Block {index} leaves the {size}×{size} board at ({x}, {y})."
                )
            if (x, y) in owner:
                raise LayoutError(
                    f"Blocks {owner[(x, y)]} and {index} overlap at ({x}, {y})."
                )
            owner[(x, y)] = index
