"""Built-in layouts and JSON layout loading."""

from __future__ import annotations

import json
from pathlib import Path

from statespace.errors import LayoutError
from statespace.models.puzzle import Block, PuzzleState

DEFAULT_SIZE = 5

# Seven blocks on a 5×5 board.  Block 2 sits at (0, 1) so that it clears
# the vertical block in column 2.
DEFAULT_BLOCKS: tuple[Block, ...] = (
    Block(x=0, y=0, is_horizontal=True, length=2),
    Block(x=3, y=3, is_horizontal=False, length=1),
    Block(x=0, y=1, is_horizontal=True, length=2),
    Block(x=2, y=0, is_horizontal=False, length=3),
    Block(x=0, y=2, is_horizontal=False, length=2),
    Block(x=3, y=1, is_horizontal=False, length=2),
    Block(x=1, y=4, is_horizontal=True, length=2),
)


def default_state() -> PuzzleState:
    return PuzzleState.from_blocks(DEFAULT_SIZE, DEFAULT_BLOCKS)


def _require_int(value: object, what: str) -> int:
    # bool is an int subclass, but true/false is never a coordinate.
    if isinstance(value, bool) or not isinstance(value, int):
        raise LayoutError(f"{what} must be an integer, got {value!r}.")
    return value


def _block_from_data(data: object, index: int) -> Block:
    if not isinstance(data, dict):
        raise LayoutError(f"Block {index} must be an object, got {data!r}.")
    try:
        horizontal = data["isHorizontal"] if "isHorizontal" in data else data["is_horizontal"]
        x, y, length = data["x"], data["y"], data["length"]
    except KeyError as exc:
        raise LayoutError(f"Block {index} is missing {exc}.") from exc

    if not isinstance(horizontal, bool):
        raise LayoutError(
            f"Block {index} orientation must be true or false, got {horizontal!r}."
        )
    return Block(
        x=_require_int(x, f"Block {index} x"),
        y=_require_int(y, f"Block {index} y"),
        is_horizontal=horizontal,
        length=_require_int(length, f"Block {index} length"),
    )


def state_from_data(data: object) -> PuzzleState:
    """Build a validated state from ``{"size": ..., "blocks": [...]}``."""
    if not isinstance(data, dict) or "size" not in data or "blocks" not in data:
        raise LayoutError("Layout needs 'size' and 'blocks'.")
    size = _require_int(data["size"], "Board size")
    if not isinstance(data["blocks"], list):
        raise LayoutError(f"'blocks' must be a list, got {data['blocks']!r}.")
    blocks = [_block_from_data(b, i) for i, b in enumerate(data["blocks"])]
    return PuzzleState.from_blocks(size, blocks)


def load_layout(path: Path) -> PuzzleState:
    """Read a layout JSON file.

    Example::

        {"size": 5, "blocks": [{"x": 0, "y": 0, "isHorizontal": true, "length": 2}]}
    """
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as exc:
        raise LayoutError(f"{path} is not valid JSON: {exc}") from exc
    return state_from_data(data)
