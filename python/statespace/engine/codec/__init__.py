from statespace.engine.codec.codec import (
    EMPTY,
    LABELS,
    block_cells,
    decode,
    encode,
    validate_layout,
)

__all__ = ["EMPTY", "LABELS", "block_cells", "decode", "encode", "validate_layout"]
