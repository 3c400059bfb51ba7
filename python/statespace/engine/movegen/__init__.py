from statespace.engine.movegen.moves import Move, apply_move, legal_moves, moves_of

__all__ = ["Move", "apply_move", "legal_moves", "moves_of"]
