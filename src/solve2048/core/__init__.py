"""
Core module - packed board engine.

This module provides the building blocks used by every player:
row transforms, the row/move cache, and the bit-packed Board.
"""

from solve2048.core.types import (
    Move,
    ALL_MOVES,
    MAX_RANK,
    NO_MOVE_CODE,
    SPAWN_DISTRIBUTION,
)
from solve2048.core.row import (
    MoveCache,
    move_cache,
    reverse_row,
    shift_row_left,
    shift_row_right,
)
from solve2048.core.board import Board, MoveRecord, execute_move, legal_moves

__all__ = [
    # Types
    "Move",
    "Board",
    "MoveRecord",
    "MoveCache",
    # Constants
    "ALL_MOVES",
    "MAX_RANK",
    "NO_MOVE_CODE",
    "SPAWN_DISTRIBUTION",
    # Functions
    "move_cache",
    "reverse_row",
    "shift_row_left",
    "shift_row_right",
    "execute_move",
    "legal_moves",
]
