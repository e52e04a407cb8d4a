"""
Core types and constants.

This module contains the fundamental types used throughout the engine:
- Move: the four slide directions
- Bit layout of rows and boards
- The canonical tile-spawn distribution
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


# ─── Bit Layout ───────────────────────────────────────────────────────────────
#
#   A row is four 4-bit ranks in a 16-bit word, cell 0 in the lowest nibble.
#   A board is four rows in a 64-bit word, row 0 (top) in the lowest 16 bits.
#   Rank 0 is an empty cell; rank r >= 1 is the tile 2**r.

RANK_BITS = 4
RANK_MASK = 0xF
MAX_RANK = 15

ROW_BITS = 16
ROW_MASK = 0xFFFF
NUM_ROWS = 1 << ROW_BITS  # every possible row pattern

BOARD_CELLS = 16
BOARD_MASK = 0xFFFF_FFFF_FFFF_FFFF

# ─── Tile Spawns ──────────────────────────────────────────────────────────────

# (rank, probability) pairs: a 2-tile 90% of the time, a 4-tile otherwise
SPAWN_DISTRIBUTION: Tuple[Tuple[int, float], ...] = ((1, 0.9), (2, 0.1))

# addRandomTile draws from ten equally likely outcomes, one of which is a 4
SPAWN_FOUR_ONE_IN = 10

# ──────────────────────────────────────────────────────────────────────────────

NO_MOVE_CODE = -1


class Move(Enum):
    """Slide direction. Values are the integer codes used by host environments."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @classmethod
    def all(cls) -> Tuple["Move", ...]:
        """All moves in search order."""
        return ALL_MOVES

    @classmethod
    def from_int(cls, code: int) -> "Move":
        try:
            return cls(code)
        except ValueError as e:
            raise ValueError(
                f"Invalid move code: {code}. Expected 0 (up), 1 (right), 2 (down) or 3 (left)"
            ) from e

    def to_int(self) -> int:
        return self.value

    @property
    def arrow(self) -> str:
        return _ARROWS[self]


ALL_MOVES: Tuple[Move, ...] = (Move.UP, Move.DOWN, Move.LEFT, Move.RIGHT)

_ARROWS = {Move.UP: "↑", Move.RIGHT: "→", Move.DOWN: "↓", Move.LEFT: "←"}
