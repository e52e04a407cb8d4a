"""
Board state - the 4x4 grid packed into one 64-bit integer.

Sixteen 4-bit ranks, row-major, row 0 (top) in the lowest 16 bits and
cell 0 of each row in its lowest nibble. Moves are four row-table reads;
rotations and mirrors are masked bit shuffles over the whole word.

The module-level functions work on raw integers and are what the search
uses in its inner loops. ``Board`` wraps them as a mutable value type.
"""

from __future__ import annotations

import random
from typing import Iterable, List, NamedTuple, Optional, Tuple

from solve2048.core.row import move_cache
from solve2048.core.types import (
    ALL_MOVES,
    BOARD_CELLS,
    BOARD_MASK,
    MAX_RANK,
    RANK_MASK,
    ROW_MASK,
    SPAWN_FOUR_ONE_IN,
    Move,
)


# =============================================================================
# Bit Permutations
# =============================================================================

def transpose(raw: int) -> int:
    """Swap across the main diagonal (cell r*4+c <-> c*4+r)."""
    step = (
        (raw & 0xF0F00F0FF0F00F0F)
        | ((raw & 0x0000F0F00000F0F0) << 12)
        | ((raw & 0x0F0F00000F0F0000) >> 12)
    )
    return (
        (step & 0xFF00FF0000FF00FF)
        | ((step & 0x00000000FF00FF00) << 24)
        | ((step & 0x00FF00FF00000000) >> 24)
    )


def flip_horizontal(raw: int) -> int:
    """Mirror every row left-right."""
    return (
        ((raw & 0x000F000F000F000F) << 12)
        | ((raw & 0x00F000F000F000F0) << 4)
        | ((raw & 0x0F000F000F000F00) >> 4)
        | ((raw & 0xF000F000F000F000) >> 12)
    )


def flip_vertical(raw: int) -> int:
    """Mirror the row order top-bottom."""
    return (
        ((raw & 0x000000000000FFFF) << 48)
        | ((raw & 0x00000000FFFF0000) << 16)
        | ((raw & 0x0000FFFF00000000) >> 16)
        | ((raw & 0xFFFF000000000000) >> 48)
    )


def clockwise(raw: int) -> int:
    return flip_horizontal(transpose(raw))


def counterclockwise(raw: int) -> int:
    return flip_vertical(transpose(raw))


# =============================================================================
# Moves
# =============================================================================

def _slide_rows(raw: int, table: List[Tuple[int, int]]) -> Tuple[int, int]:
    out = 0
    score = 0
    for shift in (0, 16, 32, 48):
        row, gained = table[(raw >> shift) & ROW_MASK]
        out |= row << shift
        score += gained
    return out, score


def execute_move(raw: int, move: Move) -> Tuple[int, int]:
    """
    Slide a raw board in one direction.

    Up and down rotate the board so the move becomes a left slide, then
    rotate back.

    Returns:
        (new_raw, merge_score). new_raw == raw means the move is illegal.
    """
    cache = move_cache()
    if move is Move.LEFT:
        return _slide_rows(raw, cache.left)
    if move is Move.RIGHT:
        return _slide_rows(raw, cache.right)
    if move is Move.UP:
        out, score = _slide_rows(counterclockwise(raw), cache.left)
        return clockwise(out), score
    out, score = _slide_rows(clockwise(raw), cache.left)
    return counterclockwise(out), score


def legal_moves(raw: int) -> List[Move]:
    """Moves that change the board, in search order."""
    return [m for m in ALL_MOVES if execute_move(raw, m)[0] != raw]


# =============================================================================
# Aggregates
# =============================================================================

def ranks(raw: int) -> List[int]:
    return [(raw >> (4 * i)) & RANK_MASK for i in range(BOARD_CELLS)]


def empty_cells(raw: int) -> List[int]:
    """Indices of cells holding rank 0."""
    return [i for i in range(BOARD_CELLS) if not (raw >> (4 * i)) & RANK_MASK]


def spawn_random_tile(raw: int, rng=random) -> int:
    """Return raw with a 2 (90%) or a 4 (10%) on a uniformly chosen empty cell."""
    empty = empty_cells(raw)
    if not empty:
        return raw
    cell = empty[rng.randrange(len(empty))]
    rank = 2 if rng.randrange(SPAWN_FOUR_ONE_IN) == 0 else 1
    return raw | (rank << (4 * cell))


def count_empty(raw: int) -> int:
    """Number of zero nibbles, via a nibble-wise OR fold and a popcount."""
    x = raw | ((raw >> 1) & 0x7777777777777777)
    x |= x >> 2
    return (~x & 0x1111111111111111).bit_count()


class MoveRecord(NamedTuple):
    """A played move, the board right after it (before the spawn) and its score."""
    move: Move
    board_after: "Board"
    score: int


# =============================================================================
# Board
# =============================================================================

class Board:
    """
    Mutable value type around the packed 64-bit board.

    Equality and hashing are by packed value; copying is one int copy.
    Every 4-bit field is a valid rank by construction, so no reachability
    check is ever made.
    """

    __slots__ = ("raw",)

    def __init__(self, raw: int = 0):
        self.raw = raw & BOARD_MASK

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_raw(cls, raw: int) -> "Board":
        return cls(raw)

    @classmethod
    def from_array(cls, arr: Iterable[int]) -> "Board":
        """
        Build a board from 16 ranks in row-major order.

        Raises:
            ValueError: wrong length or a rank outside 0-15.
        """
        values = [int(v) for v in arr]
        if len(values) != BOARD_CELLS:
            raise ValueError(f"Expected {BOARD_CELLS} ranks, got {len(values)}")
        raw = 0
        for i, rank in enumerate(values):
            if not 0 <= rank <= MAX_RANK:
                raise ValueError(f"Rank out of range at cell {i}: {rank} (expected 0-{MAX_RANK})")
            raw |= rank << (4 * i)
        return cls(raw)

    def to_array(self) -> List[int]:
        """16 ranks in row-major order (inverse of from_array)."""
        return ranks(self.raw)

    def copy(self) -> "Board":
        return Board(self.raw)

    # -------------------------------------------------------------------------
    # Cell Access
    # -------------------------------------------------------------------------

    def at(self, i: int) -> int:
        return (self.raw >> (4 * i)) & RANK_MASK

    def get(self, row: int, col: int) -> int:
        return self.at(row * 4 + col)

    def set(self, i: int, rank: int) -> None:
        shift = 4 * i
        self.raw = (self.raw & ~(RANK_MASK << shift) & BOARD_MASK) | ((rank & RANK_MASK) << shift)

    def get_row(self, i: int) -> int:
        return (self.raw >> (16 * i)) & ROW_MASK

    def set_row(self, i: int, row: int) -> None:
        shift = 16 * i
        self.raw = (self.raw & ~(ROW_MASK << shift) & BOARD_MASK) | ((row & ROW_MASK) << shift)

    def get_col(self, i: int) -> int:
        """Column i as a row word, top cell in the lowest nibble."""
        return Board(transpose(self.raw)).get_row(i)

    def set_col(self, i: int, col: int) -> None:
        t = Board(transpose(self.raw))
        t.set_row(i, col)
        self.raw = transpose(t.raw)

    # -------------------------------------------------------------------------
    # Moves
    # -------------------------------------------------------------------------

    def apply_move(self, move: Move) -> Optional[int]:
        """
        Slide the board in place.

        Returns:
            The merge score, or None if the board did not change.
        """
        new_raw, score = execute_move(self.raw, move)
        if new_raw == self.raw:
            return None
        self.raw = new_raw
        return score

    def apply_move_and_record(self, move: Move) -> Optional[MoveRecord]:
        score = self.apply_move(move)
        if score is None:
            return None
        return MoveRecord(move, self.copy(), score)

    def after(self, move: Move) -> Tuple["Board", Optional[int]]:
        """A moved copy and the apply_move result; self is untouched."""
        board = self.copy()
        return board, board.apply_move(move)

    def legal_moves(self) -> List[Move]:
        return legal_moves(self.raw)

    def is_terminal(self) -> bool:
        """True if no move changes the board."""
        return all(execute_move(self.raw, m)[0] == self.raw for m in ALL_MOVES)

    # -------------------------------------------------------------------------
    # Rotations
    # -------------------------------------------------------------------------

    def transpose(self) -> None:
        self.raw = transpose(self.raw)

    def flip_horizontal(self) -> None:
        self.raw = flip_horizontal(self.raw)

    def flip_vertical(self) -> None:
        self.raw = flip_vertical(self.raw)

    def rotate_clockwise(self) -> None:
        self.raw = clockwise(self.raw)

    def rotate_counterclockwise(self) -> None:
        self.raw = counterclockwise(self.raw)

    def rotate(self, quarter_turns: int) -> None:
        """Rotate clockwise by the given number of quarter turns."""
        for _ in range(quarter_turns % 4):
            self.raw = clockwise(self.raw)

    # -------------------------------------------------------------------------
    # Spawning
    # -------------------------------------------------------------------------

    def add_random_tile(self, rng: Optional[random.Random] = None) -> None:
        """Put a 2 (90%) or a 4 (10%) on a uniformly chosen empty cell."""
        self.raw = spawn_random_tile(self.raw, rng or random)

    def random_available_move(self, rng: Optional[random.Random] = None) -> Optional[Move]:
        moves = self.legal_moves()
        if not moves:
            return None
        return (rng or random).choice(moves)

    # -------------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------------

    def sum_of_tile_values(self) -> int:
        """Sum of 2**rank over all cells. Empty cells count as 2**0 = 1."""
        return sum(1 << r for r in ranks(self.raw))

    def max_rank(self) -> int:
        return max(ranks(self.raw))

    def max_tile_value(self) -> int:
        return 1 << self.max_rank()

    def distinct_tile_rank_count(self) -> int:
        """Number of different non-empty ranks on the board."""
        return len({r for r in ranks(self.raw) if r})

    def num_empty(self) -> int:
        return count_empty(self.raw)

    def empty_cells(self) -> List[int]:
        return empty_cells(self.raw)

    # -------------------------------------------------------------------------
    # Value Semantics
    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return f"Board(0x{self.raw:016x})"

    def __str__(self) -> str:
        cells = self.to_array()
        return "\n".join(
            " ".join(str(r) for r in cells[row * 4 : row * 4 + 4]) for row in range(4)
        )

    def pretty(self) -> str:
        """Grid of tile values, '.' for empty cells."""
        lines = []
        for row in range(4):
            cells = []
            for col in range(4):
                r = self.get(row, col)
                cells.append(("." if r == 0 else str(1 << r)).rjust(5))
            lines.append(" ".join(cells))
        return "\n".join(lines)
