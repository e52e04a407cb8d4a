"""
Row transform and the row/move cache.

Every board move reduces to sliding 16-bit rows to the left. The transform
is JIT-compiled with numba and evaluated once for all 65,536 row patterns;
afterwards a move is four table reads.
"""

from __future__ import annotations

import threading
from typing import List, Optional, Tuple

import numpy as np
from numba import njit

from solve2048.core.types import MAX_RANK, NUM_ROWS


# =============================================================================
# Row Transform (JIT-compiled)
# =============================================================================

@njit
def reverse_row(row: int) -> int:
    """abcd (low nibble first) -> dcba."""
    return (
        ((row & 0x000F) << 12)
        | ((row & 0x00F0) << 4)
        | ((row & 0x0F00) >> 4)
        | ((row & 0xF000) >> 12)
    )


@njit
def shift_row_left(row: int) -> Tuple[int, int]:
    """
    Slide a row towards cell 0, merging equal neighbours once per move.

    Scans left to right holding one pending rank. A matching rank merges
    with it (rank + 1, scoring 2**(rank + 1)) and clears it; anything else
    flushes it into the next free cell.

    Returns:
        (shifted_row, merge_score)
    """
    result = 0
    score = 0
    top = 0
    pending = 0

    for i in range(4):
        tile = (row >> (4 * i)) & 0xF
        if tile == 0:
            continue
        if pending != 0 and tile == pending and tile < MAX_RANK:
            tile += 1
            result |= tile << (4 * top)
            top += 1
            score += 1 << tile
            pending = 0
        else:
            if pending != 0:
                result |= pending << (4 * top)
                top += 1
            pending = tile

    if pending != 0:
        result |= pending << (4 * top)

    return result, score


@njit
def shift_row_right(row: int) -> Tuple[int, int]:
    """Mirror of shift_row_left: reverse, shift left, reverse back."""
    shifted, score = shift_row_left(reverse_row(row))
    return reverse_row(shifted), score


@njit
def _build_tables(left_rows, left_scores, right_rows, right_scores):
    for row in range(left_rows.shape[0]):
        shifted, score = shift_row_left(row)
        left_rows[row] = shifted
        left_scores[row] = score
        shifted, score = shift_row_right(row)
        right_rows[row] = shifted
        right_scores[row] = score


# =============================================================================
# Row/Move Cache
# =============================================================================

class MoveCache:
    """
    Lookup tables of the row transform for every 16-bit pattern.

    The numpy arrays are the canonical tables; ``left`` and ``right`` hold
    the same data as prebuilt (row, score) tuples for the board hot path.
    """

    __slots__ = ("left_rows", "left_scores", "right_rows", "right_scores", "left", "right")

    def __init__(self):
        self.left_rows = np.zeros(NUM_ROWS, dtype=np.uint16)
        self.left_scores = np.zeros(NUM_ROWS, dtype=np.uint32)
        self.right_rows = np.zeros(NUM_ROWS, dtype=np.uint16)
        self.right_scores = np.zeros(NUM_ROWS, dtype=np.uint32)
        _build_tables(self.left_rows, self.left_scores, self.right_rows, self.right_scores)

        self.left: List[Tuple[int, int]] = list(
            zip(self.left_rows.tolist(), self.left_scores.tolist())
        )
        self.right: List[Tuple[int, int]] = list(
            zip(self.right_rows.tolist(), self.right_scores.tolist())
        )

    def get_left(self, row: int) -> Tuple[int, int]:
        """(shifted_row, score) for a left slide."""
        return self.left[row]

    def get_right(self, row: int) -> Tuple[int, int]:
        """(shifted_row, score) for a right slide."""
        return self.right[row]


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_cache: Optional[MoveCache] = None
_cache_lock = threading.Lock()


def move_cache() -> MoveCache:
    """Return the shared MoveCache, building it on first use."""
    global _cache
    if _cache is None:
        with _cache_lock:
            if _cache is None:
                _cache = MoveCache()
    return _cache
