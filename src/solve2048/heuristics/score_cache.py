"""
Heuristic score cache - per-row evaluation table.

Each of the 65,536 row patterns gets one score built from fixed weights:

    lost_penalty
    + empty_weight  * empty cells
    + merges_weight * tiles that would merge if compacted
    - sum_weight    * sum(rank ** sum_power)
    - monotonicity_weight * min(leftward, rightward monotonicity violations)

A board scores the sum over its 4 rows and its 4 columns, so the
evaluation is the same for a position and its transpose.
"""

from __future__ import annotations

import threading
from typing import List, NamedTuple, Optional

import numpy as np
from numba import njit

from solve2048.core.board import Board, transpose
from solve2048.core.types import NUM_ROWS, ROW_MASK
from solve2048.heuristics.base import Heuristic


class HeuristicWeights(NamedTuple):
    """Fixed weight constants of the row heuristic."""

    lost_penalty: float = 200000.0
    empty_weight: float = 270.0
    merges_weight: float = 700.0
    sum_power: float = 3.5
    sum_weight: float = 11.0
    monotonicity_power: float = 4.0
    monotonicity_weight: float = 47.0


DEFAULT_WEIGHTS = HeuristicWeights()


# =============================================================================
# Row Score (JIT-compiled)
# =============================================================================

@njit
def row_score(
    row: int,
    lost_penalty: float,
    empty_weight: float,
    merges_weight: float,
    sum_power: float,
    sum_weight: float,
    monotonicity_power: float,
    monotonicity_weight: float,
) -> float:
    """Heuristic value of a single 16-bit row."""
    total = 0.0
    empty = 0
    merges = 0

    # Runs of equal ranks separated only by empty cells would merge
    prev = 0
    counter = 0
    for i in range(4):
        rank = (row >> (4 * i)) & 0xF
        total += float(rank) ** sum_power
        if rank == 0:
            empty += 1
        else:
            if prev == rank:
                counter += 1
            elif counter > 0:
                merges += 1 + counter
                counter = 0
            prev = rank
    if counter > 0:
        merges += 1 + counter

    mono_left = 0.0
    mono_right = 0.0
    for i in range(1, 4):
        a = float((row >> (4 * (i - 1))) & 0xF) ** monotonicity_power
        b = float((row >> (4 * i)) & 0xF) ** monotonicity_power
        if a > b:
            mono_left += a - b
        else:
            mono_right += b - a

    return (
        lost_penalty
        + empty_weight * empty
        + merges_weight * merges
        - monotonicity_weight * min(mono_left, mono_right)
        - sum_weight * total
    )


@njit
def _build_table(
    table,
    lost_penalty,
    empty_weight,
    merges_weight,
    sum_power,
    sum_weight,
    monotonicity_power,
    monotonicity_weight,
):
    for row in range(table.shape[0]):
        table[row] = row_score(
            row,
            lost_penalty,
            empty_weight,
            merges_weight,
            sum_power,
            sum_weight,
            monotonicity_power,
            monotonicity_weight,
        )


# =============================================================================
# Cache
# =============================================================================

class HeuristicScoreCache(Heuristic):
    """Row heuristic evaluated once for every row pattern."""

    def __init__(self, weights: HeuristicWeights = DEFAULT_WEIGHTS):
        self.weights = weights
        self.table = np.zeros(NUM_ROWS, dtype=np.float64)
        _build_table(self.table, *weights)
        self._rows: List[float] = self.table.tolist()

    @classmethod
    def shared(cls) -> "HeuristicScoreCache":
        """The process-wide cache with default weights, built on first use."""
        global _shared
        if _shared is None:
            with _shared_lock:
                if _shared is None:
                    _shared = cls()
        return _shared

    def row(self, row: int) -> float:
        return self._rows[row]

    def score(self, board: Board) -> float:
        return self.score_raw(board.raw)

    def score_raw(self, raw: int) -> float:
        rows = self._rows
        t = transpose(raw)
        return (
            rows[raw & ROW_MASK]
            + rows[(raw >> 16) & ROW_MASK]
            + rows[(raw >> 32) & ROW_MASK]
            + rows[(raw >> 48) & ROW_MASK]
            + rows[t & ROW_MASK]
            + rows[(t >> 16) & ROW_MASK]
            + rows[(t >> 32) & ROW_MASK]
            + rows[(t >> 48) & ROW_MASK]
        )


_shared: Optional[HeuristicScoreCache] = None
_shared_lock = threading.Lock()
