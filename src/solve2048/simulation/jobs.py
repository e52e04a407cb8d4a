"""
Job data structures for parallel simulation.

Defines the input (GameJob) and output (GameResult) types exchanged
with worker processes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from solve2048.core.board import Board, MoveRecord


@dataclass(frozen=True)
class GameJob:
    """
    Self-contained job for a worker process.

    The player itself is built once per worker from the runner's Config;
    a job only carries what varies between games.
    """
    index: int
    seed: Optional[int] = None
    max_moves: Optional[int] = None
    show_moves: bool = False


@dataclass
class GameResult:
    """Outcome of one finished game."""
    score: int
    max_tile: int
    moves: int
    elapsed: float  # seconds spent inside next_move
    board: int      # final packed board
    history: List[MoveRecord] = field(default_factory=list)

    @property
    def max_rank(self) -> int:
        return self.max_tile.bit_length() - 1

    @property
    def seconds_per_move(self) -> float:
        return self.elapsed / self.moves if self.moves else 0.0

    def final_board(self) -> Board:
        return Board(self.board)
