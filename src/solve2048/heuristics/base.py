"""
Heuristic - the single-method evaluator capability.

Search and rollout code depends only on ``score(board) -> float``; the
row-table heuristic, the n-tuple network and the null evaluator all
satisfy it.
"""

from abc import ABC, abstractmethod

from solve2048.core.board import Board


class Heuristic(ABC):
    """Abstract base for board evaluators."""

    @abstractmethod
    def score(self, board: Board) -> float:
        """Return a scalar desirability for the board (higher is better)."""
        pass

    def score_raw(self, raw: int) -> float:
        """Score a packed board word. Override when it avoids the Board allocation."""
        return self.score(Board(raw))


class NullHeuristic(Heuristic):
    """Scores every board 0.0."""

    def score(self, board: Board) -> float:
        return 0.0

    def score_raw(self, raw: int) -> float:
        return 0.0
