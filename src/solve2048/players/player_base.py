"""
Player - abstract base class for move-decision strategies.
"""

from abc import ABC, abstractmethod
from typing import Optional

from solve2048.core.board import Board
from solve2048.core.types import Move
from solve2048.heuristics.base import Heuristic


class Player(ABC):
    """
    Abstract base class for all players.

    A player only reads the board. Applying the move and spawning the next
    tile belong to the game loop.
    """

    @abstractmethod
    def next_move(self, board: Board, heuristic: Optional[Heuristic] = None) -> Optional[Move]:
        """
        Choose a move for the board.

        Args:
            board: Current position (not modified).
            heuristic: Evaluator for players that use one. Players that
                ignore evaluation accept and ignore it.

        Returns:
            The chosen move, or None if no move changes the board.
        """
        pass
