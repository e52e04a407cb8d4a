"""
RandomPlayer - uniformly random legal moves.
"""

import random
from typing import Optional

from solve2048.core.board import Board
from solve2048.core.types import Move
from solve2048.heuristics.base import Heuristic
from solve2048.players.player_base import Player


class RandomPlayer(Player):
    """Baseline player: any legal move, uniformly."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def next_move(self, board: Board, heuristic: Optional[Heuristic] = None) -> Optional[Move]:
        return board.random_available_move(self.rng)
