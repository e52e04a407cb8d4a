"""
Monte-Carlo rollout player.

Each candidate move is scored by its merge score plus the summed outcome
of many uniformly random playouts from the position after the move and
one spawn. Playouts stop after four consecutive failed moves, which
approximates the game being over.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Dict, Optional

from solve2048.core.board import Board, execute_move, spawn_random_tile
from solve2048.core.types import ALL_MOVES, Move
from solve2048.heuristics.base import Heuristic
from solve2048.players.player_base import Player


class MonteCarloMetric(Enum):
    """What a finished playout reports."""

    SUM = "sum"            # sum of tile values
    MAX_TILE = "max_tile"  # largest tile value
    SCORE = "score"        # merge score collected during the playout
    MOVES = "moves"        # number of moves survived


class MonteCarloPlayer(Player):
    """Picks the move whose random playouts do best under the metric."""

    DEFAULT_ITERATIONS = 200

    def __init__(
        self,
        iterations: int = DEFAULT_ITERATIONS,
        metric: MonteCarloMetric = MonteCarloMetric.SUM,
        rng: Optional[random.Random] = None,
    ):
        self.iterations = iterations
        self.metric = metric
        self.rng = rng or random.Random()

    def next_move(self, board: Board, heuristic: Optional[Heuristic] = None) -> Optional[Move]:
        scores = self.evaluate(board)
        best_move = None
        best_score = 0
        for move in ALL_MOVES:
            # Later moves win ties
            if scores[move] > 0 and scores[move] >= best_score:
                best_score = scores[move]
                best_move = move
        return best_move

    def evaluate(self, board: Board) -> Dict[Move, int]:
        return {move: self.explore_move(board, move) for move in ALL_MOVES}

    def explore_move(self, board: Board, move: Move) -> int:
        """Total playout outcome after the move; 0 if the move is illegal."""
        raw, score = execute_move(board.raw, move)
        if raw == board.raw:
            return 0
        raw = spawn_random_tile(raw, self.rng)
        return score + sum(self.random_run(raw) for _ in range(self.iterations))

    def random_run(self, raw: int) -> int:
        """Play random moves until four in a row fail; report the metric."""
        rng = self.rng
        score = 0
        moves = 0
        fails = 0
        while fails < 4:
            moved, gained = execute_move(raw, ALL_MOVES[rng.randrange(4)])
            if moved == raw:
                fails += 1
                continue
            score += gained
            moves += 1
            raw = spawn_random_tile(moved, rng)
            fails = 0

        if self.metric is MonteCarloMetric.SUM:
            return Board(raw).sum_of_tile_values()
        if self.metric is MonteCarloMetric.MAX_TILE:
            return Board(raw).max_tile_value()
        if self.metric is MonteCarloMetric.SCORE:
            return score
        return moves
