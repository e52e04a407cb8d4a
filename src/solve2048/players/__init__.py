"""
Players module - move-decision strategies.

All players satisfy ``next_move(board, heuristic) -> Optional[Move]``:
- ExpectimaxPlayer: expectimax search guided by a heuristic
- MonteCarloPlayer: random playouts per candidate move
- NTuple: greedy one-ply player over a learned n-tuple evaluator
- RandomPlayer: uniformly random legal moves
"""

from solve2048.players.player_base import Player
from solve2048.players.expectimax import ExpectimaxPlayer
from solve2048.players.monte_carlo import MonteCarloPlayer, MonteCarloMetric
from solve2048.players.ntuple import (
    NTuple,
    Feature,
    WeightsFormatError,
    DEFAULT_PATTERNS,
)
from solve2048.players.random_player import RandomPlayer

__all__ = [
    "Player",
    "ExpectimaxPlayer",
    "MonteCarloPlayer",
    "MonteCarloMetric",
    "NTuple",
    "Feature",
    "WeightsFormatError",
    "DEFAULT_PATTERNS",
    "RandomPlayer",
]
