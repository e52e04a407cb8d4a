"""
solve2048 - near-optimal move search for the 2048 sliding-tile game.

This package provides a bit-packed board engine and the players built on it.

Quick Start:
    from solve2048 import Board, next_move

    board = Board()
    board.add_random_tile()
    board.add_random_tile()
    move = next_move(board)          # expectimax with the row heuristic
    board.apply_move(move)

Modules:
    core       - Packed Board, Move, row transforms and the row/move cache
    heuristics - Evaluator capability and the row-table heuristic
    search     - Transposition cache shared by expectimax searches
    players    - Expectimax, Monte-Carlo, n-tuple and random players
    simulation - Game loop and parallel batch play
    bridge     - Flat-array entry points for embedding hosts
"""

from solve2048.api import (
    next_move,
    play_game,
    play_games,
    Config,
    GameStats,
    SimulationRunner,
    DEFAULT_WORKER_COUNT,
)

from solve2048.core import Board, Move
from solve2048.heuristics import Heuristic, HeuristicScoreCache, NullHeuristic
from solve2048.players import ExpectimaxPlayer, MonteCarloPlayer, NTuple, Player

__version__ = "1.0.0"

__all__ = [
    # Main API
    "next_move",
    "play_game",
    "play_games",
    "Config",
    "GameStats",
    "SimulationRunner",
    "DEFAULT_WORKER_COUNT",
    # Types
    "Board",
    "Move",
    "Heuristic",
    "HeuristicScoreCache",
    "NullHeuristic",
    "Player",
    "ExpectimaxPlayer",
    "MonteCarloPlayer",
    "NTuple",
]
