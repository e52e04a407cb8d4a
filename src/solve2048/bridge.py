"""
Host bridge - flat rank arrays in, integer move codes out.

For embedding environments (scripting hosts, browser front-ends) that
hold the grid as 16 row-major tile ranks. Moves come back as
0=up, 1=right, 2=down, 3=left, or -1 when no move is possible.
"""

from __future__ import annotations

import io
import random
from functools import lru_cache
from typing import List, Optional, Sequence

from solve2048.core.board import Board
from solve2048.core.types import NO_MOVE_CODE, Move
from solve2048.heuristics.base import NullHeuristic
from solve2048.heuristics.score_cache import HeuristicScoreCache
from solve2048.players.expectimax import ExpectimaxPlayer
from solve2048.players.monte_carlo import MonteCarloPlayer
from solve2048.players.ntuple import DEFAULT_PATTERNS, NTuple


def board_from_array(arr: Sequence[int]) -> Board:
    return Board.from_array(arr)


def board_to_array(board: Board) -> List[int]:
    return board.to_array()


def _code(move: Optional[Move]) -> int:
    return NO_MOVE_CODE if move is None else move.to_int()


@lru_cache(maxsize=None)
def _expectimax_player() -> ExpectimaxPlayer:
    return ExpectimaxPlayer()


@lru_cache(maxsize=None)
def _monte_carlo_player() -> MonteCarloPlayer:
    return MonteCarloPlayer()


def expectimax(arr: Sequence[int]) -> int:
    board = board_from_array(arr)
    return _code(_expectimax_player().next_move(board, HeuristicScoreCache.shared()))


def monte_carlo(arr: Sequence[int]) -> int:
    board = board_from_array(arr)
    return _code(_monte_carlo_player().next_move(board, NullHeuristic()))


def build_ntuple(weights: bytes, patterns: Sequence[Sequence[int]] = DEFAULT_PATTERNS) -> NTuple:
    """Network from an in-memory weights blob (the default patterns unless given)."""
    return NTuple.load(io.BytesIO(weights), patterns)


def ntuple(net: NTuple, arr: Sequence[int]) -> int:
    return _code(net.next_move(board_from_array(arr)))


def random_available_move(arr: Sequence[int], rng: Optional[random.Random] = None) -> int:
    return _code(board_from_array(arr).random_available_move(rng))
