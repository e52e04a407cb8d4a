"""
Shared test fixtures for solve2048 tests.

Design principles:
- Boards built from row-major rank lists, as a reader would draw them
- Seeded randomness everywhere
- Lookup tables built once per session
"""

import random
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

from solve2048.core.board import Board
from solve2048.heuristics.score_cache import HeuristicScoreCache


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory with cleanup."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


# =============================================================================
# Randomness
# =============================================================================

@pytest.fixture
def rng() -> random.Random:
    return random.Random(2048)


# =============================================================================
# Board Fixtures
# =============================================================================

@pytest.fixture
def empty_board() -> Board:
    return Board()


@pytest.fixture
def corner_board() -> Board:
    """A single 2-tile in the top-left corner: only DOWN and RIGHT are legal."""
    return Board.from_array([1] + [0] * 15)


@pytest.fixture
def terminal_board() -> Board:
    """Checkerboard of 2s and 4s: full and nothing merges."""
    return Board.from_array([
        1, 2, 1, 2,
        2, 1, 2, 1,
        1, 2, 1, 2,
        2, 1, 2, 1,
    ])


@pytest.fixture
def midgame_board() -> Board:
    return Board.from_array([
        1, 3, 0, 0,
        2, 4, 1, 0,
        5, 6, 2, 1,
        7, 8, 3, 2,
    ])


@pytest.fixture
def random_boards(rng) -> List[Board]:
    """Boards reached by random play, from the opening to the late game."""
    boards = []
    for _ in range(12):
        board = Board()
        board.add_random_tile(rng)
        board.add_random_tile(rng)
        for _ in range(rng.randrange(5, 120)):
            move = board.random_available_move(rng)
            if move is None:
                break
            board.apply_move(move)
            board.add_random_tile(rng)
        boards.append(board)
    return boards


# =============================================================================
# Tables
# =============================================================================

@pytest.fixture(scope="session")
def score_cache() -> HeuristicScoreCache:
    return HeuristicScoreCache.shared()
