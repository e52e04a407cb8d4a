"""
Tests for solve2048.simulation.jobs

Job data structures exchanged with worker processes.
"""

import pytest

from solve2048.core.board import Board
from solve2048.simulation.jobs import GameJob, GameResult


class TestGameJob:

    def test_defaults(self):
        job = GameJob(index=3)
        assert job.seed is None
        assert job.max_moves is None
        assert job.show_moves is False

    def test_frozen(self):
        job = GameJob(index=0, seed=1)
        with pytest.raises(AttributeError):
            job.seed = 2


class TestGameResult:

    def test_derived_values(self):
        result = GameResult(score=1000, max_tile=256, moves=50, elapsed=2.0, board=0x8)
        assert result.max_rank == 8
        assert result.seconds_per_move == pytest.approx(0.04)
        assert result.final_board() == Board(0x8)
        assert result.history == []

    def test_zero_moves(self):
        result = GameResult(score=0, max_tile=2, moves=0, elapsed=0.0, board=0x1)
        assert result.seconds_per_move == 0.0
