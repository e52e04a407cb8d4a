"""
Tests for solve2048.simulation.worker

The game loop and per-process worker state.
"""

import random

import pytest

from solve2048.core.board import Board
from solve2048.core.types import Move
from solve2048.heuristics import NullHeuristic
from solve2048.players import Player, RandomPlayer
from solve2048.simulation import worker
from solve2048.simulation.jobs import GameJob, GameResult
from solve2048.simulation.worker import PLAYER_SEED_SALT, play_game, run_game, worker_init
from solve2048.utils.config import Config


class AlwaysUp(Player):
    """Keeps pressing up, legal or not."""

    def next_move(self, board, heuristic=None):
        return Move.UP


class FirstDrawRecorder(Player):
    """Random player that remembers the first number its generator produced."""

    def __init__(self):
        self.rng = random.Random()
        self.first_draw = None

    def next_move(self, board, heuristic=None):
        if self.first_draw is None:
            self.first_draw = self.rng.random()
        return board.random_available_move(self.rng)


class TestPlayGame:
    """play_game function tests."""

    def test_returns_result(self):
        result = play_game(RandomPlayer(random.Random(1)), max_moves=30, rng=random.Random(1))
        assert isinstance(result, GameResult)
        assert 0 < result.moves <= 30
        assert result.max_tile == result.final_board().max_tile_value()

    def test_max_moves(self):
        result = play_game(RandomPlayer(random.Random(2)), max_moves=5, rng=random.Random(2))
        assert result.moves == 5

    def test_plays_to_the_end(self):
        result = play_game(RandomPlayer(random.Random(3)), rng=random.Random(3))
        assert result.final_board().is_terminal()
        assert result.max_tile >= 8

    def test_seeded_games_repeat(self):
        a = play_game(RandomPlayer(random.Random(4)), max_moves=40, rng=random.Random(4))
        b = play_game(RandomPlayer(random.Random(4)), max_moves=40, rng=random.Random(4))
        assert (a.board, a.score, a.moves) == (b.board, b.score, b.moves)

    def test_record_history(self):
        result = play_game(
            RandomPlayer(random.Random(5)), max_moves=25, rng=random.Random(5), record=True
        )
        assert len(result.history) == result.moves
        assert sum(r.score for r in result.history) == result.score
        assert all(isinstance(r.board_after, Board) for r in result.history)

    def test_illegal_move_ends_game(self, caplog):
        result = play_game(AlwaysUp(), NullHeuristic(), max_moves=500, rng=random.Random(6))
        assert result.moves < 500
        assert "illegal move" in caplog.text

    def test_show_moves_prints(self, capsys):
        play_game(RandomPlayer(random.Random(7)), max_moves=2, show_moves=True, rng=random.Random(7))
        assert "Move" in capsys.readouterr().out


class TestRunGameUninitialized:
    """run_game without initialization tests."""

    def test_raises_if_not_initialized(self):
        """Raises RuntimeError if worker not initialized."""
        original = worker._worker_player
        worker._worker_player = None

        try:
            with pytest.raises(RuntimeError, match="Worker not initialized"):
                run_game(GameJob(index=0))
        finally:
            worker._worker_player = original


@pytest.fixture
def initialized_worker():
    """Initialize worker for testing."""
    worker_init(Config(player_name="random", games=1, num_workers=1))
    yield
    worker._worker_player = None
    worker._worker_heuristic = None


class TestRunGame:

    def test_builds_player_from_config(self, initialized_worker):
        assert isinstance(worker._worker_player, RandomPlayer)
        assert isinstance(worker._worker_heuristic, NullHeuristic)

    def test_runs_job(self, initialized_worker):
        result = run_game(GameJob(index=0, seed=1, max_moves=10))
        assert result.moves == 10

    def test_seed_makes_games_repeat(self, initialized_worker):
        a = run_game(GameJob(index=0, seed=42, max_moves=60))
        b = run_game(GameJob(index=1, seed=42, max_moves=60))
        assert a.board == b.board
        assert a.score == b.score

    def test_player_stream_differs_from_spawn_stream(self, initialized_worker, monkeypatch):
        recorder = FirstDrawRecorder()
        monkeypatch.setattr(worker, "_worker_player", recorder)
        run_game(GameJob(index=0, seed=42, max_moves=3))
        assert recorder.first_draw == random.Random(42 ^ PLAYER_SEED_SALT).random()
        assert recorder.first_draw != random.Random(42).random()
