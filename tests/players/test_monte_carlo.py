"""
Tests for solve2048.players.monte_carlo
"""

import random

import pytest

from solve2048.core.types import ALL_MOVES, Move
from solve2048.players import MonteCarloMetric, MonteCarloPlayer


@pytest.fixture
def player() -> MonteCarloPlayer:
    return MonteCarloPlayer(iterations=5, rng=random.Random(3))


class TestNextMove:

    def test_only_legal_moves(self, player, corner_board):
        for _ in range(3):
            assert player.next_move(corner_board) in (Move.DOWN, Move.RIGHT)

    def test_terminal_board(self, player, terminal_board):
        assert player.next_move(terminal_board) is None

    def test_seeded_runs_repeat(self, midgame_board):
        a = MonteCarloPlayer(iterations=5, rng=random.Random(11)).evaluate(midgame_board)
        b = MonteCarloPlayer(iterations=5, rng=random.Random(11)).evaluate(midgame_board)
        assert a == b

    def test_ignores_heuristic(self, corner_board, score_cache):
        assert MonteCarloPlayer(iterations=2).next_move(corner_board, score_cache) in (Move.DOWN, Move.RIGHT)

    def test_later_move_wins_tie(self, player, midgame_board, monkeypatch):
        scores = {Move.UP: 7, Move.DOWN: 9, Move.LEFT: 9, Move.RIGHT: 0}
        monkeypatch.setattr(player, "evaluate", lambda board: scores)
        assert player.next_move(midgame_board) is Move.LEFT

    def test_all_zero_is_no_move(self, player, midgame_board, monkeypatch):
        monkeypatch.setattr(player, "evaluate", lambda board: dict.fromkeys(ALL_MOVES, 0))
        assert player.next_move(midgame_board) is None


class TestExploreMove:

    def test_illegal_move_scores_zero(self, player, corner_board):
        assert player.explore_move(corner_board, Move.UP) == 0

    def test_legal_move_positive(self, player, corner_board):
        assert player.explore_move(corner_board, Move.RIGHT) > 0


class TestRandomRun:
    """A finished playout reports its metric."""

    @pytest.mark.parametrize("metric, expected", [
        (MonteCarloMetric.SUM, 8 * 2 + 8 * 4),
        (MonteCarloMetric.MAX_TILE, 4),
        (MonteCarloMetric.SCORE, 0),
        (MonteCarloMetric.MOVES, 0),
    ])
    def test_terminal_start(self, terminal_board, metric, expected):
        player = MonteCarloPlayer(iterations=1, metric=metric, rng=random.Random(0))
        assert player.random_run(terminal_board.raw) == expected

    def test_playout_from_open_board_moves(self, corner_board):
        player = MonteCarloPlayer(iterations=1, metric=MonteCarloMetric.MOVES, rng=random.Random(0))
        assert player.random_run(corner_board.raw) > 0

    def test_metric_values(self):
        assert MonteCarloMetric("max_tile") is MonteCarloMetric.MAX_TILE
        with pytest.raises(ValueError):
            MonteCarloMetric("nope")
