"""
Tests for solve2048.cli and the batch-play entry point.
"""

import pytest

from solve2048 import api, play_games
from solve2048.cli import build_config, main, parse_args
from solve2048.core.board import Board
from solve2048.core.types import Move
from solve2048.heuristics import HeuristicScoreCache, NullHeuristic
from solve2048.players import ExpectimaxPlayer, MonteCarloMetric, RandomPlayer
from solve2048.utils.config import Config


class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])
        assert args.player == "expectimax"
        assert args.games == 1
        assert args.workers is None
        assert args.depth is None
        assert args.iterations == 200
        assert args.metric == "sum"
        assert not args.show_moves

    def test_flags(self):
        args = parse_args([
            "-p", "monte_carlo", "-n", "4", "-w", "2", "-i", "50",
            "--metric", "max_tile", "--max-moves", "100", "--seed", "3",
        ])
        config = build_config(args)
        assert config.player_name == "monte_carlo"
        assert config.games == 4
        assert config.num_workers == 2
        assert config.iterations == 50
        assert config.metric is MonteCarloMetric.MAX_TILE
        assert config.max_moves == 100
        assert config.seed == 3

    def test_unknown_player(self):
        with pytest.raises(SystemExit):
            parse_args(["--player", "minimax"])


class TestMain:

    def test_invalid_config_exits(self):
        with pytest.raises(SystemExit, match="depth"):
            main(["--depth", "0"])

    def test_zero_games_exits(self):
        with pytest.raises(SystemExit, match="games"):
            main(["-p", "random", "--games", "0"])

    def test_plays_random_games(self, capsys):
        main(["-p", "random", "-n", "2", "-w", "1", "--max-moves", "10", "--seed", "1"])
        out = capsys.readouterr().out
        assert "Game 2:" in out
        assert "Tile Frequency" in out


class TestApi:

    def test_play_games_stats(self):
        config = Config(player_name="random", games=3, num_workers=1, max_moves=15, seed=2)
        stats = play_games(config, quiet=True)
        assert stats.games == 3
        assert stats.moves_total <= 45

    def test_next_move_default_player(self):
        board = Board.from_array([1] + [0] * 15)
        assert api.next_move(board) in (Move.DOWN, Move.RIGHT)

    def test_next_move_custom_player(self):
        board = Board.from_array([1] + [0] * 15)
        assert api.next_move(board, RandomPlayer()) in (Move.DOWN, Move.RIGHT)

    def test_next_move_follows_each_evaluator(self, monkeypatch, midgame_board):
        """The shared default player does not reuse values from an earlier evaluator."""
        monkeypatch.setattr(api, "_default_player", ExpectimaxPlayer(depth=2))
        heuristic = HeuristicScoreCache.shared()
        api.next_move(midgame_board, heuristic=NullHeuristic())
        expected = ExpectimaxPlayer(depth=2).next_move(midgame_board, heuristic)
        assert api.next_move(midgame_board, heuristic=heuristic) is expected
