"""
Public API for move decisions and batch play.

Usage:
    from solve2048 import Board, next_move, play_games, Config

    board = Board.from_array([1, 1, 0, 0] + [0] * 12)
    move = next_move(board)                    # expectimax + row heuristic

    stats = play_games(Config(player_name="monte_carlo", games=20))
"""

from __future__ import annotations

import logging
from typing import Optional

from solve2048.core.board import Board
from solve2048.core.types import Move
from solve2048.heuristics.base import Heuristic
from solve2048.players.expectimax import ExpectimaxPlayer
from solve2048.players.player_base import Player
from solve2048.simulation import GameStats, SimulationRunner, play_game, DEFAULT_WORKER_COUNT
from solve2048.utils.config import Config

logger = logging.getLogger(__name__)


_default_player: Optional[ExpectimaxPlayer] = None


def next_move(
    board: Board,
    player: Optional[Player] = None,
    heuristic: Optional[Heuristic] = None,
) -> Optional[Move]:
    """
    Choose a move for the board.

    Args:
        board: Position to move from (not modified).
        player: Any Player; defaults to a shared adaptive-depth ExpectimaxPlayer.
        heuristic: Evaluator; each player falls back to its own default.

    Returns:
        The move, or None if no move changes the board.
    """
    global _default_player
    if player is None:
        if _default_player is None:
            _default_player = ExpectimaxPlayer()
        player = _default_player
    return player.next_move(board, heuristic)


def play_games(config: Config, quiet: bool = False) -> GameStats:
    """
    Main entry point: play config.games games and report statistics.

    Games run on config.num_workers processes. Per-game lines, the summary
    and the tile frequency table are printed unless ``quiet``.

    Raises:
        ValueError: from Config.validate, before any worker starts.
    """
    config.validate()
    stats = GameStats()
    runner = SimulationRunner(config)

    if not quiet:
        print(
            f"Playing {config.games} game(s) with {config.player_name} "
            f"on {runner.num_workers} worker(s)"
        )

    try:
        with runner:
            for result in runner.run(runner.make_jobs(config.games)):
                stats.add(result)
                if not quiet:
                    print(
                        f"Game {stats.games}: Score: {result.score} "
                        f"Max: {result.max_tile} Moves: {result.moves} "
                        f"({result.seconds_per_move * 1000:.1f} ms/move)"
                    )
    except KeyboardInterrupt:
        print("\nInterrupted - shutting down...")
        runner.shutdown(force=True)
    except Exception:
        logger.exception("Fatal error in game loop")
        raise

    if not quiet:
        print("\n" + stats.summary())
        print(stats.format_tile_frequency())
    return stats


__all__ = [
    "next_move",
    "play_game",
    "play_games",
    "Config",
    "GameStats",
    "SimulationRunner",
    "DEFAULT_WORKER_COUNT",
]
