"""
Game loop and worker process logic.

Each worker builds its player and heuristic once from the runner's
Config, then receives GameJob objects and returns GameResult objects.
"""

from __future__ import annotations

import logging
import random
import time
from typing import List, Optional, TYPE_CHECKING

from solve2048.core.board import Board, MoveRecord
from solve2048.simulation.jobs import GameJob, GameResult

if TYPE_CHECKING:
    from solve2048.heuristics.base import Heuristic
    from solve2048.players.player_base import Player
    from solve2048.utils.config import Config

logger = logging.getLogger(__name__)

# Mixed into a job seed so player playouts and tile spawns draw different streams
PLAYER_SEED_SALT = 0x9E3779B9


# Global worker state (initialized per process)
_worker_player: Optional["Player"] = None
_worker_heuristic: Optional["Heuristic"] = None


def play_game(
    player: "Player",
    heuristic: Optional["Heuristic"] = None,
    max_moves: Optional[int] = None,
    show_moves: bool = False,
    rng: Optional[random.Random] = None,
    record: bool = False,
) -> GameResult:
    """
    Play one game from a fresh board with two random tiles.

    Stops when the player has no move or after ``max_moves`` moves. A tile
    spawns after every legal move.
    """
    rng = rng or random.Random()
    board = Board()
    board.add_random_tile(rng)
    board.add_random_tile(rng)

    score = 0
    moves = 0
    elapsed = 0.0
    history: List[MoveRecord] = []

    while max_moves is None or moves < max_moves:
        start = time.perf_counter()
        move = player.next_move(board, heuristic)
        move_time = time.perf_counter() - start
        elapsed += move_time

        if move is None:
            break

        played = board.apply_move_and_record(move)
        if played is None:
            logger.warning("%s chose illegal move %s; ending game", type(player).__name__, move.name)
            break

        moves += 1
        score += played.score
        if record:
            history.append(played)
        board.add_random_tile(rng)

        if show_moves:
            print(f"\nMove {move.arrow}  (+{played.score})  total={score}  {move_time:.2f} s")
            print(board.pretty())

    return GameResult(
        score=score,
        max_tile=board.max_tile_value(),
        moves=moves,
        elapsed=elapsed,
        board=board.raw,
        history=history,
    )


def worker_init(config: "Config") -> None:
    """Build the player and heuristic for this worker process."""
    global _worker_player, _worker_heuristic
    from solve2048.utils.factory import create_heuristic, create_player

    _worker_player = create_player(config)
    _worker_heuristic = create_heuristic(config)


def run_game(job: GameJob) -> GameResult:
    """Execute a single game simulation."""
    if _worker_player is None:
        raise RuntimeError("Worker not initialized")

    rng = random.Random(job.seed)
    player_rng = getattr(_worker_player, "rng", None)
    if job.seed is not None and player_rng is not None:
        player_rng.seed(job.seed ^ PLAYER_SEED_SALT)

    return play_game(
        _worker_player,
        _worker_heuristic,
        max_moves=job.max_moves,
        show_moves=job.show_moves,
        rng=rng,
    )
