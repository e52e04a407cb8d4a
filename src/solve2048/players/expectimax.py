"""
Expectimax search over player and chance nodes.

Player nodes take the best of the four moves. Chance nodes average over
every empty cell receiving a 2 (weight 0.9) or a 4 (weight 0.1). A branch
stops at the heuristic once its cumulative spawn probability drops below
CPROB_THRESHOLD or the depth limit is reached.

Chance-node values are shared through a TranspositionCache keyed on the
packed board. The cache holds values of one evaluator at a time and is
flushed when evaluate() is called with a different one.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional

from solve2048.core.board import Board, empty_cells, execute_move
from solve2048.core.types import ALL_MOVES, SPAWN_DISTRIBUTION, Move
from solve2048.heuristics.base import Heuristic
from solve2048.heuristics.score_cache import HeuristicScoreCache
from solve2048.players.player_base import Player
from solve2048.search.transposition import TranspositionCache

logger = logging.getLogger(__name__)


class ExpectimaxPlayer(Player):
    """
    Depth- and probability-bounded expectimax.

    Args:
        depth: Fixed depth limit. None adapts it to the board:
            max(distinct ranks - 2, 3).
        use_cache: Share chance-node values through a transposition cache.
        cache_capacity: Maximum cached boards (LRU eviction).
        workers: Threads for the four root moves. 1 searches sequentially.
            The search is pure Python, so threads share the cache but do not
            run in parallel; batch play gets its speedup from processes.
    """

    # Don't expand a chance node whose cumulative probability is below this
    CPROB_THRESHOLD = 1e-4
    # Only chance nodes shallower than this are cached
    CACHE_DEPTH_LIMIT = 15
    CACHE_CAPACITY = 10_000
    # Keeps a legal root move above the 0.0 "no move" sentinel
    ROOT_EPSILON = 1e-6

    def __init__(
        self,
        depth: Optional[int] = None,
        use_cache: bool = True,
        cache_capacity: int = CACHE_CAPACITY,
        workers: int = 1,
    ):
        self.depth = depth
        self.cache: Optional[TranspositionCache] = (
            TranspositionCache(cache_capacity) if use_cache else None
        )
        self.workers = max(1, workers)
        self._cache_heuristic: Optional[Heuristic] = None

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def next_move(self, board: Board, heuristic: Optional[Heuristic] = None) -> Optional[Move]:
        scores = self.evaluate(board, heuristic)

        best_move = None
        best_score = 0.0
        for move in ALL_MOVES:
            if scores[move] > best_score:
                best_score = scores[move]
                best_move = move

        logger.debug(
            "expectimax scores %s -> %s (cache=%d hits=%d misses=%d)",
            {m.name: round(s, 1) for m, s in scores.items()},
            best_move.name if best_move else None,
            len(self.cache) if self.cache is not None else 0,
            self.cache.hits if self.cache is not None else 0,
            self.cache.misses if self.cache is not None else 0,
        )
        return best_move

    def evaluate(self, board: Board, heuristic: Optional[Heuristic] = None) -> Dict[Move, float]:
        """Root score of every move; 0.0 for illegal ones."""
        heuristic = heuristic or HeuristicScoreCache.shared()
        self._bind_cache(heuristic)
        depth_limit = self.depth_limit(board)

        def score(move: Move) -> float:
            return self.move_score(board, move, heuristic, depth_limit)

        if self.workers > 1:
            with ThreadPoolExecutor(max_workers=min(self.workers, len(ALL_MOVES))) as pool:
                results = list(pool.map(score, ALL_MOVES))
        else:
            results = [score(m) for m in ALL_MOVES]

        return dict(zip(ALL_MOVES, results))

    def depth_limit(self, board: Board) -> int:
        if self.depth is not None:
            return self.depth
        return max(board.distinct_tile_rank_count() - 2, 3)

    def move_score(
        self,
        board: Board,
        move: Move,
        heuristic: Heuristic,
        depth_limit: Optional[int] = None,
    ) -> float:
        """
        Merge score of the move plus the expectation of the resulting
        chance node. 0.0 if the move is illegal.
        """
        self._bind_cache(heuristic)
        if depth_limit is None:
            depth_limit = self.depth_limit(board)

        raw, gained = execute_move(board.raw, move)
        if raw == board.raw:
            return 0.0
        return gained + self._chance(heuristic, raw, 1.0, 0, depth_limit) + self.ROOT_EPSILON

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear()

    def _bind_cache(self, heuristic: Heuristic) -> None:
        """Flush the cache if it was filled under another evaluator."""
        if self.cache is not None and heuristic is not self._cache_heuristic:
            self.cache.clear()
            self._cache_heuristic = heuristic

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def _chance(
        self,
        heuristic: Heuristic,
        raw: int,
        cprob: float,
        depth: int,
        depth_limit: int,
    ) -> float:
        """Expected value over all tile spawns."""
        if cprob < self.CPROB_THRESHOLD or depth >= depth_limit:
            return heuristic.score_raw(raw)

        plies = depth_limit - depth
        cache = self.cache
        if cache is not None:
            cached = cache.lookup(raw, plies)
            if cached is not None:
                return cached

        empty = empty_cells(raw)
        if not empty:
            return heuristic.score_raw(raw)

        cprob /= len(empty)
        total = 0.0
        for cell in empty:
            shift = 4 * cell
            for rank, p in SPAWN_DISTRIBUTION:
                total += p * self._player(
                    heuristic, raw | (rank << shift), cprob * p, depth + 1, depth_limit
                )
        value = total / len(empty)

        if cache is not None and depth < self.CACHE_DEPTH_LIMIT:
            cache.store(raw, plies, value)
        return value

    def _player(
        self,
        heuristic: Heuristic,
        raw: int,
        cprob: float,
        depth: int,
        depth_limit: int,
    ) -> float:
        """Best chance-node value over the legal moves; 0.0 if there are none."""
        best = 0.0
        for move in ALL_MOVES:
            moved, _ = execute_move(raw, move)
            if moved == raw:
                continue
            value = self._chance(heuristic, moved, cprob, depth + 1, depth_limit)
            if value > best:
                best = value
        return best
