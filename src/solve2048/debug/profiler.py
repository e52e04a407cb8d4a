"""
Profiling utility for engine and player performance analysis.

Engine operations run in the microsecond range and move decisions in the
millisecond range, so every timed block keeps its raw samples and the
summary reports mean, median and 95th percentile rather than a total.

Usage:
    from solve2048.debug.profiler import (
        profile_board_ops,
        profile_decision,
        profile_games,
        timed,
        print_timing_summary,
    )

    # Per-operation latency of the packed board
    profile_board_ops(num_iters=10_000)

    # cProfile of one move decision
    profile_decision(ExpectimaxPlayer(), board)

    # Time any block, then report
    with timed("expectimax.next_move"):
        player.next_move(board)
    print_timing_summary()
"""

import cProfile
import io
import pstats
import random
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from solve2048.core.board import Board, execute_move
from solve2048.core.types import ALL_MOVES
from solve2048.heuristics.base import Heuristic
from solve2048.heuristics.score_cache import HeuristicScoreCache
from solve2048.players.player_base import Player


# ---------------------------------------------------------------------------
# Latency Samples
# ---------------------------------------------------------------------------

@dataclass
class TimingStats:
    """Raw latency samples (seconds) of one named operation."""
    samples: List[float] = field(default_factory=list)

    @property
    def call_count(self) -> int:
        return len(self.samples)

    @property
    def total_time(self) -> float:
        return float(np.sum(self.samples)) if self.samples else 0.0

    @property
    def avg_time(self) -> float:
        return float(np.mean(self.samples)) if self.samples else 0.0

    @property
    def min_time(self) -> float:
        return min(self.samples) if self.samples else 0.0

    @property
    def max_time(self) -> float:
        return max(self.samples) if self.samples else 0.0

    def percentile(self, q: float) -> float:
        return float(np.percentile(self.samples, q)) if self.samples else 0.0

    @property
    def ops_per_sec(self) -> float:
        avg = self.avg_time
        return 1.0 / avg if avg else 0.0


_samples: Dict[str, TimingStats] = {}


@contextmanager
def timed(name: str, print_immediate: bool = False):
    """Record the wall time of the enclosed block under ``name``."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        _samples.setdefault(name, TimingStats()).samples.append(elapsed)
        if print_immediate:
            print(f"[{name}] {elapsed * 1e6:.1f}us")


def print_timing_summary():
    """One line per operation, slowest mean first."""
    if not _samples:
        print("No timing data collected.")
        return

    width = 92
    print("\n" + "=" * width)
    print(f"{'TIMING SUMMARY':^{width}}")
    print("=" * width)
    print(
        f"{'Operation':<28} {'Calls':>8} {'Mean':>11} {'Median':>11} "
        f"{'p95':>11} {'Ops/s':>10} {'Share':>7}"
    )
    print("-" * width)

    grand_total = sum(s.total_time for s in _samples.values())
    for name, stats in sorted(_samples.items(), key=lambda kv: kv[1].avg_time, reverse=True):
        share = stats.total_time / grand_total * 100 if grand_total else 0.0
        print(
            f"{name:<28} {stats.call_count:>8} "
            f"{stats.avg_time * 1e6:>9.2f}us "
            f"{stats.percentile(50) * 1e6:>9.2f}us "
            f"{stats.percentile(95) * 1e6:>9.2f}us "
            f"{stats.ops_per_sec:>10.0f} "
            f"{share:>6.1f}%"
        )
    print("=" * width)


def clear_timing_stats():
    _samples.clear()


def get_timing_stats() -> Dict[str, TimingStats]:
    return dict(_samples)


# ---------------------------------------------------------------------------
# Board Operations
# ---------------------------------------------------------------------------

def random_midgame_board(rng: random.Random, moves: int = 60) -> Board:
    """Board reached by random play, for benchmarking realistic positions."""
    board = Board()
    board.add_random_tile(rng)
    board.add_random_tile(rng)
    for _ in range(moves):
        move = board.random_available_move(rng)
        if move is None:
            break
        board.apply_move(move)
        board.add_random_tile(rng)
    return board


def profile_board_ops(num_iters: int = 10_000, seed: int = 0) -> Dict[str, TimingStats]:
    """Latency of move application, rotation, spawning and heuristic scoring."""
    rng = random.Random(seed)
    board = random_midgame_board(rng)
    heuristic = HeuristicScoreCache.shared()
    raw = board.raw

    # Build both lookup tables before anything is timed
    execute_move(raw, ALL_MOVES[0])
    heuristic.score_raw(raw)

    clear_timing_stats()
    for _ in range(num_iters):
        for move in ALL_MOVES:
            with timed(f"execute_move {move.name}"):
                execute_move(raw, move)
        with timed("rotate_clockwise"):
            board.copy().rotate_clockwise()
        with timed("add_random_tile"):
            board.copy().add_random_tile(rng)
        with timed("heuristic.score_raw"):
            heuristic.score_raw(raw)
        with timed("is_terminal"):
            board.is_terminal()

    print_timing_summary()
    return get_timing_stats()


# ---------------------------------------------------------------------------
# cProfile of a Decision
# ---------------------------------------------------------------------------

def profile_decision(
    player: Player,
    board: Board,
    heuristic: Optional[Heuristic] = None,
    top_n: int = 25,
    sort_by: str = "cumulative",
):
    """Run one next_move under cProfile, print the hottest calls, return the move."""
    profiler = cProfile.Profile()
    start = time.perf_counter()
    profiler.enable()
    move = player.next_move(board, heuristic)
    profiler.disable()
    elapsed = time.perf_counter() - start

    print(f"\n{type(player).__name__}: {move.name if move else None} in {elapsed * 1000:.1f}ms")
    out = io.StringIO()
    pstats.Stats(profiler, stream=out).strip_dirs().sort_stats(sort_by).print_stats(top_n)
    print(f"\nTOP {top_n} BY {sort_by.upper()}")
    print("-" * 80)
    print(out.getvalue())
    return move


def profile_games(runner, num_games: int = 4) -> float:
    """Wall time for a batch of games on a SimulationRunner; prints throughput."""
    start = time.perf_counter()
    results = runner.run_batch(num_games)
    elapsed = time.perf_counter() - start

    moves = sum(r.moves for r in results)
    thinking = sum(r.elapsed for r in results)
    print(
        f"\n{num_games} game(s), {moves} moves in {elapsed:.2f}s wall, "
        f"{thinking:.2f}s deciding ({moves / elapsed if elapsed else 0:.1f} moves/sec)"
    )
    return elapsed
