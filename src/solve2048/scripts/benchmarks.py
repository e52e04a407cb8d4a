#!/usr/bin/env python3
"""
Engine Performance Profiler
===========================

Location: src/solve2048/scripts/benchmarks.py

Profiles the packed board engine and the players built on it.

USAGE
-----
    python -m solve2048.scripts.benchmarks [player] [num_games] [options]

ARGUMENTS
---------
    player      "expectimax", "monte_carlo" or "random" (default: expectimax)
    num_games   Games for the batch throughput test (default: 2)

OPTIONS
-------
    --full      Also cProfile one move decision of the selected player

OUTPUT
------
1. BOARD OPERATIONS
   - execute_move per direction, rotate_clockwise, add_random_tile,
     heuristic.score_raw, is_terminal (mean, median, p95, ops/sec)

   → UP/DOWN cost two rotations more than LEFT/RIGHT; a much larger gap
     means the rotation masks regressed

2. SINGLE DECISION
   - Latency of expectimax and Monte-Carlo next_move on a midgame board
   - With --full: cProfile call tree of the selected player's next_move

3. GAME BATCH
   - Moves per second over a batch of games with a move cap
"""

import random
import sys

from solve2048.debug.profiler import (
    clear_timing_stats,
    print_timing_summary,
    profile_board_ops,
    profile_decision,
    profile_games,
    random_midgame_board,
    timed,
)
from solve2048.simulation.runner import SimulationRunner
from solve2048.utils.config import Config
from solve2048.utils.factory import create_heuristic, create_player

BENCHMARK_PLAYERS = ("expectimax", "monte_carlo", "random")


def main():
    if "--help" in sys.argv or "-h" in sys.argv:
        print(__doc__)
        sys.exit(0)

    player_name = "expectimax"
    num_games = 2
    do_full = False

    args = [a for a in sys.argv[1:] if not a.startswith("-")]
    flags = [a for a in sys.argv[1:] if a.startswith("-")]

    for flag in flags:
        if flag == "--full":
            do_full = True
        else:
            print(f"Unknown flag: {flag}")
            print("Use --help for usage information")
            sys.exit(1)

    for arg in args:
        if arg in BENCHMARK_PLAYERS:
            player_name = arg
        elif arg.isdigit():
            num_games = int(arg)
        else:
            print(f"Unknown argument: {arg}")
            print(f"Available players: {', '.join(BENCHMARK_PLAYERS)}")
            sys.exit(1)

    config = Config(player_name=player_name, games=num_games, max_moves=200, iterations=50, seed=0)

    print(f"\n{'='*80}")
    print(f"Profiling: {player_name}")
    print(f"Games: {num_games} (max {config.max_moves} moves each)")
    print(f"{'='*80}")

    print("\n[1/3] Board Operations...")
    profile_board_ops(num_iters=5_000)

    print("\n[2/3] Single Decision...")
    board = random_midgame_board(random.Random(0))
    print(board.pretty())
    clear_timing_stats()
    for name in ("expectimax", "monte_carlo"):
        decision_config = Config(player_name=name, iterations=config.iterations, seed=0)
        player = create_player(decision_config)
        heuristic = create_heuristic(decision_config)
        for _ in range(3):
            with timed(f"{name}.next_move"):
                player.next_move(board, heuristic)
    print_timing_summary()
    if do_full:
        profile_decision(create_player(config), board, create_heuristic(config))

    print("\n[3/3] Game Batch...")
    with SimulationRunner(config) as runner:
        profile_games(runner, num_games)

    print("\nDone!")


if __name__ == "__main__":
    main()
