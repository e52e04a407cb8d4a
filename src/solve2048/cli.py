"""
Command-line interface for playing 2048 with the bundled players.
"""

import argparse
import logging

from solve2048.api import play_games
from solve2048.players import MonteCarloMetric
from solve2048.utils.config import Config, PLAYERS


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play 2048 with expectimax, Monte-Carlo or n-tuple players"
    )
    parser.add_argument(
        "--player", "-p",
        choices=list(PLAYERS.keys()),
        default="expectimax",
        help="Player to use (default: expectimax)",
    )
    parser.add_argument(
        "--games", "-n",
        type=int,
        default=1,
        help="Number of games to play (default: 1)",
    )
    parser.add_argument(
        "--max-moves",
        type=int,
        default=None,
        help="Stop each game after this many moves (default: play to the end)",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Number of worker processes (default: CPU count - 1, at most one per game)",
    )
    parser.add_argument(
        "--depth", "-d",
        type=int,
        default=None,
        help="Expectimax depth limit (default: adapts to the board)",
    )
    parser.add_argument(
        "--iterations", "-i",
        type=int,
        default=200,
        help="Monte-Carlo playouts per candidate move (default: 200)",
    )
    parser.add_argument(
        "--metric",
        choices=[m.value for m in MonteCarloMetric],
        default=MonteCarloMetric.SUM.value,
        help="What a Monte-Carlo playout reports (default: sum)",
    )
    parser.add_argument(
        "--weights",
        type=str,
        default=None,
        help="N-tuple weights file (default: data/weights/tuplenet.bin)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for tile spawns and random players",
    )
    parser.add_argument(
        "--show-moves",
        action="store_true",
        help="Print the board after every move (single game only)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    config_kwargs = {
        "player_name": args.player,
        "games": args.games,
        "max_moves": args.max_moves,
        "depth": args.depth,
        "iterations": args.iterations,
        "metric": args.metric,
        "weights_path": args.weights,
        "seed": args.seed,
        "show_moves": args.show_moves,
    }
    if args.workers:
        config_kwargs["num_workers"] = args.workers
    return Config(**config_kwargs)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = build_config(args)
    try:
        config.validate()
    except ValueError as e:
        raise SystemExit(f"error: {e}") from e

    play_games(config)


if __name__ == "__main__":
    main()
