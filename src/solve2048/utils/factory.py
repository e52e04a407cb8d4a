"""
Factory functions for creating players and heuristics.
"""

import random
from typing import Union

from solve2048.heuristics.base import Heuristic
from solve2048.players import ExpectimaxPlayer, MonteCarloPlayer, NTuple, RandomPlayer
from solve2048.players.player_base import Player
from solve2048.utils.config import Config, HEURISTICS, PLAYERS


def create_player(config: Union[Config, str]) -> Player:
    """
    Create the player described by a Config (or a bare registry name).

    Args:
        config: Config instance, or a key from PLAYERS (e.g., "expectimax")

    Returns:
        Configured player instance
    """
    if isinstance(config, str):
        if config not in PLAYERS:
            available = ", ".join(PLAYERS.keys())
            raise ValueError(f"Unknown player: {config}. Available: {available}")
        config = Config(player_name=config)

    rng = random.Random(config.seed)
    player_class = config.player_class

    if player_class is ExpectimaxPlayer:
        return ExpectimaxPlayer(depth=config.depth)
    if player_class is MonteCarloPlayer:
        return MonteCarloPlayer(iterations=config.iterations, metric=config.metric, rng=rng)
    if player_class is NTuple:
        config.validate()
        return NTuple.load(config.weights_path)
    return RandomPlayer(rng=rng)


def create_heuristic(config: Union[Config, str]) -> Heuristic:
    """
    Create the evaluator a Config's player should be handed.

    Args:
        config: Config instance, or a key from HEURISTICS (e.g., "null")
    """
    name = config if isinstance(config, str) else config.heuristic_name
    if name not in HEURISTICS:
        available = ", ".join(HEURISTICS.keys())
        raise ValueError(f"Unknown heuristic: {name}. Available: {available}")
    return HEURISTICS[name]()
