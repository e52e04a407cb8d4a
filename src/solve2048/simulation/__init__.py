"""
Simulation module - game loop and parallel game execution.
"""

from solve2048.simulation.jobs import GameJob, GameResult
from solve2048.simulation.stats import GameStats
from solve2048.simulation.worker import play_game
from solve2048.simulation.runner import SimulationRunner, DEFAULT_WORKER_COUNT

__all__ = [
    "GameJob",
    "GameResult",
    "GameStats",
    "play_game",
    "SimulationRunner",
    "DEFAULT_WORKER_COUNT",
]
