"""
Configuration and player registry.
"""

from pathlib import Path
from typing import Optional

from solve2048.heuristics import HeuristicScoreCache, NullHeuristic
from solve2048.players import (
    ExpectimaxPlayer,
    MonteCarloMetric,
    MonteCarloPlayer,
    NTuple,
    RandomPlayer,
)
from solve2048.simulation import DEFAULT_WORKER_COUNT


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).parent.parent  # src/solve2048/
DATA_DIR = PACKAGE_DIR / "data"
WEIGHTS_DIR = DATA_DIR / "weights"
DEFAULT_WEIGHTS_FILE = WEIGHTS_DIR / "tuplenet.bin"


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

PLAYERS = {
    "expectimax": ExpectimaxPlayer,
    "monte_carlo": MonteCarloPlayer,
    "ntuple": NTuple,
    "random": RandomPlayer,
}

HEURISTICS = {
    "score_cache": HeuristicScoreCache.shared,
    "null": NullHeuristic,
}

# Evaluator handed to each player's next_move
PLAYER_HEURISTICS = {
    "expectimax": "score_cache",
    "monte_carlo": "null",
    "ntuple": "null",
    "random": "null",
}


# ---------------------------------------------------------------------------
# Default Settings
# ---------------------------------------------------------------------------

class Config:
    """Game-playing configuration with sensible defaults."""

    def __init__(
        self,
        player_name: str = "expectimax",
        games: int = 1,
        max_moves: Optional[int] = None,
        num_workers: int = DEFAULT_WORKER_COUNT,
        depth: Optional[int] = None,
        iterations: int = MonteCarloPlayer.DEFAULT_ITERATIONS,
        metric: str = MonteCarloMetric.SUM.value,
        weights_path: Optional[str] = None,
        seed: Optional[int] = None,
        show_moves: bool = False,
    ):
        self.player_name = player_name
        self.games = games
        self.max_moves = max_moves
        self.depth = depth
        self.iterations = iterations
        self.metric = MonteCarloMetric(metric)
        self.weights_path = Path(weights_path) if weights_path else None
        self.seed = seed
        self.show_moves = show_moves

        # Derive dependent values
        self.player_class = PLAYERS[player_name]
        self.heuristic_name = PLAYER_HEURISTICS[player_name]
        self.num_workers = max(1, min(num_workers, self.games))
        if player_name == "ntuple" and self.weights_path is None:
            self.weights_path = DEFAULT_WEIGHTS_FILE

    def validate(self) -> None:
        """
        Check settings that would otherwise fail inside worker processes.

        Raises:
            ValueError: describing the first problem found.
        """
        if self.weights_path is not None and not self.weights_path.exists():
            raise ValueError(f"N-tuple weights not found: {self.weights_path} (pass --weights)")
        if self.depth is not None and self.depth < 1:
            raise ValueError(f"depth must be at least 1, got {self.depth}")
        if self.games < 1:
            raise ValueError(f"games must be at least 1, got {self.games}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {self.iterations}")
        if self.show_moves and self.games > 1:
            raise ValueError("show_moves only works with a single game")


# Default configuration
DEFAULT_CONFIG = Config()
