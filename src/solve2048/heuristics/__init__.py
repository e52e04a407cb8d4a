"""
Heuristics module - board evaluators.

- Heuristic: the ``score(board) -> float`` capability
- NullHeuristic: constant zero, for players that ignore evaluation
- HeuristicScoreCache: the row-table expectimax heuristic
"""

from solve2048.heuristics.base import Heuristic, NullHeuristic
from solve2048.heuristics.score_cache import (
    HeuristicScoreCache,
    HeuristicWeights,
    DEFAULT_WEIGHTS,
    row_score,
)

__all__ = [
    "Heuristic",
    "NullHeuristic",
    "HeuristicScoreCache",
    "HeuristicWeights",
    "DEFAULT_WEIGHTS",
    "row_score",
]
