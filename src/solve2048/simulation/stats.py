"""
Aggregate statistics over many games.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from solve2048.core.types import MAX_RANK
from solve2048.simulation.jobs import GameResult


@dataclass
class GameStats:
    """Running totals plus a histogram of the largest tile reached."""

    games: int = 0
    score_total: int = 0
    max_tile_total: int = 0
    moves_total: int = 0
    best_score: int = 0
    tile_counter: List[int] = field(default_factory=lambda: [0] * (MAX_RANK + 1))

    def add(self, result: GameResult) -> None:
        self.games += 1
        self.score_total += result.score
        self.max_tile_total += result.max_tile
        self.moves_total += result.moves
        self.best_score = max(self.best_score, result.score)
        self.tile_counter[result.max_rank] += 1

    @property
    def average_score(self) -> float:
        return self.score_total / self.games if self.games else 0.0

    @property
    def average_max_tile(self) -> float:
        return self.max_tile_total / self.games if self.games else 0.0

    @property
    def average_moves(self) -> float:
        return self.moves_total / self.games if self.games else 0.0

    def tile_frequency(self) -> List[Tuple[int, float, float]]:
        """
        (tile, share of games ending on it, share reaching at least it),
        for every tile that was some game's maximum.
        """
        if not self.games:
            return []

        cumulative = [0] * len(self.tile_counter)
        running = 0
        for rank in reversed(range(len(self.tile_counter))):
            running += self.tile_counter[rank]
            cumulative[rank] = running

        rows = []
        for rank, count in enumerate(self.tile_counter):
            if count:
                rows.append((1 << rank, count / self.games, cumulative[rank] / self.games))
        return rows

    def summary(self) -> str:
        return (
            f"Games: {self.games}  Score: {self.average_score:.1f}  "
            f"Max: {self.average_max_tile:.1f}  Moves: {self.average_moves:.1f}  "
            f"Best: {self.best_score}"
        )

    def format_tile_frequency(self) -> str:
        lines = ["==== Tile Frequency ===="]
        for tile, freq, cum in self.tile_frequency():
            lines.append(f"{tile:>6}: {freq * 100:6.2f}% ({cum * 100:6.2f}%)")
        lines.append("========================")
        return "\n".join(lines)
