"""
Tests for solve2048.simulation.stats
"""

import pytest

from solve2048.simulation.jobs import GameResult
from solve2048.simulation.stats import GameStats


def result(score, max_tile, moves=100):
    return GameResult(score=score, max_tile=max_tile, moves=moves, elapsed=1.0, board=0)


@pytest.fixture
def stats() -> GameStats:
    s = GameStats()
    for score, tile in [(20000, 2048), (9000, 1024), (10000, 1024), (4000, 512)]:
        s.add(result(score, tile))
    return s


class TestGameStats:

    def test_empty(self):
        s = GameStats()
        assert s.average_score == 0.0
        assert s.tile_frequency() == []
        assert len(s.tile_counter) == 16

    def test_totals(self, stats):
        assert stats.games == 4
        assert stats.average_score == pytest.approx(10750.0)
        assert stats.average_max_tile == pytest.approx(1152.0)
        assert stats.average_moves == pytest.approx(100.0)
        assert stats.best_score == 20000

    def test_tile_counter(self, stats):
        assert stats.tile_counter[11] == 1
        assert stats.tile_counter[10] == 2
        assert stats.tile_counter[9] == 1

    def test_tile_frequency_cumulative(self, stats):
        """Each row: tile, share ending on it, share reaching at least it."""
        assert stats.tile_frequency() == [
            (512, 0.25, 1.0),
            (1024, 0.5, 0.75),
            (2048, 0.25, 0.25),
        ]

    def test_formatting(self, stats):
        assert "Games: 4" in stats.summary()
        table = stats.format_tile_frequency()
        assert "2048:  25.00% ( 25.00%)" in table
        assert table.splitlines()[0].startswith("====")
