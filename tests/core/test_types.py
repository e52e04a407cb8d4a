"""
Tests for solve2048.core.types

Move codes and the constants every other module relies on.
"""

import pytest

from solve2048.core.types import (
    ALL_MOVES,
    BOARD_MASK,
    MAX_RANK,
    NO_MOVE_CODE,
    NUM_ROWS,
    RANK_MASK,
    SPAWN_DISTRIBUTION,
    Move,
)


class TestConstants:
    """Tests for module constants."""

    def test_layout(self):
        """A rank fits a nibble and a row covers every 16-bit pattern."""
        assert RANK_MASK == MAX_RANK == 15
        assert NUM_ROWS == 65536
        assert BOARD_MASK == (1 << 64) - 1

    def test_spawn_distribution_sums_to_one(self):
        """Spawn probabilities form a distribution over 2 and 4."""
        assert [rank for rank, _ in SPAWN_DISTRIBUTION] == [1, 2]
        assert sum(p for _, p in SPAWN_DISTRIBUTION) == pytest.approx(1.0)

    def test_no_move_code_is_not_a_move(self):
        """The no-move sentinel never collides with a real code."""
        assert NO_MOVE_CODE not in [m.value for m in Move]


class TestMove:
    """Move enum tests."""

    def test_codes(self):
        """Host codes are 0=up, 1=right, 2=down, 3=left."""
        assert Move.UP.to_int() == 0
        assert Move.RIGHT.to_int() == 1
        assert Move.DOWN.to_int() == 2
        assert Move.LEFT.to_int() == 3

    def test_from_int_roundtrip(self):
        for move in Move:
            assert Move.from_int(move.to_int()) is move

    @pytest.mark.parametrize("code", [-1, 4, 99])
    def test_from_int_invalid(self, code):
        """Codes outside 0-3 are rejected."""
        with pytest.raises(ValueError, match="Invalid move code"):
            Move.from_int(code)

    def test_search_order(self):
        """Ties are broken in the order up, down, left, right."""
        assert ALL_MOVES == (Move.UP, Move.DOWN, Move.LEFT, Move.RIGHT)
        assert Move.all() == ALL_MOVES
        assert set(ALL_MOVES) == set(Move)

    def test_arrows_distinct(self):
        assert len({m.arrow for m in Move}) == 4
