"""
N-tuple network evaluator and greedy player.

A feature is a tuple of board cells. Its weight table is indexed by the
ranks found on those cells, and it is read under all 8 board symmetries.
The network value is the sum over its features.

Weights file layout (all little-endian):

    u64  number of features
    per feature:
        i32  name length
        ...  name bytes (UTF-8), e.g. "6-tuple pattern 012345"
        u64  number of weights (16 ** tuple length)
        f32  weights

Learning the weights happens elsewhere; this module only evaluates and
loads/saves them.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Tuple, Union

import numpy as np

from solve2048.core.board import Board, execute_move
from solve2048.core.types import ALL_MOVES, RANK_MASK, Move
from solve2048.heuristics.base import Heuristic
from solve2048.players.player_base import Player

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS: Tuple[Tuple[int, ...], ...] = (
    (0, 1, 2, 3, 4, 5),
    (4, 5, 6, 7, 8, 9),
    (0, 1, 2, 4, 5, 6),
    (4, 5, 6, 8, 9, 10),
)

# Every cell holds its own index: reading a pattern off a transformed copy
# gives the pattern's cells under that transform
_IDENTITY_BOARD = 0xFEDCBA9876543210


class WeightsFormatError(ValueError):
    """Persisted weights do not match the network being loaded."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise WeightsFormatError(f"Unexpected end of weights data: wanted {size} bytes, got {len(data)}")
    return data


# =============================================================================
# Feature
# =============================================================================

class Feature:
    """One n-tuple pattern with its weight table and 8 isometric copies."""

    def __init__(self, pattern: Sequence[int]):
        self.pattern = tuple(pattern)
        self.weights = np.zeros(1 << (4 * len(self.pattern)), dtype=np.float32)
        self.isomorphisms = self._isometries(self.pattern)

    @staticmethod
    def _isometries(pattern: Tuple[int, ...]) -> List[Tuple[int, ...]]:
        """4 rotations x 2 mirror states."""
        isos = []
        for i in range(8):
            b = Board(_IDENTITY_BOARD)
            if i >= 4:
                b.flip_horizontal()
            b.rotate(i)
            isos.append(tuple(b.at(t) for t in pattern))
        return isos

    @property
    def name(self) -> str:
        cells = "".join(f"{c:x}" for c in self.isomorphisms[0])
        return f"{len(self.pattern)}-tuple pattern {cells}"

    @staticmethod
    def index_of(cells: Sequence[int], raw: int) -> int:
        index = 0
        for i, cell in enumerate(cells):
            index |= ((raw >> (4 * cell)) & RANK_MASK) << (4 * i)
        return index

    def estimate(self, board: Board) -> float:
        raw = board.raw
        weights = self.weights
        return float(sum(weights[self.index_of(iso, raw)] for iso in self.isomorphisms))

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save_weights(self, stream: BinaryIO) -> None:
        name = self.name.encode("utf-8")
        stream.write(struct.pack("<i", len(name)))
        stream.write(name)
        stream.write(struct.pack("<Q", len(self.weights)))
        stream.write(self.weights.astype("<f4").tobytes())

    def load_weights(self, stream: BinaryIO) -> None:
        """
        Read this feature's block.

        Raises:
            WeightsFormatError: name or size mismatch, or truncated data.
        """
        (name_size,) = struct.unpack("<i", _read_exact(stream, 4))
        if name_size < 0:
            raise WeightsFormatError(f"Invalid feature name length: {name_size}")
        name = _read_exact(stream, name_size).decode("utf-8", errors="replace")
        if name != self.name:
            raise WeightsFormatError(
                f"Invalid feature name (len={name_size}): {name!r} != {self.name!r}"
            )

        (length,) = struct.unpack("<Q", _read_exact(stream, 8))
        if length != len(self.weights):
            raise WeightsFormatError(
                f"Invalid weight count for {self.name}: {length} != {len(self.weights)}"
            )
        data = _read_exact(stream, 4 * length)
        self.weights = np.frombuffer(data, dtype="<f4").astype(np.float32)


# =============================================================================
# Network
# =============================================================================

class NTuple(Heuristic, Player):
    """Sum of n-tuple features; usable as an evaluator and as a player."""

    def __init__(self, features: List[Feature]):
        self.features = features

    @classmethod
    def default(cls) -> "NTuple":
        """Empty network over DEFAULT_PATTERNS (~270 MB of float32 weights)."""
        return cls([Feature(p) for p in DEFAULT_PATTERNS])

    @classmethod
    def load(
        cls,
        source: Union[str, Path, BinaryIO],
        patterns: Sequence[Sequence[int]] = DEFAULT_PATTERNS,
    ) -> "NTuple":
        """Build a network over ``patterns`` from a weights file or stream."""
        net = cls([Feature(p) for p in patterns])
        if isinstance(source, (str, Path)):
            with open(source, "rb") as f:
                net.load_weights(f)
        else:
            net.load_weights(source)
        return net

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def estimate(self, board: Board) -> float:
        return sum(f.estimate(board) for f in self.features)

    def score(self, board: Board) -> float:
        return self.estimate(board)

    def next_move(self, board: Board, heuristic: Optional[Heuristic] = None) -> Optional[Move]:
        """Greedy: maximise merge score plus the value of the after-state."""
        best_move = None
        best_score = float("-inf")
        for move in ALL_MOVES:
            raw, gained = execute_move(board.raw, move)
            if raw == board.raw:
                continue
            value = gained + self.estimate(Board(raw))
            if value > best_score:
                best_score = value
                best_move = move
        return best_move

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save_weights(self, stream: BinaryIO) -> None:
        stream.write(struct.pack("<Q", len(self.features)))
        for feature in self.features:
            feature.save_weights(stream)
        stream.flush()

    def save(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            self.save_weights(f)

    def load_weights(self, stream: BinaryIO) -> None:
        """
        Read weights for every feature, in order.

        Raises:
            WeightsFormatError: feature count mismatch, or any feature error.
        """
        (size,) = struct.unpack("<Q", _read_exact(stream, 8))
        logger.debug("Size of network %d", size)
        if size != len(self.features):
            raise WeightsFormatError(f"Invalid size: {size} != {len(self.features)}")
        for feature in self.features:
            feature.load_weights(stream)
