"""
Transposition cache for expectimax chance nodes.

Maps a packed board to its chance-node value and the number of plies
that were still to be searched below it. Bounded LRU: the least
recently used entry is evicted once capacity is reached.

A single lock guards the ordering bookkeeping. Concurrent writers of the
same key store the same deterministic value, so last write wins.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import NamedTuple, Optional


class TranspositionEntry(NamedTuple):
    """Cached chance-node value.

    Attributes:
        plies: Plies left to the depth limit when the value was computed.
        score: Expected value of the chance node.
    """
    plies: int
    score: float


class TranspositionCache:
    """Thread-safe bounded LRU keyed on the packed board."""

    def __init__(self, capacity: int = 10_000):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: "OrderedDict[int, TranspositionEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def lookup(self, raw: int, plies: int) -> Optional[float]:
        """
        Return the cached score if it was searched at least ``plies`` deep.

        An entry with fewer plies than now required is stale and reported
        as a miss.
        """
        with self._lock:
            entry = self._entries.get(raw)
            if entry is None or entry.plies < plies:
                self.misses += 1
                return None
            self._entries.move_to_end(raw)
            self.hits += 1
            return entry.score

    def store(self, raw: int, plies: int, score: float) -> None:
        with self._lock:
            self._entries[raw] = TranspositionEntry(plies, score)
            self._entries.move_to_end(raw)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)

    def get(self, raw: int) -> Optional[TranspositionEntry]:
        """Raw entry access without staleness checks or statistics."""
        with self._lock:
            return self._entries.get(raw)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, raw: int) -> bool:
        return raw in self._entries
