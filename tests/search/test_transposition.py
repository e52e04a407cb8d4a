"""
Tests for solve2048.search.transposition

Bounded LRU of chance-node values keyed on the packed board.
"""

import threading

import pytest

from solve2048.search import TranspositionCache, TranspositionEntry


class TestLookup:

    def test_miss_on_empty(self):
        cache = TranspositionCache()
        assert cache.lookup(0x1, 3) is None
        assert cache.misses == 1

    def test_hit_same_plies(self):
        cache = TranspositionCache()
        cache.store(0x1, 3, 42.0)
        assert cache.lookup(0x1, 3) == 42.0
        assert cache.hits == 1

    def test_deeper_entry_serves_shallower_request(self):
        cache = TranspositionCache()
        cache.store(0x1, 5, 42.0)
        assert cache.lookup(0x1, 2) == 42.0

    def test_shallower_entry_is_stale(self):
        """A value searched fewer plies than needed is not reused."""
        cache = TranspositionCache()
        cache.store(0x1, 2, 42.0)
        assert cache.lookup(0x1, 4) is None
        assert 0x1 in cache

    def test_store_overwrites(self):
        cache = TranspositionCache()
        cache.store(0x1, 2, 1.0)
        cache.store(0x1, 4, 2.0)
        assert cache.get(0x1) == TranspositionEntry(plies=4, score=2.0)
        assert len(cache) == 1


class TestEviction:

    def test_capacity_bound(self):
        cache = TranspositionCache(capacity=3)
        for raw in range(10):
            cache.store(raw, 1, float(raw))
        assert len(cache) == 3
        assert [raw in cache for raw in range(10)] == [False] * 7 + [True] * 3

    def test_least_recently_used_goes_first(self):
        cache = TranspositionCache(capacity=2)
        cache.store(0xA, 1, 1.0)
        cache.store(0xB, 1, 2.0)
        cache.lookup(0xA, 1)          # A is now most recent
        cache.store(0xC, 1, 3.0)
        assert 0xA in cache
        assert 0xB not in cache
        assert 0xC in cache

    @pytest.mark.parametrize("capacity", [0, -5])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ValueError):
            TranspositionCache(capacity)


class TestClear:

    def test_clear_resets_entries_and_counters(self):
        cache = TranspositionCache()
        cache.store(0x1, 1, 1.0)
        cache.lookup(0x1, 1)
        cache.lookup(0x2, 1)
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == cache.misses == 0


class TestConcurrency:

    def test_parallel_writers_respect_capacity(self):
        cache = TranspositionCache(capacity=100)

        def write(offset):
            for i in range(500):
                cache.store(offset * 1000 + i, 1, float(i))
                cache.lookup(offset * 1000 + i // 2, 1)

        threads = [threading.Thread(target=write, args=(t,)) for t in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(cache) == 100
