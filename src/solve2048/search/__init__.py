"""
Search module - shared state for tree search.
"""

from solve2048.search.transposition import TranspositionCache, TranspositionEntry

__all__ = [
    "TranspositionCache",
    "TranspositionEntry",
]
