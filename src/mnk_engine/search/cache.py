"""
Transposition cache for minimax / alpha-beta search.

Maps (state signature, ply) to a bound-flagged value. A cached bound is only
a shortcut inside a window consistent with how it was produced:

    EXACT        always reusable
    LOWER_BOUND  true value >= v: return v if v >= beta, else raise alpha to v
    UPPER_BOUND  true value <= v: return v if v <= alpha, else lower beta to v

Entries remember the depth limit they were searched under. Within one root
search every ply has a fixed horizon, so only entries with a matching depth
limit are used as results; entries from a shallower iteration of iterative
deepening still serve as move-ordering hints.
"""

from __future__ import annotations

from typing import Dict, Hashable, NamedTuple, Optional, Tuple

from mnk_engine.core.errors import CacheProtocolError
from mnk_engine.core.types import BoundFlag, CacheEntry

CacheKey = Tuple[Hashable, int]


class CacheProbe(NamedTuple):
    """Probe outcome: a usable value, or a (possibly narrowed) window."""

    value: Optional[float]
    alpha: Optional[float]
    beta: Optional[float]


def bound_flag(value: float, alpha: Optional[float], beta: Optional[float]) -> BoundFlag:
    """
    Classify a search result against the window it was searched with.

    A missing bound means no pruning window; 0 is a real bound.
    """
    if alpha is None or beta is None:
        return BoundFlag.EXACT
    if value <= alpha:
        return BoundFlag.UPPER_BOUND
    if value >= beta:
        return BoundFlag.LOWER_BOUND
    return BoundFlag.EXACT


class TranspositionCache:
    """Unbounded dict-backed transposition table owned by one search engine."""

    def __init__(self):
        self._entries: Dict[CacheKey, CacheEntry] = {}

        # Statistics
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def get(self, signature: Hashable, depth: int) -> Optional[CacheEntry]:
        return self._entries.get((signature, depth))

    def store(
        self,
        signature: Hashable,
        depth: int,
        flag: BoundFlag,
        value: float,
        depth_limit: int,
    ) -> None:
        """Store (replacing any older entry for the same key)."""
        if not isinstance(flag, BoundFlag):
            raise CacheProtocolError(f"Refusing to store unknown bound flag {flag!r}")
        self._entries[(signature, depth)] = CacheEntry(flag, value, depth_limit)
        self.stores += 1

    def probe(
        self,
        signature: Hashable,
        depth: int,
        alpha: Optional[float],
        beta: Optional[float],
        depth_limit: int,
    ) -> CacheProbe:
        """
        Look up (signature, depth) for a search with window (alpha, beta).

        Returns the cached value when it settles the node, otherwise the
        window to search with (narrowed by a one-sided bound when possible).
        """
        entry = self._entries.get((signature, depth))
        if entry is None or entry.depth_limit != depth_limit:
            self.misses += 1
            return CacheProbe(None, alpha, beta)

        flag, value = entry.flag, entry.value

        if flag is BoundFlag.EXACT:
            self.hits += 1
            return CacheProbe(value, alpha, beta)

        if flag is BoundFlag.LOWER_BOUND:
            if alpha is None or beta is None:
                self.misses += 1
                return CacheProbe(None, alpha, beta)
            self.hits += 1
            if value >= beta:
                return CacheProbe(value, alpha, beta)
            return CacheProbe(None, max(alpha, value), beta)

        if flag is BoundFlag.UPPER_BOUND:
            if alpha is None or beta is None:
                self.misses += 1
                return CacheProbe(None, alpha, beta)
            self.hits += 1
            if value <= alpha:
                return CacheProbe(value, alpha, beta)
            return CacheProbe(None, alpha, min(beta, value))

        raise CacheProtocolError(f"Cache entry for depth {depth} has impossible flag {flag!r}")

    def value_hint(self, signature: Hashable, depth: int) -> Optional[float]:
        """Last value stored for (signature, depth), whatever its horizon or flag."""
        entry = self._entries.get((signature, depth))
        return None if entry is None else entry.value

    def clear(self) -> None:
        """Drop all entries and reset statistics."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def get_stats(self) -> dict:
        total = self.hits + self.misses
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hits / total if total else 0.0,
            "stores": self.stores,
        }
