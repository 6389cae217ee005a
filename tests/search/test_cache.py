"""
Tests for mnk_engine.search.cache

Tests bound classification and the transposition cache probe protocol.
"""

import pytest

from mnk_engine.core.errors import CacheProtocolError
from mnk_engine.core.types import BoundFlag, CacheEntry
from mnk_engine.search.cache import CacheProbe, TranspositionCache, bound_flag


SIG = ("signature",)


@pytest.fixture
def cache() -> TranspositionCache:
    """Empty cache."""
    return TranspositionCache()


class TestBoundFlag:
    """bound_flag classification tests."""

    def test_no_window_is_exact(self):
        """Without a window every value is exact."""
        assert bound_flag(5.0, None, None) is BoundFlag.EXACT
        assert bound_flag(5.0, 1.0, None) is BoundFlag.EXACT

    def test_fail_low_is_upper_bound(self):
        """A value at or below alpha is an upper bound."""
        assert bound_flag(1.0, 1.0, 4.0) is BoundFlag.UPPER_BOUND
        assert bound_flag(-3.0, 1.0, 4.0) is BoundFlag.UPPER_BOUND

    def test_fail_high_is_lower_bound(self):
        """A value at or above beta is a lower bound."""
        assert bound_flag(4.0, 1.0, 4.0) is BoundFlag.LOWER_BOUND
        assert bound_flag(9.0, 1.0, 4.0) is BoundFlag.LOWER_BOUND

    def test_inside_window_is_exact(self):
        """A value strictly inside the window is exact."""
        assert bound_flag(2.0, 1.0, 4.0) is BoundFlag.EXACT

    def test_zero_is_a_real_bound(self):
        """alpha = 0 and beta = 0 are windows, not missing bounds."""
        assert bound_flag(0.0, 0.0, 3.0) is BoundFlag.UPPER_BOUND
        assert bound_flag(0.0, -3.0, 0.0) is BoundFlag.LOWER_BOUND


class TestStore:
    """store / get tests."""

    def test_store_and_get(self, cache: TranspositionCache):
        """Stored entries come back keyed by (signature, depth)."""
        cache.store(SIG, 2, BoundFlag.EXACT, 7.0, depth_limit=4)
        assert cache.get(SIG, 2) == CacheEntry(BoundFlag.EXACT, 7.0, 4)
        assert cache.get(SIG, 3) is None
        assert (SIG, 2) in cache
        assert len(cache) == 1

    def test_replaces_existing(self, cache: TranspositionCache):
        """A later store for the same key wins."""
        cache.store(SIG, 1, BoundFlag.LOWER_BOUND, 3.0, depth_limit=2)
        cache.store(SIG, 1, BoundFlag.EXACT, 5.0, depth_limit=3)
        assert cache.get(SIG, 1) == CacheEntry(BoundFlag.EXACT, 5.0, 3)
        assert len(cache) == 1

    def test_rejects_unknown_flag(self, cache: TranspositionCache):
        """Only BoundFlag members can be stored."""
        with pytest.raises(CacheProtocolError):
            cache.store(SIG, 1, "exact", 3.0, depth_limit=2)

    def test_clear(self, cache: TranspositionCache):
        """clear drops entries and statistics."""
        cache.store(SIG, 1, BoundFlag.EXACT, 3.0, depth_limit=2)
        cache.probe(SIG, 1, None, None, depth_limit=2)
        cache.clear()
        assert len(cache) == 0
        assert cache.get_stats() == {
            "entries": 0, "hits": 0, "misses": 0, "hit_rate": 0.0, "stores": 0,
        }


class TestProbe:
    """probe protocol tests."""

    def test_miss(self, cache: TranspositionCache):
        """An absent key returns the window unchanged."""
        assert cache.probe(SIG, 1, -1.0, 1.0, depth_limit=3) == CacheProbe(None, -1.0, 1.0)
        assert cache.misses == 1

    def test_exact_hit(self, cache: TranspositionCache):
        """EXACT entries are returned with or without a window."""
        cache.store(SIG, 1, BoundFlag.EXACT, 2.5, depth_limit=3)
        assert cache.probe(SIG, 1, None, None, depth_limit=3).value == 2.5
        assert cache.probe(SIG, 1, 10.0, 20.0, depth_limit=3).value == 2.5
        assert cache.hits == 2

    def test_other_depth_limit_is_miss(self, cache: TranspositionCache):
        """Entries from another horizon are not results."""
        cache.store(SIG, 1, BoundFlag.EXACT, 2.5, depth_limit=2)
        assert cache.probe(SIG, 1, None, None, depth_limit=3) == CacheProbe(None, None, None)

    def test_lower_bound_cutoff(self, cache: TranspositionCache):
        """A lower bound at or above beta settles the node."""
        cache.store(SIG, 1, BoundFlag.LOWER_BOUND, 5.0, depth_limit=3)
        assert cache.probe(SIG, 1, 0.0, 5.0, depth_limit=3).value == 5.0

    def test_lower_bound_raises_alpha(self, cache: TranspositionCache):
        """A lower bound below beta narrows alpha."""
        cache.store(SIG, 1, BoundFlag.LOWER_BOUND, 2.0, depth_limit=3)
        assert cache.probe(SIG, 1, 0.0, 5.0, depth_limit=3) == CacheProbe(None, 2.0, 5.0)
        assert cache.probe(SIG, 1, 3.0, 5.0, depth_limit=3) == CacheProbe(None, 3.0, 5.0)

    def test_upper_bound_cutoff(self, cache: TranspositionCache):
        """An upper bound at or below alpha settles the node."""
        cache.store(SIG, 1, BoundFlag.UPPER_BOUND, 0.0, depth_limit=3)
        assert cache.probe(SIG, 1, 0.0, 5.0, depth_limit=3).value == 0.0

    def test_upper_bound_lowers_beta(self, cache: TranspositionCache):
        """An upper bound above alpha narrows beta."""
        cache.store(SIG, 1, BoundFlag.UPPER_BOUND, 4.0, depth_limit=3)
        assert cache.probe(SIG, 1, 0.0, 5.0, depth_limit=3) == CacheProbe(None, 0.0, 4.0)

    @pytest.mark.parametrize("flag", [BoundFlag.LOWER_BOUND, BoundFlag.UPPER_BOUND])
    def test_bounds_unusable_without_window(self, cache: TranspositionCache, flag):
        """One-sided bounds mean nothing to a search with no window."""
        cache.store(SIG, 1, flag, 4.0, depth_limit=3)
        assert cache.probe(SIG, 1, None, None, depth_limit=3) == CacheProbe(None, None, None)

    def test_impossible_flag_raises(self, cache: TranspositionCache):
        """A corrupted entry is a protocol violation, not a miss."""
        cache._entries[(SIG, 1)] = CacheEntry("bogus", 1.0, 3)
        with pytest.raises(CacheProtocolError):
            cache.probe(SIG, 1, 0.0, 5.0, depth_limit=3)


class TestValueHint:
    """value_hint tests."""

    def test_ignores_horizon_and_flag(self, cache: TranspositionCache):
        """Hints come from any stored entry."""
        cache.store(SIG, 2, BoundFlag.UPPER_BOUND, -1.5, depth_limit=7)
        assert cache.value_hint(SIG, 2) == -1.5

    def test_missing(self, cache: TranspositionCache):
        """No entry, no hint."""
        assert cache.value_hint(SIG, 2) is None

    def test_stats(self, cache: TranspositionCache):
        """get_stats reports entries, hits and hit rate."""
        cache.store(SIG, 1, BoundFlag.EXACT, 1.0, depth_limit=2)
        cache.probe(SIG, 1, None, None, depth_limit=2)
        cache.probe(SIG, 2, None, None, depth_limit=2)
        stats = cache.get_stats()
        assert stats["entries"] == 1
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5
