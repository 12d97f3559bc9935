"""
Tests for terminal_feed.quotes.cache

Pure unit tests driven by a fake clock.
"""
import pytest

from terminal_feed.models import Quote
from terminal_feed.quotes.cache import QuoteCache

BTC = Quote(symbol="BTC", name="Bitcoin", price=100_000.0, change=10.0, change_percent=0.01)
ETH = Quote(symbol="ETH", name="Ethereum", price=3_000.0, change=-5.0, change_percent=-0.17)


def test_empty_cache_has_no_snapshot(clock):
    cache = QuoteCache(900, clock=clock)

    assert cache.get_fresh() is None
    assert cache.get_any() is None
    assert cache.age_seconds() is None
    assert cache.is_fresh() is False


def test_snapshot_fresh_strictly_before_ttl(clock):
    cache = QuoteCache(900, clock=clock)
    cache.store((BTC,))

    clock.advance(899.9)
    assert cache.is_fresh()
    assert cache.get_fresh().quotes == (BTC,)


def test_snapshot_expires_at_ttl_but_stays_available(clock):
    cache = QuoteCache(900, clock=clock)
    cache.store((BTC,))

    clock.advance(900)

    assert cache.get_fresh() is None
    assert cache.get_any().quotes == (BTC,)


def test_store_replaces_wholesale(clock):
    cache = QuoteCache(900, clock=clock)
    cache.store((BTC, ETH))
    clock.advance(1000)

    cache.store((ETH,))

    snapshot = cache.get_fresh()
    assert snapshot.quotes == (ETH,)
    assert snapshot.captured_at == clock.now
    assert cache.age_seconds() == 0


def test_store_rejects_empty_set(clock):
    cache = QuoteCache(900, clock=clock)
    with pytest.raises(ValueError, match="empty"):
        cache.store(())


def test_ttl_minutes():
    assert QuoteCache(900).ttl_minutes == 15


def test_non_positive_ttl_rejected():
    with pytest.raises(ValueError, match="positive"):
        QuoteCache(0)
