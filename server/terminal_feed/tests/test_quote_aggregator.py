"""
Tests for terminal_feed.quotes.aggregator

The upstream provider is an AsyncMock; the cache runs on a fake clock.
"""
import asyncio
from unittest.mock import AsyncMock

import pytest

from terminal_feed.core.types import UpstreamError
from terminal_feed.fallback import FALLBACK_QUOTES
from terminal_feed.models import DataSource
from terminal_feed.quotes import QuoteAggregator, QuoteCache

TTL = 15 * 60

PAYLOADS = {
    "BINANCE:BTCUSDT": {"c": 101_250.5, "d": 1_250.5, "dp": 1.25, "h": 102_000, "l": 99_000, "o": 100_000, "pc": 100_000},
    "BINANCE:ETHUSDT": {"c": 3_400.0, "d": -20.0, "dp": -0.58, "h": 3_500, "l": 3_350, "o": 3_420, "pc": 3_420},
    "BINANCE:SOLUSDT": {"c": 190.1, "d": 2.6, "dp": 1.39, "h": 195, "l": 185, "o": 187.5, "pc": 187.5},
    "BINANCE:XRPUSDT": {"c": 2.41, "d": 0.07, "dp": 2.99, "h": 2.5, "l": 2.3, "o": 2.34, "pc": 2.34},
}


def _provider(payloads=None, failing=()):
    """AsyncMock provider serving ``payloads``; symbols in ``failing`` return HTTP 500."""
    payloads = PAYLOADS if payloads is None else payloads

    async def get_quote(symbol):
        await asyncio.sleep(0)
        if symbol in failing:
            raise UpstreamError("Finnhub API error: 500", service="finnhub", status=500)
        return payloads[symbol]

    provider = AsyncMock()
    provider.get_quote = AsyncMock(side_effect=get_quote)
    return provider


@pytest.fixture
def cache(clock):
    return QuoteCache(TTL, clock=clock)


# ── no credential ────────────────────────────────────────────────────────────

async def test_no_provider_always_returns_fallback(cache):
    aggregator = QuoteAggregator(None, cache)

    for _ in range(3):
        result = await aggregator.get_quotes()
        assert result.source is DataSource.FALLBACK
        assert result.cached is False
        assert result.quotes == FALLBACK_QUOTES

    assert cache.get_any() is None
    assert result.to_dict() == {
        "quotes": [q.to_dict() for q in FALLBACK_QUOTES],
        "source": "fallback",
        "cached": False,
    }


# ── live fetch and cache freshness ───────────────────────────────────────────

async def test_live_fetch_returns_quotes_and_populates_cache(cache):
    provider = _provider()
    aggregator = QuoteAggregator(provider, cache)

    result = await aggregator.get_quotes()

    assert result.source is DataSource.LIVE
    assert result.cached is False
    assert [q.symbol for q in result.quotes] == ["BTC", "ETH", "SOL", "XRP"]
    assert result.quotes[0].price == 101_250.5
    assert result.quotes[0].name == "Bitcoin"
    assert result.to_dict()["cacheAge"] == "0m"
    assert result.to_dict()["nextRefresh"] == "15m"
    assert provider.get_quote.call_count == 4
    assert cache.get_fresh().quotes == result.quotes


async def test_fresh_cache_served_without_upstream_calls(cache, clock):
    provider = _provider()
    aggregator = QuoteAggregator(provider, cache)
    live = await aggregator.get_quotes()

    clock.advance(5 * 60)
    cached = await aggregator.get_quotes()

    assert cached.cached is True
    assert cached.source is DataSource.LIVE
    assert cached.quotes == live.quotes
    assert cached.cache_age_minutes == 5
    assert cached.next_refresh_minutes == 10
    assert provider.get_quote.call_count == 4


async def test_cache_served_just_before_ttl(cache, clock):
    provider = _provider()
    aggregator = QuoteAggregator(provider, cache)
    await aggregator.get_quotes()

    clock.advance(TTL - 1)
    result = await aggregator.get_quotes()

    assert result.cached is True
    assert provider.get_quote.call_count == 4


async def test_refresh_triggered_at_ttl(cache, clock):
    provider = _provider()
    aggregator = QuoteAggregator(provider, cache)
    await aggregator.get_quotes()

    clock.advance(TTL)
    result = await aggregator.get_quotes()

    assert result.cached is False
    assert result.source is DataSource.LIVE
    assert provider.get_quote.call_count == 8


async def test_next_refresh_never_negative_for_partial_minute_ttl(clock):
    cache = QuoteCache(170, clock=clock)
    aggregator = QuoteAggregator(_provider(), cache)
    await aggregator.get_quotes()

    clock.advance(165)
    result = await aggregator.get_quotes()

    assert result.cached is True
    assert result.cache_age_minutes == 3
    assert result.next_refresh_minutes == 0
    assert result.to_dict()["nextRefresh"] == "0m"


# ── per-instrument isolation ─────────────────────────────────────────────────

async def test_non_positive_prices_never_returned(cache):
    payloads = dict(PAYLOADS)
    payloads["BINANCE:ETHUSDT"] = {**PAYLOADS["BINANCE:ETHUSDT"], "c": 0}
    payloads["BINANCE:SOLUSDT"] = {**PAYLOADS["BINANCE:SOLUSDT"], "c": -3.5}
    aggregator = QuoteAggregator(_provider(payloads), cache)

    result = await aggregator.get_quotes()

    assert [q.symbol for q in result.quotes] == ["BTC", "XRP"]
    assert all(q.price > 0 for q in cache.get_any().quotes)


async def test_failed_instrument_is_omitted(cache):
    aggregator = QuoteAggregator(_provider(failing={"BINANCE:SOLUSDT"}), cache)

    result = await aggregator.get_quotes()

    assert result.source is DataSource.LIVE
    assert [q.symbol for q in result.quotes] == ["BTC", "ETH", "XRP"]
    assert aggregator.stats.instrument_failures == 1


async def test_malformed_payload_is_omitted(cache):
    payloads = dict(PAYLOADS)
    payloads["BINANCE:XRPUSDT"] = {"error": "symbol not supported"}
    aggregator = QuoteAggregator(_provider(payloads), cache)

    result = await aggregator.get_quotes()

    assert [q.symbol for q in result.quotes] == ["BTC", "ETH", "SOL"]


# ── degraded paths ───────────────────────────────────────────────────────────

async def test_all_instruments_failing_returns_fallback_and_keeps_cache(cache, clock):
    aggregator = QuoteAggregator(_provider(), cache)
    live = await aggregator.get_quotes()
    snapshot_before = cache.get_any()

    clock.advance(TTL + 60)
    aggregator._provider = _provider(failing=set(PAYLOADS))
    result = await aggregator.get_quotes()

    assert result.source is DataSource.FALLBACK
    assert result.cached is False
    assert result.quotes == FALLBACK_QUOTES
    assert cache.get_any() is snapshot_before
    assert cache.get_any().quotes == live.quotes


async def test_all_instruments_failing_without_cache_returns_fallback(cache):
    aggregator = QuoteAggregator(_provider(failing=set(PAYLOADS)), cache)

    result = await aggregator.get_quotes()

    assert result.source is DataSource.FALLBACK
    assert result.quotes == FALLBACK_QUOTES
    assert cache.get_any() is None


async def test_refresh_error_serves_stale_cache(cache, clock):
    aggregator = QuoteAggregator(_provider(), cache)
    live = await aggregator.get_quotes()

    clock.advance(3 * TTL)
    broken = AsyncMock()
    broken.get_quote = AsyncMock(side_effect=RuntimeError("event loop exploded"))
    aggregator._provider = broken

    result = await aggregator.get_quotes()

    assert result.cached is True
    assert result.stale is True
    assert result.quotes == live.quotes
    assert result.to_dict()["stale"] is True
    assert "cacheAge" not in result.to_dict()
    assert aggregator.stats.stale_served == 1


async def test_refresh_error_without_cache_returns_fallback(cache):
    broken = AsyncMock()
    broken.get_quote = AsyncMock(side_effect=RuntimeError("boom"))
    aggregator = QuoteAggregator(broken, cache)

    result = await aggregator.get_quotes()

    assert result.source is DataSource.FALLBACK
    assert result.quotes == FALLBACK_QUOTES
    assert result.stale is False


# ── concurrency ──────────────────────────────────────────────────────────────

async def test_concurrent_requests_share_one_refresh(cache):
    provider = _provider()
    aggregator = QuoteAggregator(provider, cache)

    results = await asyncio.gather(*[aggregator.get_quotes() for _ in range(5)])

    assert provider.get_quote.call_count == 4
    assert sum(1 for r in results if not r.cached) == 1
    assert all(r.quotes == results[0].quotes for r in results)
