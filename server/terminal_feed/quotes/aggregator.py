"""
Quote Aggregator

Fetches current prices for the tracked crypto instruments and fronts them
with a 15 minute snapshot cache.

Resolution order for each call:
    1. no credential            -> static fallback quotes
    2. fresh snapshot           -> cached quotes
    3. concurrent refresh       -> live quotes (snapshot replaced)
       zero valid quotes        -> static fallback (snapshot untouched)
       refresh blew up          -> stale snapshot if any, else static fallback
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from terminal_feed.core.types import UpstreamError, ValidationError
from terminal_feed.fallback import FALLBACK_QUOTES
from terminal_feed.finnhub_client import (
    CRYPTO_NAMES,
    CRYPTO_SYMBOLS,
    MarketDataProvider,
    normalize_quote,
)
from terminal_feed.models import DataSource, Quote, QuotesResult
from terminal_feed.quotes.cache import CacheSnapshot, QuoteCache

logger = logging.getLogger(__name__)


@dataclass
class QuoteAggregatorStats:
    """Statistics for the quote aggregator."""

    requests: int = 0
    cache_hits: int = 0
    refreshes: int = 0
    instrument_failures: int = 0
    fallbacks_served: int = 0
    stale_served: int = 0


class QuoteAggregator:
    """
    Quote retrieval with a time-boxed cache and layered fallbacks.

    Refreshes are single-flight: requests that arrive while a refresh is in
    progress wait for it and are then served the snapshot it wrote.
    """

    def __init__(
        self,
        provider: Optional[MarketDataProvider],
        cache: QuoteCache,
        *,
        symbols: Mapping[str, str] = CRYPTO_SYMBOLS,
        names: Mapping[str, str] = CRYPTO_NAMES,
    ) -> None:
        """
        Initialize the aggregator.

        Args:
            provider: Upstream provider, or None when no credential is configured
            cache: Snapshot cache owned by this aggregator
            symbols: Display ticker -> provider symbol for each tracked instrument
            names: Display ticker -> human readable name
        """
        self._provider = provider
        self._cache = cache
        self._symbols = dict(symbols)
        self._names = dict(names)
        self._refresh_lock = asyncio.Lock()
        self._stats = QuoteAggregatorStats()

    @property
    def stats(self) -> QuoteAggregatorStats:
        return self._stats

    @property
    def cache(self) -> QuoteCache:
        return self._cache

    async def get_quotes(self) -> QuotesResult:
        """Return the current quote set. Never raises."""
        self._stats.requests += 1

        if self._provider is None:
            return self._fallback()

        snapshot = self._cache.get_fresh()
        if snapshot is not None:
            return self._from_cache(snapshot)

        async with self._refresh_lock:
            # Another request may have refreshed while this one waited
            snapshot = self._cache.get_fresh()
            if snapshot is not None:
                return self._from_cache(snapshot)

            return await self._refresh()

    async def _refresh(self) -> QuotesResult:
        self._stats.refreshes += 1

        try:
            quotes = await self._fetch_all()
        except Exception as e:
            logger.error(
                "Quote refresh failed",
                extra={"error": str(e)},
                exc_info=True,
            )
            stale = self._cache.get_any()
            if stale is not None:
                self._stats.stale_served += 1
                return QuotesResult(
                    quotes=stale.quotes,
                    source=DataSource.LIVE,
                    cached=True,
                    stale=True,
                )
            return self._fallback()

        if not quotes:
            logger.warning(
                "No valid quotes from upstream, serving fallback",
                extra={"instruments": len(self._symbols)},
            )
            return self._fallback()

        self._cache.store(quotes)
        logger.info(
            f"Quote cache refreshed with {len(quotes)} quotes",
            extra={"symbols": [q.symbol for q in quotes]},
        )
        return QuotesResult(
            quotes=quotes,
            source=DataSource.LIVE,
            cached=False,
            cache_age_minutes=0,
            next_refresh_minutes=self._cache.ttl_minutes,
        )

    async def _fetch_all(self) -> tuple[Quote, ...]:
        """
        Fetch every tracked instrument concurrently.

        Upstream and validation failures are isolated per instrument. Any other
        exception escapes after all siblings have settled.
        """
        tickers = list(self._symbols)
        results = await asyncio.gather(
            *[self._fetch_one(ticker) for ticker in tickers],
            return_exceptions=True,
        )

        quotes: list[Quote] = []
        for ticker, result in zip(tickers, results):
            if isinstance(result, BaseException):
                raise result
            if result is None:
                continue
            if not result.is_valid:
                logger.warning(
                    f"Discarding non-positive price for {ticker}",
                    extra={"symbol": ticker, "price": result.price},
                )
                continue
            quotes.append(result)

        return tuple(quotes)

    async def _fetch_one(self, ticker: str) -> Optional[Quote]:
        """Fetch one instrument; None when the upstream call or payload is bad."""
        provider_symbol = self._symbols[ticker]
        try:
            payload = await self._provider.get_quote(provider_symbol)
            return normalize_quote(ticker, self._names.get(ticker, ticker), payload)
        except (UpstreamError, ValidationError) as e:
            self._stats.instrument_failures += 1
            logger.warning(
                f"Quote fetch failed for {ticker}",
                extra={"symbol": ticker, "error": str(e)},
            )
            return None

    def _from_cache(self, snapshot: CacheSnapshot) -> QuotesResult:
        self._stats.cache_hits += 1
        age_seconds = self._cache.age_seconds(snapshot) or 0.0
        age_minutes = int(age_seconds / 60 + 0.5)
        logger.debug("Serving cached quotes", extra={"cache_age_minutes": age_minutes})
        return QuotesResult(
            quotes=snapshot.quotes,
            source=DataSource.LIVE,
            cached=True,
            cache_age_minutes=age_minutes,
            next_refresh_minutes=max(0, self._cache.ttl_minutes - age_minutes),
        )

    def _fallback(self) -> QuotesResult:
        self._stats.fallbacks_served += 1
        return QuotesResult(
            quotes=FALLBACK_QUOTES,
            source=DataSource.FALLBACK,
            cached=False,
        )
