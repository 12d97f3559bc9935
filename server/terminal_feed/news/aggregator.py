"""
News Aggregator

Merges general, crypto and per-company Finnhub news into one short,
ticker-first headline list.

Pipeline per request:
    fan-out  general | crypto | company news x N   (concurrent)
    merge    crypto (top 6, ticker guessed) -> company (top 2 each) -> general (top 10)
    dedupe   first 50 lowercase headline chars
    rank     up to 5 ticker headlines, then general headlines, 8 total

The general query is critical: if it fails the request degrades to the static
fallback list. Crypto and company queries are best-effort.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Optional, Sequence

from terminal_feed.config import MAX_COMPANY_NEWS_TICKERS
from terminal_feed.core.types import UpstreamError
from terminal_feed.fallback import FALLBACK_ERROR, FALLBACK_MESSAGE, FALLBACK_NEWS
from terminal_feed.finnhub_client import MarketDataProvider, normalize_news_item
from terminal_feed.models import DataSource, NewsCategory, NewsItem, NewsResult
from terminal_feed.news.pipeline import dedupe, prioritize
from terminal_feed.news.tagger import CryptoTickerTagger

logger = logging.getLogger(__name__)

# Company news is fetched for a prefix of this list
KEY_TICKERS: tuple[str, ...] = (
    "NVDA", "AAPL", "TSLA", "MSFT", "META",
    "AMZN", "GOOGL", "AMD", "NFLX", "COIN",
)

CRYPTO_NEWS_LIMIT = 6
GENERAL_NEWS_LIMIT = 10
COMPANY_NEWS_PER_TICKER = 2


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass
class NewsAggregatorStats:
    """Statistics for the news aggregator."""

    requests: int = 0
    live_served: int = 0
    fallbacks_served: int = 0
    failures: int = 0
    crypto_failures: int = 0
    company_failures: int = 0


class NewsAggregator:
    """Concurrent multi-query news merge with static fallback."""

    def __init__(
        self,
        provider: Optional[MarketDataProvider],
        *,
        tagger: Optional[CryptoTickerTagger] = None,
        key_tickers: Sequence[str] = KEY_TICKERS,
        company_tickers: int = MAX_COMPANY_NEWS_TICKERS,
        company_news_days: int = 3,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        """
        Initialize the aggregator.

        Args:
            provider: Upstream provider, or None when no credential is configured
            tagger: Crypto headline tagger (defaults to the standard pattern order)
            key_tickers: Priority-ordered tickers eligible for company news
            company_tickers: How many of ``key_tickers`` to query per request,
                capped at MAX_COMPANY_NEWS_TICKERS
            company_news_days: Trailing window for company news, in days
            today: Clock for the company news date window
        """
        self._provider = provider
        self._tagger = tagger or CryptoTickerTagger()
        limit = max(0, min(company_tickers, MAX_COMPANY_NEWS_TICKERS))
        self._company_tickers = tuple(key_tickers[:limit])
        self._company_news_days = max(0, company_news_days)
        self._today = today
        self._stats = NewsAggregatorStats()

    @property
    def stats(self) -> NewsAggregatorStats:
        return self._stats

    @property
    def company_tickers(self) -> tuple[str, ...]:
        return self._company_tickers

    async def get_news(self) -> NewsResult:
        """Return the aggregated headline list. Never raises."""
        self._stats.requests += 1

        if self._provider is None:
            self._stats.fallbacks_served += 1
            return NewsResult(
                headlines=FALLBACK_NEWS,
                source=DataSource.FALLBACK,
                message=FALLBACK_MESSAGE,
            )

        try:
            headlines = await self._aggregate()
        except Exception as e:
            self._stats.failures += 1
            self._stats.fallbacks_served += 1
            logger.error(
                "News aggregation failed",
                extra={"error": str(e)},
                exc_info=not isinstance(e, UpstreamError),
            )
            return NewsResult(
                headlines=FALLBACK_NEWS,
                source=DataSource.FALLBACK,
                error=FALLBACK_ERROR,
            )

        self._stats.live_served += 1
        return NewsResult(headlines=tuple(headlines), source=DataSource.LIVE)

    async def _aggregate(self) -> list[NewsItem]:
        date_to = self._today()
        date_from = date_to - timedelta(days=self._company_news_days)

        general, crypto, *company = await asyncio.gather(
            self._provider.get_category_news(NewsCategory.GENERAL.value),
            self._fetch_crypto_news(),
            *[
                self._fetch_company_news(ticker, date_from, date_to)
                for ticker in self._company_tickers
            ],
            return_exceptions=True,
        )

        for result in (general, crypto, *company):
            if isinstance(result, BaseException):
                raise result

        candidates: list[NewsItem] = []
        candidates.extend(self._tag_crypto(crypto[:CRYPTO_NEWS_LIMIT]))
        for items in company:
            candidates.extend(items)
        for raw in general[:GENERAL_NEWS_LIMIT]:
            item = normalize_news_item(raw)
            if item is not None:
                candidates.append(item)

        unique = dedupe(candidates)
        result = prioritize(unique)

        logger.info(
            f"Aggregated {len(result)} headlines",
            extra={
                "candidates": len(candidates),
                "unique": len(unique),
                "with_ticker": sum(1 for i in result if i.has_ticker),
            },
        )
        return result

    def _tag_crypto(self, raw_items: list[dict[str, Any]]) -> list[NewsItem]:
        items: list[NewsItem] = []
        for raw in raw_items:
            headline = str(raw.get("headline") or "") if isinstance(raw, dict) else ""
            item = normalize_news_item(
                raw,
                category=NewsCategory.CRYPTO.value,
                related=self._tagger.tag(headline),
            )
            if item is not None:
                items.append(item)
        return items

    async def _fetch_crypto_news(self) -> list[dict[str, Any]]:
        """Crypto news is best-effort: a failed query counts as no news."""
        try:
            return await self._provider.get_category_news(NewsCategory.CRYPTO.value)
        except UpstreamError as e:
            self._stats.crypto_failures += 1
            logger.warning(
                "Crypto news fetch failed",
                extra={"error": str(e), "status": e.status},
            )
            return []

    async def _fetch_company_news(
        self, ticker: str, date_from: date, date_to: date
    ) -> list[NewsItem]:
        """Top headlines for one ticker, each tagged with that ticker."""
        try:
            raw_items = await self._provider.get_company_news(ticker, date_from, date_to)
        except UpstreamError as e:
            self._stats.company_failures += 1
            logger.warning(
                f"Company news fetch failed for {ticker}",
                extra={"symbol": ticker, "error": str(e)},
            )
            return []

        items: list[NewsItem] = []
        for raw in raw_items[:COMPANY_NEWS_PER_TICKER]:
            item = normalize_news_item(
                raw,
                related=ticker,
                default_category=NewsCategory.COMPANY.value,
            )
            if item is not None:
                items.append(item)
        return items
