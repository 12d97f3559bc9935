"""
HTTP Server for the Terminal Client

Serves the quote and news aggregators over JSON. Data endpoints always
answer 200: degraded states are described in the payload (source, stale,
error, message), never by an error status.

Routes:
    GET /api/crypto   quote aggregator
    GET /api/news     news aggregator
    GET /api/feed     both, merged into the rotating display queue
    GET /health       liveness, credential presence and counters
"""
from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from aiohttp import web

from terminal_feed.config import Settings
from terminal_feed.display import build_feed
from terminal_feed.finnhub_client import FinnhubClient, MarketDataProvider
from terminal_feed.news import NewsAggregator
from terminal_feed.quotes import QuoteAggregator, QuoteCache
from terminal_feed.quotes.cache import Clock

logger = logging.getLogger(__name__)


@dataclass
class ServerStats:
    """HTTP server statistics."""

    quote_requests: int
    news_requests: int
    feed_requests: int
    start_time: datetime


class TerminalFeedServer:
    """
    aiohttp application wrapping one quote aggregator and one news aggregator.

    Both aggregators share a single upstream client. When no credential is
    configured and no provider is injected, both run in fallback mode.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        provider: Optional[MarketDataProvider] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._settings = settings
        self._owned_client: Optional[FinnhubClient] = None

        if provider is None and settings.finnhub.enabled:
            self._owned_client = FinnhubClient(
                settings.finnhub.api_key,
                base_url=settings.finnhub.base_url,
                timeout_seconds=settings.finnhub.request_timeout_seconds,
            )
            provider = self._owned_client

        self._provider = provider

        cache_kwargs: dict[str, Any] = {}
        if clock is not None:
            cache_kwargs["clock"] = clock
        self._quotes = QuoteAggregator(
            provider,
            QuoteCache(settings.cache.quote_ttl_seconds, **cache_kwargs),
        )
        self._news = NewsAggregator(
            provider,
            company_tickers=settings.news.company_news_tickers,
            company_news_days=settings.news.company_news_days,
        )
        self._rng = rng or random.Random()

        self._runner: Optional[web.AppRunner] = None
        self._feed_requests = 0
        self._start_time = datetime.now(timezone.utc)

        self._app = web.Application()
        self._app.router.add_get("/api/crypto", self._handle_quotes)
        self._app.router.add_get("/api/news", self._handle_news)
        self._app.router.add_get("/api/feed", self._handle_feed)
        self._app.router.add_get("/health", self._handle_health)
        self._app.on_cleanup.append(self._on_cleanup)

    @property
    def app(self) -> web.Application:
        return self._app

    @property
    def quotes(self) -> QuoteAggregator:
        return self._quotes

    @property
    def news(self) -> NewsAggregator:
        return self._news

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    async def start(self) -> None:
        """Start listening on the configured host and port."""
        host = self._settings.http_server.host
        port = self._settings.http_server.port

        self._runner = web.AppRunner(self._app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, host, port)
        await site.start()

        mode = "live" if self._provider is not None else "fallback"
        logger.info(f"HTTP server started on http://{host}:{port} ({mode} mode)")

    async def stop(self) -> None:
        """Stop the server and release the upstream client."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("HTTP server stopped")

    async def _on_cleanup(self, _app: web.Application) -> None:
        if self._owned_client is not None:
            await self._owned_client.close()

    # ── Handlers ──────────────────────────────────────────────────────────────

    async def _handle_quotes(self, request: web.Request) -> web.Response:
        result = await self._quotes.get_quotes()
        return web.json_response(result.to_dict())

    async def _handle_news(self, request: web.Request) -> web.Response:
        result = await self._news.get_news()
        return web.json_response(result.to_dict())

    async def _handle_feed(self, request: web.Request) -> web.Response:
        self._feed_requests += 1
        news, quotes = await asyncio.gather(
            self._news.get_news(),
            self._quotes.get_quotes(),
        )
        feed = build_feed(news, quotes, rng=self._rng)
        return web.json_response(feed.to_dict())

    async def _handle_health(self, request: web.Request) -> web.Response:
        cache = self._quotes.cache
        age = cache.age_seconds()
        return web.json_response(
            {
                "status": "ok",
                "live": self._provider is not None,
                "quoteCache": {
                    "populated": age is not None,
                    "fresh": cache.is_fresh(),
                    "ageSeconds": round(age, 1) if age is not None else None,
                },
                "stats": {
                    "quotes": asdict(self._quotes.stats),
                    "news": asdict(self._news.stats),
                    "feedRequests": self._feed_requests,
                },
            }
        )

    def get_stats(self) -> ServerStats:
        """Get current server statistics."""
        return ServerStats(
            quote_requests=self._quotes.stats.requests,
            news_requests=self._news.stats.requests,
            feed_requests=self._feed_requests,
            start_time=self._start_time,
        )


def create_app(
    settings: Settings,
    *,
    provider: Optional[MarketDataProvider] = None,
    clock: Optional[Clock] = None,
    rng: Optional[random.Random] = None,
) -> web.Application:
    """Build the aiohttp application (for aiohttp runners and tests)."""
    return TerminalFeedServer(settings, provider=provider, clock=clock, rng=rng).app
