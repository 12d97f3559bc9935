"""
Finnhub REST Client

Thin async wrapper over the three Finnhub endpoints the feed needs:
/quote, /news and /company-news. Every failure mode (non-2xx status,
timeout, transport error, undecodable body) surfaces as UpstreamError so
callers have exactly one exception type to isolate.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Optional

import aiohttp

from terminal_feed.core.types import UpstreamError

logger = logging.getLogger(__name__)

SERVICE = "finnhub"

# Finnhub symbols for the tracked crypto instruments (Binance USDT pairs)
CRYPTO_SYMBOLS: dict[str, str] = {
    "BTC": "BINANCE:BTCUSDT",
    "ETH": "BINANCE:ETHUSDT",
    "SOL": "BINANCE:SOLUSDT",
    "XRP": "BINANCE:XRPUSDT",
}

CRYPTO_NAMES: dict[str, str] = {
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "SOL": "Solana",
    "XRP": "XRP",
}


class FinnhubClient:
    """
    Async client for the Finnhub REST API.

    Owns its aiohttp session unless one is injected. Use as an async context
    manager or call close() explicitly.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://finnhub.io/api/v1",
        timeout_seconds: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: Finnhub access token, sent as the ``token`` query param
            base_url: API root, overridable for tests
            timeout_seconds: Total timeout applied to every request
            session: Optional externally managed session
        """
        if not api_key:
            raise ValueError("api_key must be non-empty string")

        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

        # Stats
        self._requests_made = 0
        self._requests_failed = 0

    async def __aenter__(self) -> FinnhubClient:
        self._ensure_session()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            logger.info("Finnhub client closed")
        self._session = None

    # ── Endpoints ─────────────────────────────────────────────────────────────

    async def get_quote(self, symbol: str) -> dict[str, Any]:
        """Fetch the current quote for a Finnhub symbol (e.g. BINANCE:BTCUSDT)."""
        data = await self._get("/quote", {"symbol": symbol})
        if not isinstance(data, dict):
            raise UpstreamError(
                "Unexpected quote payload",
                service=SERVICE,
                context={"symbol": symbol, "type": type(data).__name__},
            )
        return data

    async def get_category_news(self, category: str) -> list[dict[str, Any]]:
        """Fetch market news for a category ("general", "crypto", ...)."""
        data = await self._get("/news", {"category": category})
        return self._as_list(data, endpoint="/news")

    async def get_company_news(
        self, symbol: str, date_from: date, date_to: date
    ) -> list[dict[str, Any]]:
        """Fetch company news for a ticker within an inclusive date range."""
        data = await self._get(
            "/company-news",
            {
                "symbol": symbol,
                "from": date_from.isoformat(),
                "to": date_to.isoformat(),
            },
        )
        return self._as_list(data, endpoint="/company-news")

    # ── Internals ─────────────────────────────────────────────────────────────

    @staticmethod
    def _as_list(data: Any, *, endpoint: str) -> list[dict[str, Any]]:
        if not isinstance(data, list):
            raise UpstreamError(
                "Unexpected news payload",
                service=SERVICE,
                context={"endpoint": endpoint, "type": type(data).__name__},
            )
        return data

    async def _get(self, path: str, params: dict[str, str]) -> Any:
        """Issue one GET and decode the JSON body. Never logs the token."""
        session = self._ensure_session()
        url = f"{self._base_url}{path}"
        self._requests_made += 1

        try:
            async with session.get(
                url,
                params={**params, "token": self._api_key},
                timeout=self._timeout,
            ) as response:
                if response.status < 200 or response.status >= 300:
                    raise UpstreamError(
                        f"Finnhub API error: {response.status}",
                        service=SERVICE,
                        status=response.status,
                        context={"path": path, **params},
                    )
                return await response.json(content_type=None)

        except UpstreamError:
            self._requests_failed += 1
            raise

        except asyncio.TimeoutError as e:
            self._requests_failed += 1
            raise UpstreamError(
                "Finnhub request timed out",
                service=SERVICE,
                context={"path": path, **params},
            ) from e

        except (aiohttp.ClientError, ValueError) as e:
            self._requests_failed += 1
            raise UpstreamError(
                f"Finnhub request failed: {e}",
                service=SERVICE,
                context={"path": path, **params},
            ) from e

    def get_stats(self) -> dict[str, Any]:
        """Get request statistics."""
        return {
            "requests_made": self._requests_made,
            "requests_failed": self._requests_failed,
        }
