"""
Market Data Provider Protocol

The two aggregators depend only on this protocol. FinnhubClient satisfies it
in production; tests substitute an AsyncMock or a local HTTP server.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MarketDataProvider(Protocol):
    """Read-only access to quotes and news from an upstream provider."""

    async def get_quote(self, symbol: str) -> dict[str, Any]:
        """
        Return the raw quote object for a provider-namespaced symbol.

        Raises UpstreamError on any failure.
        """
        ...

    async def get_category_news(self, category: str) -> list[dict[str, Any]]:
        """Return raw news entries for a category ("general", "crypto")."""
        ...

    async def get_company_news(
        self, symbol: str, date_from: date, date_to: date
    ) -> list[dict[str, Any]]:
        """Return raw news entries for one company within [date_from, date_to]."""
        ...
