"""
Market Data Models

Quote snapshots, news headlines and the response envelopes returned by the
aggregators. All models are frozen dataclasses; a new fetch produces new
objects rather than mutating old ones.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

# Headlines sharing this many leading characters (case-insensitive) are duplicates
DEDUPE_PREFIX_LENGTH = 50


class DataSource(str, Enum):
    """Where a response payload came from."""

    LIVE = "live"
    FALLBACK = "fallback"


class NewsCategory(str, Enum):
    """Headline categories assigned by the aggregator or at display time."""

    GENERAL = "general"
    COMPANY = "company"
    CRYPTO = "crypto"
    TECHNOLOGY = "technology"
    ECONOMY = "economy"
    MACRO = "macro"
    BULLISH = "bullish"
    BEARISH = "bearish"
    EARNINGS = "earnings"
    MARKETS = "markets"


@dataclass(frozen=True)
class Quote:
    """One price snapshot for an instrument."""

    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    high: Optional[float] = None
    low: Optional[float] = None
    open: Optional[float] = None
    prev_close: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.symbol:
            raise ValueError("symbol must be non-empty string")

    @property
    def is_valid(self) -> bool:
        """Zero or negative prices are upstream placeholders, not readings."""
        return self.price > 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "change": self.change,
            "changePercent": self.change_percent,
        }
        for key, value in (
            ("high", self.high),
            ("low", self.low),
            ("open", self.open),
            ("prevClose", self.prev_close),
        ):
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class NewsItem:
    """One headline, normalized from any of the upstream news queries."""

    headline: str
    category: str = NewsCategory.GENERAL.value
    related: str = ""
    source: str = ""
    url: str = ""
    image: str = ""
    published_at: int = 0  # epoch seconds, 0 when upstream omits it

    @property
    def has_ticker(self) -> bool:
        return bool(self.related)

    @property
    def dedupe_key(self) -> str:
        return self.headline.lower()[:DEDUPE_PREFIX_LENGTH]

    def to_dict(self) -> dict[str, Any]:
        return {
            "headline": self.headline,
            "category": self.category,
            "related": self.related,
            "source": self.source,
            "url": self.url,
            "image": self.image,
            "datetime": self.published_at,
        }


@dataclass(frozen=True)
class QuotesResult:
    """Response of the quote aggregator."""

    quotes: tuple[Quote, ...]
    source: DataSource
    cached: bool
    cache_age_minutes: Optional[int] = None
    next_refresh_minutes: Optional[int] = None
    stale: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "quotes": [q.to_dict() for q in self.quotes],
            "source": self.source.value,
            "cached": self.cached,
        }
        if self.cache_age_minutes is not None:
            data["cacheAge"] = f"{self.cache_age_minutes}m"
        if self.next_refresh_minutes is not None:
            data["nextRefresh"] = f"{self.next_refresh_minutes}m"
        if self.stale:
            data["stale"] = True
        return data


@dataclass(frozen=True)
class NewsResult:
    """Response of the news aggregator."""

    headlines: tuple[NewsItem, ...]
    source: DataSource
    message: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "headlines": [h.to_dict() for h in self.headlines],
            "source": self.source.value,
        }
        if self.message is not None:
            data["message"] = self.message
        if self.error is not None:
            data["error"] = self.error
        return data
