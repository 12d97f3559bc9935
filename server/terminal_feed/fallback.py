"""
Static Fallback Payloads

Served when no Finnhub credential is configured, and whenever live data is
unavailable and no cached snapshot exists.
"""
from __future__ import annotations

from terminal_feed.models import NewsCategory, NewsItem, Quote

FALLBACK_MESSAGE = "Set FINNHUB_API_KEY in .env for live news"
FALLBACK_ERROR = "Failed to fetch live news"

FALLBACK_QUOTES: tuple[Quote, ...] = (
    Quote(symbol="BTC", name="Bitcoin", price=94521.00, change=2340, change_percent=2.54),
    Quote(symbol="ETH", name="Ethereum", price=3245.50, change=-45.20, change_percent=-1.37),
    Quote(symbol="SOL", name="Solana", price=187.25, change=8.50, change_percent=4.75),
    Quote(symbol="XRP", name="XRP", price=2.34, change=0.12, change_percent=5.41),
)

_TECH = NewsCategory.TECHNOLOGY.value
_CRYPTO = NewsCategory.CRYPTO.value

FALLBACK_NEWS: tuple[NewsItem, ...] = (
    NewsItem("NVDA surges 8% as AI chip demand hits all-time high", _TECH, "NVDA"),
    NewsItem(
        "Federal Reserve signals potential rate cut amid cooling inflation",
        NewsCategory.ECONOMY.value,
        "",
    ),
    NewsItem("BTC breaks through $95,000 resistance level on ETF inflows", _CRYPTO, "BTC"),
    NewsItem("AAPL announces record $110B stock buyback program", _TECH, "AAPL"),
    NewsItem("AMZN AWS revenue beats Wall Street estimates by 15%", _TECH, "AMZN"),
    NewsItem("TSLA shares drop 5% on Q4 delivery miss", _TECH, "TSLA"),
    NewsItem("ETH staking yields surge following network upgrade", _CRYPTO, "ETH"),
    NewsItem("MSFT Azure growth accelerates to 31% year-over-year", _TECH, "MSFT"),
)
