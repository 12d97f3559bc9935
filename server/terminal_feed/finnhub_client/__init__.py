"""Finnhub client module."""
from terminal_feed.finnhub_client.client import (
    CRYPTO_NAMES,
    CRYPTO_SYMBOLS,
    FinnhubClient,
)
from terminal_feed.finnhub_client.interface import MarketDataProvider
from terminal_feed.finnhub_client.normalizer import (
    normalize_news_item,
    normalize_quote,
)

__all__ = [
    "CRYPTO_NAMES",
    "CRYPTO_SYMBOLS",
    "FinnhubClient",
    "MarketDataProvider",
    "normalize_news_item",
    "normalize_quote",
]
