"""
Terminal Feed Data Models

Frozen dataclasses for quotes, headlines and aggregator responses.
"""
from terminal_feed.models.market import (
    DEDUPE_PREFIX_LENGTH,
    DataSource,
    NewsCategory,
    NewsItem,
    NewsResult,
    Quote,
    QuotesResult,
)

__all__ = [
    "DEDUPE_PREFIX_LENGTH",
    "DataSource",
    "NewsCategory",
    "NewsItem",
    "NewsResult",
    "Quote",
    "QuotesResult",
]
