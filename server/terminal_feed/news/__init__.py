"""
News Aggregation

Re-exports:
    - NewsAggregator: concurrent multi-query merge with fallback
    - CryptoTickerTagger: ordered whole-word crypto ticker matcher
    - dedupe / prioritize: pure merge helpers
"""
from .aggregator import KEY_TICKERS, NewsAggregator, NewsAggregatorStats
from .pipeline import RESULT_LIMIT, TICKER_QUOTA, dedupe, prioritize, sort_by_recency
from .tagger import DEFAULT_CRYPTO_PATTERNS, CryptoTickerTagger, TickerPattern

__all__ = [
    "DEFAULT_CRYPTO_PATTERNS",
    "KEY_TICKERS",
    "RESULT_LIMIT",
    "TICKER_QUOTA",
    "CryptoTickerTagger",
    "NewsAggregator",
    "NewsAggregatorStats",
    "TickerPattern",
    "dedupe",
    "prioritize",
    "sort_by_recency",
]
