"""
Quote Aggregation

Re-exports:
    - QuoteAggregator: cached, fallback-aware quote retrieval
    - QuoteAggregatorStats: aggregator counters
    - QuoteCache: single-snapshot TTL cache
"""
from .aggregator import QuoteAggregator, QuoteAggregatorStats
from .cache import CacheSnapshot, QuoteCache

__all__ = [
    "CacheSnapshot",
    "QuoteAggregator",
    "QuoteAggregatorStats",
    "QuoteCache",
]
