"""Display-time headline refinement and rotating feed assembly."""
from .feed import FeedEntry, FeedResult, build_feed, news_entry, quote_entry
from .headlines import (
    KNOWN_TICKERS,
    HeadlineSegment,
    categorize,
    extract_tickers,
    google_finance_url,
    split_headline,
)

__all__ = [
    "KNOWN_TICKERS",
    "FeedEntry",
    "FeedResult",
    "HeadlineSegment",
    "build_feed",
    "categorize",
    "extract_tickers",
    "google_finance_url",
    "news_entry",
    "quote_entry",
    "split_headline",
]
