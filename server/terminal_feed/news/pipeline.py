"""
News Merge Pipeline

Pure functions applied to the merged candidate list: deduplicate by headline
prefix, then rank ticker-bearing news ahead of general news and cap the total.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from terminal_feed.models import NewsItem

# Up to this many ticker-bearing headlines lead the result
TICKER_QUOTA = 5

# Total headlines returned per request
RESULT_LIMIT = 8


def dedupe(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Keep the first item per dedupe key, preserving merge order."""
    seen: set[str] = set()
    unique: list[NewsItem] = []
    for item in items:
        key = item.dedupe_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def sort_by_recency(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Newest first; items without a timestamp sort as oldest. Stable."""
    return sorted(items, key=lambda item: item.published_at or 0, reverse=True)


def prioritize(
    items: Sequence[NewsItem],
    *,
    ticker_quota: int = TICKER_QUOTA,
    limit: int = RESULT_LIMIT,
) -> list[NewsItem]:
    """
    Partition into ticker / no-ticker news, sort each by recency, and take
    up to ``ticker_quota`` ticker items followed by enough general items to
    reach ``limit``.
    """
    with_tickers = sort_by_recency(i for i in items if i.has_ticker)
    without_tickers = sort_by_recency(i for i in items if not i.has_ticker)

    leading = with_tickers[:ticker_quota]
    filler = without_tickers[: max(0, limit - len(leading))]
    return leading + filler
