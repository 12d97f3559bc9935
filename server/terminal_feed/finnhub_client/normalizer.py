"""
Finnhub Data Normalizer

Transforms raw Finnhub JSON payloads into internal Quote and NewsItem objects.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from terminal_feed.core.types import ValidationError
from terminal_feed.models import NewsCategory, NewsItem, Quote

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    """Coerce a JSON number to float, None when absent or non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_timestamp(value: Any) -> int:
    """Finnhub sends epoch seconds; anything unusable sorts as oldest."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def normalize_quote(symbol: str, name: str, payload: dict[str, Any]) -> Quote:
    """
    Map a Finnhub /quote payload to a Quote.

    Finnhub uses short keys: c (current), d (change), dp (change percent),
    h, l, o and pc (previous close).

    Raises:
        ValidationError: If the payload is not an object or has no usable price
    """
    if not isinstance(payload, dict):
        raise ValidationError(
            "Quote payload must be a JSON object",
            field="payload",
            value=payload,
            context={"symbol": symbol},
        )

    price = _to_float(payload.get("c"))
    if price is None:
        raise ValidationError(
            "Quote payload has no numeric price",
            field="c",
            value=payload.get("c"),
            context={"symbol": symbol},
        )

    return Quote(
        symbol=symbol,
        name=name,
        price=price,
        change=_to_float(payload.get("d")) or 0.0,
        change_percent=_to_float(payload.get("dp")) or 0.0,
        high=_to_float(payload.get("h")),
        low=_to_float(payload.get("l")),
        open=_to_float(payload.get("o")),
        prev_close=_to_float(payload.get("pc")),
    )


def normalize_news_item(
    raw: dict[str, Any],
    *,
    category: Optional[str] = None,
    related: Optional[str] = None,
    default_category: str = NewsCategory.GENERAL.value,
) -> Optional[NewsItem]:
    """
    Map one Finnhub news entry to a NewsItem.

    ``category`` and ``related`` override whatever upstream sent; otherwise the
    upstream values are used, falling back to ``default_category`` and "".
    Entries without a headline are dropped (returns None).
    """
    if not isinstance(raw, dict):
        return None

    # Kept verbatim; whitespace is part of the dedupe key
    headline = str(raw.get("headline") or "")
    if not headline.strip():
        return None

    if category is None:
        category = str(raw.get("category") or "") or default_category
    if related is None:
        related = str(raw.get("related") or "")

    return NewsItem(
        headline=headline,
        category=category,
        related=related,
        source=str(raw.get("source") or ""),
        url=str(raw.get("url") or ""),
        image=str(raw.get("image") or ""),
        published_at=_to_timestamp(raw.get("datetime")),
    )
