"""
Quote Cache

Single-snapshot, time-boxed cache for the quote aggregator. Holds at most one
set of quotes plus the moment it was captured. A snapshot is fresh for
``ttl_seconds`` after capture; once expired it is still kept so it can be
served as a stale fallback. The cache is never cleared, only replaced.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from terminal_feed.models import Quote

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheSnapshot:
    """Quotes from one successful refresh."""

    quotes: tuple[Quote, ...]
    captured_at: float


class QuoteCache:
    """Last-known-good quote snapshot with an injected clock."""

    def __init__(
        self,
        ttl_seconds: float = 15 * 60,
        *,
        clock: Clock = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._snapshot: Optional[CacheSnapshot] = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    @property
    def ttl_minutes(self) -> int:
        return int(self._ttl_seconds // 60)

    def now(self) -> float:
        return self._clock()

    def store(self, quotes: tuple[Quote, ...]) -> CacheSnapshot:
        """Replace the snapshot wholesale with ``quotes`` captured now."""
        if not quotes:
            raise ValueError("refusing to cache an empty quote set")
        self._snapshot = CacheSnapshot(quotes=tuple(quotes), captured_at=self._clock())
        return self._snapshot

    def age_seconds(self, snapshot: Optional[CacheSnapshot] = None) -> Optional[float]:
        snapshot = snapshot or self._snapshot
        if snapshot is None:
            return None
        return max(0.0, self._clock() - snapshot.captured_at)

    def is_fresh(self) -> bool:
        age = self.age_seconds()
        return age is not None and age < self._ttl_seconds

    def get_fresh(self) -> Optional[CacheSnapshot]:
        """The snapshot if it is younger than the TTL, else None."""
        if self.is_fresh():
            return self._snapshot
        return None

    def get_any(self) -> Optional[CacheSnapshot]:
        """The snapshot regardless of age (stale fallback)."""
        return self._snapshot
