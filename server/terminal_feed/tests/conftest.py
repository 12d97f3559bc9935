"""
Shared fixtures for terminal_feed tests.

Upstream I/O is replaced with AsyncMock providers or an in-process aiohttp
server; time is a manually advanced clock.
"""
from __future__ import annotations

import pytest


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
