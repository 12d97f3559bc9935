"""
Terminal Feed Core Utilities

Shared exception hierarchy.
"""
from terminal_feed.core.types import (
    TerminalFeedError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "TerminalFeedError",
    "UpstreamError",
    "ValidationError",
]
