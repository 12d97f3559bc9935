"""
Core Type Definitions and Exceptions

Service-specific exceptions. Every error carries a context dict so log
lines and degraded payloads can describe what failed without string parsing.
"""
from __future__ import annotations

from typing import Any, Optional


class TerminalFeedError(Exception):
    """Base exception for all terminal feed errors."""

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class ValidationError(TerminalFeedError):
    """Raised when upstream data cannot be normalized."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        ctx = context or {}
        if field:
            ctx["field"] = field
        if value is not None:
            ctx["value"] = repr(value)[:100]  # Truncate long values
        super().__init__(message, ctx)
        self.field = field
        self.value = value


class UpstreamError(TerminalFeedError):
    """Raised when a call to the market-data provider fails.

    Covers non-success statuses, timeouts and transport errors alike;
    ``status`` is None when no HTTP response was received.
    """

    def __init__(
        self,
        message: str,
        service: str,
        status: Optional[int] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        ctx = context or {}
        ctx["service"] = service
        if status is not None:
            ctx["status"] = status
        super().__init__(message, ctx)
        self.service = service
        self.status = status
