"""HTTP server module."""
from terminal_feed.http_server.server import ServerStats, TerminalFeedServer, create_app

__all__ = ["ServerStats", "TerminalFeedServer", "create_app"]
