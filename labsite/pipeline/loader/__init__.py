"""Feed loading: configuration, HTTP client and reloadable loader.

Modules exported
----------------
FeedConfig
    Explicit configuration (feed URLs, timeout, request pacing, site text).
FeedClient, FetchResponse
    aiohttp transport returning feed text or raising FeedTransportError.
FeedLoader, LoadResult, FeedDiagnostics
    All-or-nothing loader with last-requester-wins reload semantics.
"""

from __future__ import annotations

from .client import FeedClient, FetchResponse
from .config import FeedConfig
from .loader import FeedDiagnostics, FeedLoader, Fetcher, LoadResult

__all__ = [
    "FeedClient",
    "FeedConfig",
    "FeedDiagnostics",
    "FeedLoader",
    "Fetcher",
    "FetchResponse",
    "LoadResult",
]
