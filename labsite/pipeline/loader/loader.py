"""Reloadable feed loader with an all-or-nothing error surface.

A :class:`FeedLoader` owns the current :class:`LoadResult` of one content
type. Each call to :meth:`FeedLoader.load` runs the full pipeline (fetch,
parse, normalize) and either succeeds with a complete record set or fails
with an empty set, an error message and whatever diagnostics were gathered
before the failure. There is no retry and no partial result.

Reload ordering is last-requester-wins: every load takes a generation
number, and a load that finishes after a newer one was started (or after
:meth:`FeedLoader.close`) is discarded instead of replacing the current
result.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic

import aiohttp

from labsite.config import HEADER_LINE_DIAGNOSTIC_LIMIT
from labsite.exceptions import AppError, ConfigurationError, FeedTransportError
from labsite.pipeline.feeds import normalize_feed, parse_feed_text
from labsite.pipeline.feeds.schema import FeedSchema, R

from .client import FeedClient, FetchResponse

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[FetchResponse]]


@dataclass(frozen=True)
class FeedDiagnostics:
    """What the loader learned about a feed, for display on failure.

    Attributes
    ----------
    url : str | None
        The URL requested.
    status : int | None
        HTTP status code, when a response was received.
    delimiter : str | None
        Printable label of the delimiter used.
    delimiter_reason : str | None
        Why that delimiter was chosen.
    header_line : str | None
        Raw header line, truncated for display.
    parsed_fields : tuple[str, ...]
        Normalized header labels found by the parser.
    """

    url: str | None = None
    status: int | None = None
    delimiter: str | None = None
    delimiter_reason: str | None = None
    header_line: str | None = None
    parsed_fields: tuple[str, ...] = ()

    def as_rows(self) -> list[tuple[str, str]]:
        """Return label/value pairs for tabular display."""
        return [
            ("URL", self.url or "(none)"),
            ("Status", str(self.status) if self.status is not None else "(none)"),
            ("Delimiter", self.delimiter or "(none)"),
            ("Reason", self.delimiter_reason or "(none)"),
            ("Header line", self.header_line or "(none)"),
            ("Parsed fields", ", ".join(self.parsed_fields) or "(none)"),
        ]


@dataclass(frozen=True)
class LoadResult(Generic[R]):
    """Outcome of one feed load.

    Attributes
    ----------
    records : tuple
        Normalized records; empty on failure.
    error : str | None
        Human-readable error message, ``None`` on success.
    diagnostics : FeedDiagnostics
        Diagnostics gathered up to the point of success or failure.
    """

    records: tuple[R, ...] = ()
    error: str | None = None
    diagnostics: FeedDiagnostics = field(default_factory=FeedDiagnostics)

    @property
    def ok(self) -> bool:
        return self.error is None


class FeedLoader(Generic[R]):
    """Load one content type's feed and keep the newest result.

    Parameters
    ----------
    schema : FeedSchema
        Schema of the content type to load.
    config : Any
        A :class:`~labsite.pipeline.loader.config.FeedConfig` (or any object
        with ``feed_url``, ``env_var`` and ``request_timeout``).
    fetch : Callable[[str], Awaitable[FetchResponse]] | None, optional
        Transport override, mainly for tests. Defaults to :class:`FeedClient`
        over ``session`` or a short-lived session per load.
    session : aiohttp.ClientSession | None, optional
        Shared session for the default transport.

    Examples
    --------
    >>> from labsite.pipeline.content import NEWS
    >>> from labsite.pipeline.loader import FeedConfig, FeedLoader
    >>> loader = FeedLoader(NEWS, FeedConfig())
    >>> # result = asyncio.run(loader.load()); result.error
    >>> # 'NEWS_SHEET_CSV_URL is not set.'
    """

    def __init__(
        self,
        schema: FeedSchema[R],
        config: Any,
        *,
        fetch: Fetcher | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.schema = schema
        self.config = config
        self._client: FeedClient | None = None
        self._session = session
        self._fetch: Fetcher = fetch or self._default_fetch
        self._generation = 0
        self._closed = False
        self._current: LoadResult[R] = LoadResult()

    @property
    def current(self) -> LoadResult[R]:
        """The result of the newest load that has completed."""
        return self._current

    @property
    def records(self) -> tuple[R, ...]:
        return self._current.records

    def close(self) -> None:
        """Stop accepting results; any in-flight load is discarded."""
        self._closed = True

    async def load(self) -> LoadResult[R]:
        """Run one load and apply it unless a newer load superseded it.

        Returns
        -------
        LoadResult
            The result of this load. It is stored as :attr:`current` only if
            no newer load was started and the loader is not closed.
        """
        self._generation += 1
        generation = self._generation
        result = await self._run()
        if self._closed or generation != self._generation:
            logger.debug(
                "%s: discarding result of load %d (current is %d)",
                self.schema.label,
                generation,
                self._generation,
            )
            return result
        self._current = result
        return result

    async def _default_fetch(self, url: str) -> FetchResponse:
        if self._client is None:
            self._client = FeedClient(self.config)
        if self._session is not None:
            return await self._client.fetch_text(self._session, url)
        async with aiohttp.ClientSession() as session:
            return await self._client.fetch_text(session, url)

    async def _run(self) -> LoadResult[R]:
        label = self.schema.label
        url = self.config.feed_url(self.schema.name)
        diag: dict[str, Any] = {"url": url}
        try:
            if not url:
                raise ConfigurationError(
                    f"{self.config.env_var(self.schema.name)} is not set.",
                    context={"feed": self.schema.name},
                )
            logger.info("Loading %s feed from %s", label, url)
            response = await self._fetch(url)
            diag["status"] = response.status
            parsed = parse_feed_text(response.text)
            diag.update(
                delimiter=parsed.delimiter.label,
                delimiter_reason=parsed.delimiter.reason,
                header_line=parsed.header_line[:HEADER_LINE_DIAGNOSTIC_LIMIT],
                parsed_fields=tuple(parsed.fields),
            )
            records = normalize_feed(parsed, self.schema)
        except FeedTransportError as exc:
            diag["status"] = exc.status
            logger.warning("%s feed failed: %s", label, exc.message)
            return LoadResult(error=exc.message, diagnostics=FeedDiagnostics(**diag))
        except AppError as exc:
            logger.warning("%s feed failed: %s", label, exc)
            return LoadResult(error=exc.message, diagnostics=FeedDiagnostics(**diag))
        except Exception as exc:
            logger.exception("Unexpected error while loading %s feed", label)
            message = str(exc) or f"Unknown error while loading {label} sheet."
            return LoadResult(error=message, diagnostics=FeedDiagnostics(**diag))
        logger.info("%s feed loaded: %d records", label, len(records))
        return LoadResult(records=records, diagnostics=FeedDiagnostics(**diag))


__all__ = ["FeedDiagnostics", "FeedLoader", "Fetcher", "LoadResult"]
