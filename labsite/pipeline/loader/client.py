"""Asynchronous HTTP client for published spreadsheet feeds.

:class:`FeedClient` is the networking boundary of the pipeline. It issues one
GET per call, returns the response text on a 2xx status, and turns every
other outcome into a :class:`labsite.exceptions.FeedTransportError`. It never
retries: a failed feed stays failed until the next explicit reload.

Examples
--------
>>> import aiohttp
>>> from labsite.pipeline.loader.client import FeedClient
>>> from labsite.pipeline.loader.config import FeedConfig
>>> client = FeedClient(FeedConfig())
>>> async def main():
...     async with aiohttp.ClientSession() as session:
...         response = await client.fetch_text(session, "https://example.org/feed.csv")
...         print(response.status)
>>> # import asyncio; asyncio.run(main())
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, NamedTuple

import aiohttp

from labsite.exceptions import FeedTransportError

logger = logging.getLogger(__name__)

_REQUEST_HEADERS = {"Cache-Control": "no-cache", "Accept": "text/csv, text/plain, */*"}


class FetchResponse(NamedTuple):
    """Status code and decoded body of a successful feed request."""

    status: int
    text: str


class FeedClient:
    """Fetch feed text over HTTP.

    Parameters
    ----------
    config : Any
        Configuration object; only ``request_timeout`` is read, via getattr.
    """

    def __init__(self, config: Any) -> None:
        self.config = config

    def _request_kwargs(self) -> dict[str, Any]:
        timeout = getattr(self.config, "request_timeout", None)
        if timeout is None:
            return {"headers": _REQUEST_HEADERS}
        return {
            "headers": _REQUEST_HEADERS,
            "timeout": aiohttp.ClientTimeout(total=timeout),
        }

    async def fetch_text(self, session: aiohttp.ClientSession, url: str) -> FetchResponse:
        """Fetch ``url`` and return its status and text.

        Parameters
        ----------
        session : aiohttp.ClientSession
            Session used for the request. Not closed by this method.
        url : str
            Feed URL.

        Returns
        -------
        FetchResponse
            Status code and response body.

        Raises
        ------
        FeedTransportError
            On a non-2xx status (``status`` set, message ``"HTTP <status>"``),
            a client error, or a timeout.
        """
        try:
            async with session.get(url, **self._request_kwargs()) as response:
                status = response.status
                if not 200 <= status < 300:
                    raise FeedTransportError(
                        f"HTTP {status}", status=status, context={"url": url}
                    )
                text = await response.text()
        except aiohttp.ClientError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise FeedTransportError(
                str(exc) or type(exc).__name__, context={"url": url}
            ) from exc
        except asyncio.TimeoutError as exc:
            logger.warning("Request to %s timed out", url)
            raise FeedTransportError(
                "Request timed out", context={"url": url}
            ) from exc
        return FetchResponse(status, text)


__all__ = ["FeedClient", "FetchResponse"]
