"""Configuration object for feed loading and site generation.

This module provides :class:`FeedConfig`, the single explicit configuration
object handed to feed loaders, the site builder and the CLI. Nothing in the
pipeline reads the process environment directly; :meth:`FeedConfig.from_env`
is the one boundary where environment variables (and an optional ``.env``
file at the project root) become a typed configuration.

Examples
--------
>>> from labsite.pipeline.loader.config import FeedConfig
>>> cfg = FeedConfig({"news": "https://example.org/news.csv"})
>>> cfg.feed_url("news")
'https://example.org/news.csv'
>>> cfg.feed_url("people") is None
True
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv

import labsite.config as _project_config
from labsite.config import (
    DEFAULT_LAB_DESCRIPTION,
    DEFAULT_LAB_NAME,
    DEFAULT_MAX_FEED_REQUESTS_PER_SECOND,
    FEED_URL_ENV_VARS,
)
from labsite.exceptions import ConfigurationError


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class FeedConfig:
    r"""Feed URLs and loader settings for one site build.

    Parameters
    ----------
    feed_urls : Mapping[str, str | None] | None, optional
        Content type name to published CSV URL. Blank values are treated as
        absent.
    request_timeout : float | None, optional
        Total per-request timeout in seconds. ``None`` leaves the transport
        default in place.
    max_requests_per_second : float, optional
        Pace of concurrent feed requests during a site build.
    lab_name : str, optional
        Site title shown on every page.
    lab_description : str, optional
        Introductory paragraph on the home page.

    Notes
    -----
    Instances are not mutated after construction.
    """

    def __init__(
        self,
        feed_urls: Mapping[str, str | None] | None = None,
        *,
        request_timeout: float | None = None,
        max_requests_per_second: float = DEFAULT_MAX_FEED_REQUESTS_PER_SECOND,
        lab_name: str = DEFAULT_LAB_NAME,
        lab_description: str = DEFAULT_LAB_DESCRIPTION,
    ) -> None:
        self.feed_urls: dict[str, str | None] = {
            name: _blank_to_none(url) for name, url in (feed_urls or {}).items()
        }
        if request_timeout is not None and request_timeout <= 0:
            raise ConfigurationError(
                "REQUEST_TIMEOUT must be positive",
                context={"request_timeout": request_timeout},
            )
        if max_requests_per_second <= 0:
            raise ConfigurationError(
                "MAX_FEED_REQUESTS_PER_SECOND must be positive",
                context={"max_requests_per_second": max_requests_per_second},
            )
        self.request_timeout = request_timeout
        self.max_requests_per_second = float(max_requests_per_second)
        self.lab_name = lab_name
        self.lab_description = lab_description

    def feed_url(self, name: str) -> str | None:
        """Return the configured URL for a content type, or ``None``."""
        return self.feed_urls.get(name)

    @staticmethod
    def env_var(name: str) -> str:
        """Return the environment variable that configures a feed URL."""
        return FEED_URL_ENV_VARS.get(name, f"{name.upper()}_SHEET_CSV_URL")

    @classmethod
    def from_env(cls, env_root: Path | None = None) -> FeedConfig:
        """Build a configuration from the environment and optional ``.env``.

        Parameters
        ----------
        env_root : Path | None, optional
            Directory holding the ``.env`` file. Defaults to the project
            root from :mod:`labsite.config`.

        Returns
        -------
        FeedConfig
            Configuration with every feed URL that is set.

        Raises
        ------
        ConfigurationError
            If a numeric setting cannot be parsed or is not positive.
        """
        root = Path(env_root) if env_root is not None else Path(_project_config.PROJECT_ROOT)
        env_path = root / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=True)
        urls = {name: os.getenv(var) for name, var in FEED_URL_ENV_VARS.items()}
        timeout_raw = _blank_to_none(os.getenv("REQUEST_TIMEOUT"))
        rate_raw = _blank_to_none(os.getenv("MAX_FEED_REQUESTS_PER_SECOND"))
        try:
            timeout = float(timeout_raw) if timeout_raw is not None else None
            rate = (
                float(rate_raw)
                if rate_raw is not None
                else DEFAULT_MAX_FEED_REQUESTS_PER_SECOND
            )
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid numeric setting: {exc}",
                context={"REQUEST_TIMEOUT": timeout_raw, "MAX_FEED_REQUESTS_PER_SECOND": rate_raw},
            ) from exc
        return cls(
            urls,
            request_timeout=timeout,
            max_requests_per_second=rate,
            lab_name=_blank_to_none(os.getenv("LAB_NAME")) or DEFAULT_LAB_NAME,
            lab_description=_blank_to_none(os.getenv("LAB_DESCRIPTION"))
            or DEFAULT_LAB_DESCRIPTION,
        )


__all__ = ["FeedConfig"]
