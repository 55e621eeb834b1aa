"""Build the static lab website from the configured feeds.

This module is the headless entry point of site generation: it loads every
content type's feed concurrently, renders one page per content type plus the
home page, and writes them to an output directory.

Usage Examples
--------------
Typical programmatic usage with environment configuration::

    from labsite.pipeline.site.runner import run_from_config
    ok = run_from_config()

Explicit configuration and output directory::

    from pathlib import Path
    from labsite.pipeline.loader import FeedConfig
    from labsite.pipeline.site.runner import run_from_config

    run_from_config(
        FeedConfig({"news": "https://example.org/news.csv"}),
        output_dir=Path("public"),
    )

"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path

import aiohttp
from aiolimiter import AsyncLimiter

from labsite.config import (
    DEFAULT_OUTPUT_DIR,
    LOG_DIR,
    LOG_FILENAME_BUILD_SITE,
    LOG_FORMAT,
    PAGE_FILENAMES,
    PAGE_TEMPLATE_PATH,
)
from labsite.pipeline.content import SCHEMAS
from labsite.pipeline.loader import (
    FeedClient,
    FeedConfig,
    FeedLoader,
    Fetcher,
    FetchResponse,
    LoadResult,
)
from labsite.pipeline.view import FeedView

from .renderer import (
    generate_page_html,
    render_feed_body,
    render_home,
    render_nav,
    write_html_output,
)

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", enable_file: bool = True) -> None:
    """Configure root logging for site builds.

    Installs a console handler and, when ``enable_file`` is true, a file
    handler writing to ``logs/build_site.log``. Existing root handlers are
    removed first. A log directory that cannot be created leaves console
    logging only.

    Parameters
    ----------
    level : str, optional
        Logging level name. Defaults to "INFO".
    enable_file : bool, optional
        Whether to add the file handler. Defaults to True.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(LOG_DIR / LOG_FILENAME_BUILD_SITE, mode="a")
            )
        except OSError as exc:
            logging.getLogger(__name__).debug("File logging disabled: %s", exc)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def _paced(fetch: Fetcher, limiter: AsyncLimiter) -> Fetcher:
    async def paced_fetch(url: str) -> FetchResponse:
        async with limiter:
            return await fetch(url)

    return paced_fetch


async def _load_with(config: FeedConfig, fetch: Fetcher) -> dict[str, LoadResult]:
    limiter = AsyncLimiter(config.max_requests_per_second, 1)
    loaders = [
        FeedLoader(schema, config, fetch=_paced(fetch, limiter))
        for schema in SCHEMAS.values()
    ]
    results = await asyncio.gather(*(loader.load() for loader in loaders))
    return {loader.schema.name: result for loader, result in zip(loaders, results)}


async def load_all_feeds(
    config: FeedConfig, fetch: Fetcher | None = None
) -> dict[str, LoadResult]:
    """Load every content type's feed concurrently.

    Parameters
    ----------
    config : FeedConfig
        Feed URLs and pacing.
    fetch : Fetcher | None, optional
        Transport override. Defaults to a :class:`FeedClient` over one
        shared :class:`aiohttp.ClientSession`.

    Returns
    -------
    dict[str, LoadResult]
        Result per content type name. A failed feed has an error and no
        records; it never affects the other feeds.
    """
    if fetch is not None:
        return await _load_with(config, fetch)
    client = FeedClient(config)
    async with aiohttp.ClientSession() as session:

        async def shared_fetch(url: str) -> FetchResponse:
            return await client.fetch_text(session, url)

        return await _load_with(config, shared_fetch)


def render_pages(
    config: FeedConfig,
    results: Mapping[str, LoadResult],
    template_path: Path = PAGE_TEMPLATE_PATH,
) -> dict[str, str]:
    """Render the home page and every content page.

    Returns
    -------
    dict[str, str]
        Output filename to page HTML.
    """
    pages = {
        PAGE_FILENAMES["home"]: generate_page_html(
            template_path,
            config.lab_name,
            render_nav("home", config.lab_name),
            render_home(config.lab_name, config.lab_description),
        )
    }
    for name, schema in SCHEMAS.items():
        result = results.get(name, LoadResult())
        counts = FeedView(schema, result.records).counts()
        pages[PAGE_FILENAMES[name]] = generate_page_html(
            template_path,
            f"{schema.label} | {config.lab_name}",
            render_nav(name, config.lab_name),
            render_feed_body(schema, result, counts),
        )
    return pages


def build_site(
    config: FeedConfig, results: Mapping[str, LoadResult], output_dir: Path
) -> list[Path]:
    """Render and write all pages; return the paths written successfully."""
    written: list[Path] = []
    for filename, html in render_pages(config, results).items():
        path = output_dir / filename
        if write_html_output(html, path):
            written.append(path)
    return written


def run_from_config(
    config: FeedConfig | None = None,
    output_dir: Path | None = None,
    fetch: Fetcher | None = None,
) -> bool:
    """Load all feeds and write the static site.

    Feed failures are rendered as error panels on their pages and do not
    fail the build. The function returns ``True`` when every page was
    written and ``False`` otherwise; exceptions are logged.

    Parameters
    ----------
    config : FeedConfig or None, optional
        Configuration. If ``None``, :meth:`FeedConfig.from_env` is used.
    output_dir : pathlib.Path or None, optional
        Destination directory. If ``None``, uses ``DEFAULT_OUTPUT_DIR``.
    fetch : Fetcher or None, optional
        Transport override for tests.

    Returns
    -------
    bool
        ``True`` if all pages were written.

    Examples
    --------
    >>> from pathlib import Path
    >>> from labsite.pipeline.loader import FeedConfig
    >>> from labsite.pipeline.site.runner import run_from_config
    >>> run_from_config(FeedConfig(), output_dir=Path("/tmp/site"))
    True
    """
    output_dir = Path(output_dir) if output_dir is not None else DEFAULT_OUTPUT_DIR
    try:
        config = config if config is not None else FeedConfig.from_env()
        results = asyncio.run(load_all_feeds(config, fetch))
        failed = sorted(name for name, result in results.items() if not result.ok)
        if failed:
            logger.warning("Feeds with errors: %s", ", ".join(failed))
        written = build_site(config, results, output_dir)
    except Exception:
        logger.exception("Failed to generate website")
        return False
    if len(written) != len(PAGE_FILENAMES):
        logger.error("Only %d of %d pages written", len(written), len(PAGE_FILENAMES))
        return False
    logger.info("Website written to %s", output_dir.resolve())
    return True


__all__ = [
    "build_site",
    "configure_logging",
    "load_all_feeds",
    "render_pages",
    "run_from_config",
]
