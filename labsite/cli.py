"""Command-line interface for building and inspecting the lab website.

Commands
--------
build
    Load every feed and write the static site. Feeds that fail are shown as
    error panels on their pages; the exit code is 1 only if pages could not
    be written.
search
    Load one feed and print the records visible for a category tab and a
    query.
diagnose
    Load one feed and print its error (if any) and diagnostics.

Examples
--------
>>> # In shell
>>> labsite build --output public
>>> labsite search resources --category python --query pandas
>>> labsite diagnose news
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from labsite.config import CONTENT_TYPES, DEFAULT_OUTPUT_DIR
from labsite.console import console, diagnostics_panel, records_table
from labsite.exceptions import AppError
from labsite.pipeline.content import get_schema
from labsite.pipeline.loader import FeedConfig, FeedLoader, LoadResult
from labsite.pipeline.site.runner import configure_logging, run_from_config
from labsite.pipeline.view import FeedPage

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with the ``build``, ``search`` and ``diagnose`` commands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "INFO")
    )
    parser = argparse.ArgumentParser(
        prog="labsite", description="Build the lab website from published sheet feeds."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser(
        "build", help="Load all feeds and write the static site.", parents=[common]
    )
    build.add_argument("-o", "--output", type=Path, default=DEFAULT_OUTPUT_DIR)

    search = sub.add_parser(
        "search", help="Filter one feed and print matching records.", parents=[common]
    )
    search.add_argument("type", choices=CONTENT_TYPES)
    search.add_argument("-q", "--query", type=str, default="")
    search.add_argument("-c", "--category", type=str, default="all")

    diagnose = sub.add_parser(
        "diagnose", help="Load one feed and print diagnostics.", parents=[common]
    )
    diagnose.add_argument("type", choices=CONTENT_TYPES)
    return parser


def _load_one(name: str, config: FeedConfig) -> FeedPage:
    page = FeedPage(FeedLoader(get_schema(name), config))
    asyncio.run(page.reload())
    return page


def _cmd_build(args: argparse.Namespace, config: FeedConfig) -> int:
    return 0 if run_from_config(config, output_dir=args.output) else 1


def _cmd_search(args: argparse.Namespace, config: FeedConfig) -> int:
    page = _load_one(args.type, config)
    result: LoadResult = page.result
    if not result.ok:
        console.print(diagnostics_panel(page.loader.schema.label, result))
        return 1
    page.view.set_category(args.category)
    page.view.set_query(args.query)
    if not page.view.visible:
        console.print("No results.")
        return 0
    tab = page.loader.schema.tab(page.view.category)
    console.print(
        records_table(
            page.loader.schema,
            page.view.visible,
            title=f"{page.loader.schema.label} ({tab.label}): {len(page.view.visible)}",
        )
    )
    return 0


def _cmd_diagnose(args: argparse.Namespace, config: FeedConfig) -> int:
    page = _load_one(args.type, config)
    console.print(diagnostics_panel(page.loader.schema.label, page.result))
    return 0 if page.result.ok else 1


_COMMANDS = {
    "build": _cmd_build,
    "search": _cmd_search,
    "diagnose": _cmd_diagnose,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, enable_file=not os.environ.get("DISABLE_FILE_LOGS"))
    try:
        config = FeedConfig.from_env()
    except AppError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    try:
        return _COMMANDS[args.command](args, config)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
