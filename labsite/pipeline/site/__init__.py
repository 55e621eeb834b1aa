"""Static site generation: HTML rendering and the build runner."""

from .renderer import clean_html_output, generate_page_html, markdown_to_html, write_html_output
from .runner import build_site, configure_logging, load_all_feeds, render_pages, run_from_config

__all__ = [
    "build_site",
    "clean_html_output",
    "configure_logging",
    "generate_page_html",
    "load_all_feeds",
    "markdown_to_html",
    "render_pages",
    "run_from_config",
    "write_html_output",
]
