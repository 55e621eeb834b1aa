"""Lab website builder package.

This package turns published spreadsheet exports (CSV feeds) into a static
academic lab website with people, projects, publications, resources and news
pages. Each feed is fetched, parsed with tolerant delimiter and header
handling, normalized into typed records, and rendered into filterable views.

Package Structure
-----------------
- `pipeline/feeds/`:
    Delimiter detection, header aliasing, per-field normalizers and the
    generic row-to-record normalizer.
- `pipeline/content/`:
    Record types and the per-content-type schemas (alias tables, builders,
    ordering, search text).
- `pipeline/loader/`:
    Feed configuration, the aiohttp feed client and the reloadable loader
    with its error and diagnostics surface.
- `pipeline/view/`:
    In-memory filter/search views over a loaded record set.
- `pipeline/site/`:
    Static HTML rendering and the site build runner.
- `cli.py`: Command line entrypoint (``build``, ``search``, ``diagnose``).
- `config.py`: All configuration constants, as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
>>> import labsite
>>> # See labsite.cli or labsite.pipeline.site.runner for entrypoints.
"""

__version__ = "0.1.0"
