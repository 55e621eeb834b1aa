"""Rich rendering helpers for the command-line interface.

All terminal output of the CLI goes through this module so the command
handlers stay free of presentation details.

Examples
--------
>>> from labsite.console import diagnostics_panel
>>> from labsite.pipeline.loader import LoadResult
>>> panel = diagnostics_panel("News", LoadResult(error="NEWS_SHEET_CSV_URL is not set."))
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from labsite.pipeline.feeds.schema import FeedSchema
from labsite.pipeline.loader import LoadResult

console = Console()

# Columns shown by ``labsite search`` per content type
TABLE_COLUMNS: dict[str, tuple[tuple[str, str], ...]] = {
    "people": (("Name", "name"), ("Role", "role"), ("Status", "status")),
    "projects": (("Title", "title"), ("Status", "status"), ("Start", "start_date")),
    "publications": (("Title", "title"), ("Authors", "authors"), ("Year", "year")),
    "resources": (("Title", "title"), ("Categories", "categories"), ("Date", "created_at")),
    "news": (("Title", "title"), ("Date", "date"), ("Tags", "tags")),
}


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (tuple, list)):
        return ", ".join(str(v) for v in value)
    return str(value)


def records_table(schema: FeedSchema, records: Sequence[Any], title: str | None = None) -> Table:
    """Build a table with one row per record."""
    table = Table(title=title or schema.label, show_lines=False)
    table.add_column("ID", style="dim")
    columns = TABLE_COLUMNS.get(schema.name, (("Title", "label"),))
    for heading, _ in columns:
        table.add_column(heading)
    for record in records:
        table.add_row(
            Text(_cell(record.id)),
            *(Text(_cell(getattr(record, attr, ""))) for _, attr in columns),
        )
    return table


def diagnostics_table(result: LoadResult) -> Table:
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for label, value in result.diagnostics.as_rows():
        table.add_row(label, Text(value))
    return table


def diagnostics_panel(label: str, result: LoadResult) -> Panel:
    """Summarize one load: status line plus the diagnostics table."""
    if result.ok:
        status = f"[green]OK[/green]: {len(result.records)} records"
        border = "green"
    else:
        status = f"[red]Error[/red]: {escape(result.error or '')}"
        border = "red"
    return Panel(
        Group(status, diagnostics_table(result)),
        title=f"{label} feed",
        border_style=border,
    )


__all__ = [
    "TABLE_COLUMNS",
    "console",
    "diagnostics_panel",
    "diagnostics_table",
    "records_table",
]
