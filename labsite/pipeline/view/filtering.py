"""In-memory filter/search view over one content type's record set.

A :class:`FeedView` has two inputs, the active category tab and a free-text
query, and one derived output, the visible records. The output is
recomputed eagerly whenever an input or the record set changes, so reading
:attr:`FeedView.visible` never does work. Matching is deterministic and
unranked: visible records keep the record set's base order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Generic

from labsite.pipeline.feeds.schema import CategoryTab, FeedSchema, R


def normalize_query(query: str | None) -> str:
    """Return the trimmed, lower-cased query used for matching."""
    return (query or "").strip().lower()


def matches_category(record: Any, schema: FeedSchema, tab: CategoryTab) -> bool:
    """Return True when ``record`` belongs to ``tab`` (any-match)."""
    if tab.match is None:
        return True
    return any(category in tab.match for category in schema.categories(record))


def matches_query(record: Any, schema: FeedSchema, query: str) -> bool:
    """Return True when the normalized ``query`` occurs in the search text."""
    if not query:
        return True
    return query in schema.search_text(record).lower()


def filter_records(
    records: Iterable[R], schema: FeedSchema[R], category: str = "all", query: str = ""
) -> list[R]:
    """Return records passing both the category and the text filter.

    Parameters
    ----------
    records : Iterable
        Records in base order.
    schema : FeedSchema
        Schema supplying categories, search text and tabs.
    category : str, optional
        Tab key; unknown keys select the default tab.
    query : str, optional
        Free-text query; blank passes every record.

    Returns
    -------
    list
        Matching records in their original order.
    """
    tab = schema.tab(category)
    needle = normalize_query(query)
    return [
        record
        for record in records
        if matches_category(record, schema, tab) and matches_query(record, schema, needle)
    ]


class FeedView(Generic[R]):
    """Category/query view over a record set.

    Parameters
    ----------
    schema : FeedSchema
        Schema of the content type.
    records : Iterable, optional
        Initial record set in base order.

    Examples
    --------
    >>> from labsite.pipeline.content import RESOURCES, Resource
    >>> view = FeedView(RESOURCES, [Resource("1", "Intro", categories=("python",))])
    >>> view.set_category("lecture")
    >>> view.visible
    ()
    """

    def __init__(self, schema: FeedSchema[R], records: Iterable[R] = ()) -> None:
        self.schema = schema
        self._records: tuple[R, ...] = tuple(records)
        self._category = schema.tabs[0].key
        self._query = ""
        self._visible: tuple[R, ...] = ()
        self._recompute()

    @property
    def records(self) -> tuple[R, ...]:
        return self._records

    @property
    def category(self) -> str:
        return self._category

    @property
    def query(self) -> str:
        return self._query

    @property
    def visible(self) -> tuple[R, ...]:
        return self._visible

    @property
    def tabs(self) -> tuple[CategoryTab, ...]:
        return self.schema.tabs

    def set_records(self, records: Iterable[R]) -> None:
        """Replace the whole record set, keeping the current inputs."""
        self._records = tuple(records)
        self._recompute()

    def set_category(self, category: str) -> None:
        """Select a category tab; unknown keys select the default tab."""
        self._category = self.schema.tab(category).key
        self._recompute()

    def set_query(self, query: str) -> None:
        self._query = query or ""
        self._recompute()

    def counts(self) -> dict[str, int]:
        """Number of records per tab, ignoring the query."""
        return {
            tab.key: sum(
                1 for record in self._records if matches_category(record, self.schema, tab)
            )
            for tab in self.schema.tabs
        }

    def _recompute(self) -> None:
        self._visible = tuple(
            filter_records(self._records, self.schema, self._category, self._query)
        )


def group_records(
    records: Sequence[R], key: Any, default: str | None = None
) -> list[tuple[str, list[R]]]:
    """Group records by ``key(record)``; groups are ordered by heading.

    Records keep their relative order inside each group. Blank headings
    fall back to ``default`` when given.
    """
    groups: dict[str, list[R]] = {}
    for record in records:
        heading = key(record) or default or ""
        groups.setdefault(heading, []).append(record)
    return sorted(groups.items(), key=lambda item: item[0])


__all__ = [
    "FeedView",
    "filter_records",
    "group_records",
    "matches_category",
    "matches_query",
    "normalize_query",
]
