"""Feed schema description shared by all content types.

A :class:`FeedSchema` is everything the generic pipeline needs to know about
one content type: its header aliases, how to build a record from a row of
canonical fields, how records are ordered and searched, and which category
tabs it offers. Content modules supply schemas; nothing else in the pipeline
is specific to people, projects, publications, resources or news.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, NamedTuple, Protocol, TypeVar


class Record(Protocol):
    """Structural type of every normalized record."""

    @property
    def id(self) -> str: ...

    @property
    def label(self) -> str: ...


R = TypeVar("R", bound=Record)


class CategoryTab(NamedTuple):
    """A category selector offered by a view.

    Attributes
    ----------
    key : str
        Selector key, e.g. ``"python"``.
    label : str
        Display label, e.g. ``"Python code"``.
    match : frozenset[str] | None
        Category keys the tab accepts; ``None`` accepts every record.
    """

    key: str
    label: str
    match: frozenset[str] | None = None


ALL_TAB = CategoryTab("all", "All")


def _no_categories(record: Any) -> Sequence[str]:
    return ()


@dataclass(frozen=True)
class FeedSchema(Generic[R]):
    """Per-content-type configuration of the generic feed pipeline.

    Attributes
    ----------
    name : str
        Content type key (``"people"``, ``"news"``, ...).
    label : str
        Display name used in messages, e.g. ``"People"``.
    aliases : Mapping[str, tuple[str, ...]]
        Canonical field to accepted normalized header labels, in priority
        order.
    build : Callable[[Mapping[str, str]], R]
        Builds a candidate record from a row keyed by canonical fields.
    sort_key : Callable[[R], Any]
        Base ordering of the record set.
    search_text : Callable[[R], str]
        Text the free-text filter matches against.
    categories : Callable[[R], Sequence[str]]
        Category keys of a record, for tab filtering.
    tabs : tuple[CategoryTab, ...]
        Available category tabs; the first is the default.
    """

    name: str
    label: str
    aliases: Mapping[str, tuple[str, ...]]
    build: Callable[[Mapping[str, str]], R]
    sort_key: Callable[[R], Any]
    search_text: Callable[[R], str]
    categories: Callable[[R], Sequence[str]] = _no_categories
    tabs: tuple[CategoryTab, ...] = field(default=(ALL_TAB,))

    def tab(self, key: str) -> CategoryTab:
        """Return the tab with ``key``, falling back to the default tab."""
        for tab in self.tabs:
            if tab.key == key:
                return tab
        return self.tabs[0]


__all__ = ["ALL_TAB", "CategoryTab", "FeedSchema", "Record"]
