"""Record types for each content page.

Records are frozen: a record set is built once per successful feed load and
replaced wholesale on the next one. Every record exposes ``id`` and
``label`` so the generic normalizer can apply the identity check.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from labsite.config import ORDER_SENTINEL
from labsite.pipeline.feeds import FileItem


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    role: str | None = None
    status: str | None = None
    interests: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()
    photo_url: str | None = None
    website: str | None = None
    orcid: str | None = None
    email: str | None = None
    affiliation: str | None = None
    order: float = ORDER_SENTINEL

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Project:
    id: str
    title: str
    status: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()
    start_date: str | None = None
    end_date: str | None = None
    url: str | None = None
    repo: str | None = None
    image_url: str | None = None
    order: float = ORDER_SENTINEL

    @property
    def label(self) -> str:
        return self.title


@dataclass(frozen=True)
class Publication:
    id: str
    title: str
    authors: str | None = None
    year: int | None = None
    journal: str | None = None
    venue: str | None = None
    type: str | None = None
    tags: tuple[str, ...] = ()
    url: str | None = None
    pdf: str | None = None
    doi: str | None = None
    abstract: str | None = None
    order: float = ORDER_SENTINEL

    @property
    def label(self) -> str:
        return self.title

    @property
    def venue_label(self) -> str | None:
        """Journal when given, otherwise the legacy venue column."""
        return self.journal or self.venue


@dataclass(frozen=True)
class Resource:
    id: str
    title: str
    description: str = ""
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    files: tuple[FileItem, ...] = field(default=())
    created_at: str | None = None

    @property
    def label(self) -> str:
        return self.title


@dataclass(frozen=True)
class NewsItem:
    id: str
    title: str
    date: str | None = None
    summary: str | None = None
    url: str | None = None
    tags: tuple[str, ...] = ()
    image_url: str | None = None

    @property
    def label(self) -> str:
        return self.title


__all__ = ["FileItem", "NewsItem", "Person", "Project", "Publication", "Resource"]
