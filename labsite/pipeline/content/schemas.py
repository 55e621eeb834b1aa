"""Schemas for the five content pages.

Each schema pairs a hand-maintained header alias table (English labels,
snake/camel variants and the Korean labels used by the lab's sheets) with a
record builder, a base ordering and the text searched by the free-text
filter. Aliases are listed in priority order and are matched after the
header has been lower-cased and trimmed.
"""

from __future__ import annotations

from collections.abc import Mapping

from labsite.config import DEFAULT_PEOPLE_GROUP
from labsite.pipeline.feeds import (
    ALL_TAB,
    CategoryTab,
    FeedSchema,
    clean_text,
    date_sort_value,
    doi_url,
    http_url,
    image_url,
    normalize_categories,
    normalize_date,
    normalize_orcid,
    parse_file_items,
    parse_order,
    parse_year,
    split_list,
)

from .models import NewsItem, Person, Project, Publication, Resource

# --------------------------------------------------------------------------
# Resources categories
# --------------------------------------------------------------------------

CATEGORY_KEYS: tuple[str, ...] = ("article", "lecture", "python")
CATEGORY_ALIASES: dict[str, str] = {
    "tool": "python",
    "python code": "python",
    "py": "python",
}
CATEGORY_LABELS: dict[str, str] = {
    "python": "Python code",
    "lecture": "Lecture",
    "article": "Article",
}
RESOURCE_TABS: tuple[CategoryTab, ...] = (
    ALL_TAB,
    CategoryTab("python", CATEGORY_LABELS["python"], frozenset({"python"})),
    CategoryTab("lecture", CATEGORY_LABELS["lecture"], frozenset({"lecture"})),
    CategoryTab("article", CATEGORY_LABELS["article"], frozenset({"article"})),
)


def category_label(key: str) -> str:
    """Return the display label of a category key."""
    return CATEGORY_LABELS.get(key, key[:1].upper() + key[1:])


def _join(*parts: object) -> str:
    return " ".join(str(p) for p in parts if p not in (None, ""))


def _text_key(value: str) -> str:
    return value.casefold()


# --------------------------------------------------------------------------
# People
# --------------------------------------------------------------------------

PEOPLE_ALIASES: Mapping[str, tuple[str, ...]] = {
    "id": ("id",),
    "name": ("name",),
    "role": ("role",),
    "status": ("status",),
    "interests": ("interests",),
    "methods": ("methods",),
    "photo_url": ("photourl", "photo_url", "photo"),
    "website": ("website", "site"),
    "orcid": ("orcid",),
    "email": ("email",),
    "affiliation": ("affiliation",),
    "order": ("order",),
}


def build_person(row: Mapping[str, str]) -> Person:
    return Person(
        id=clean_text(row.get("id")) or "",
        name=clean_text(row.get("name")) or "",
        role=clean_text(row.get("role")),
        status=clean_text(row.get("status")),
        interests=tuple(split_list(row.get("interests"))),
        methods=tuple(split_list(row.get("methods"))),
        photo_url=http_url(row.get("photo_url")),
        website=http_url(row.get("website")),
        orcid=normalize_orcid(row.get("orcid")),
        email=clean_text(row.get("email")),
        affiliation=clean_text(row.get("affiliation")),
        order=parse_order(row.get("order")),
    )


def person_group(person: Person) -> str:
    """Group heading of a person on the people page."""
    return person.status or DEFAULT_PEOPLE_GROUP


PEOPLE = FeedSchema(
    name="people",
    label="People",
    aliases=PEOPLE_ALIASES,
    build=build_person,
    sort_key=lambda p: (p.order, _text_key(p.name)),
    search_text=lambda p: _join(
        p.name,
        p.role,
        p.status,
        p.affiliation,
        " ".join(p.interests),
        " ".join(p.methods),
    ),
)

# --------------------------------------------------------------------------
# Projects
# --------------------------------------------------------------------------

PROJECT_ALIASES: Mapping[str, tuple[str, ...]] = {
    "id": ("id",),
    "title": ("title",),
    "status": ("status",),
    "description": ("description", "desc", "summary"),
    "tags": ("tags", "tag"),
    "start_date": ("startdate", "start_date", "start"),
    "end_date": ("enddate", "end_date", "end"),
    "url": ("url", "link", "website"),
    "repo": ("repo", "github", "repository"),
    "order": ("order",),
    "image_url": ("imageurl", "image_url", "image"),
}


def build_project(row: Mapping[str, str]) -> Project:
    return Project(
        id=clean_text(row.get("id")) or "",
        title=clean_text(row.get("title")) or "",
        status=clean_text(row.get("status")),
        description=clean_text(row.get("description")),
        tags=tuple(split_list(row.get("tags"))),
        start_date=normalize_date(row.get("start_date")),
        end_date=normalize_date(row.get("end_date")),
        url=http_url(row.get("url")),
        repo=http_url(row.get("repo")),
        image_url=image_url(row.get("image_url"), allow_root_relative=True),
        order=parse_order(row.get("order")),
    )


PROJECTS = FeedSchema(
    name="projects",
    label="Projects",
    aliases=PROJECT_ALIASES,
    build=build_project,
    sort_key=lambda p: (p.order, _text_key(p.title)),
    search_text=lambda p: _join(
        p.title,
        p.status,
        p.description,
        " ".join(p.tags),
        p.start_date,
        p.end_date,
    ),
)

# --------------------------------------------------------------------------
# Publications
# --------------------------------------------------------------------------

PUBLICATION_ALIASES: Mapping[str, tuple[str, ...]] = {
    "id": ("id",),
    "title": ("title",),
    "authors": ("authors", "author"),
    "year": ("year", "date", "년도"),
    "journal": ("journal", "저널"),
    "venue": ("venue", "conference"),
    "type": ("type", "category"),
    "tags": ("tags", "tag"),
    "url": ("url", "link", "website"),
    "pdf": ("pdf", "fulltext", "file"),
    "doi": ("doi",),
    "abstract": ("abstract", "summary", "초록"),
    "order": ("order",),
}


def build_publication(row: Mapping[str, str]) -> Publication:
    url = http_url(row.get("url"))
    doi = clean_text(row.get("doi"))
    return Publication(
        id=clean_text(row.get("id")) or "",
        title=clean_text(row.get("title")) or "",
        authors=clean_text(row.get("authors")),
        year=parse_year(row.get("year")),
        journal=clean_text(row.get("journal")),
        venue=clean_text(row.get("venue")),
        type=clean_text(row.get("type")),
        tags=tuple(split_list(row.get("tags"))),
        url=url or doi_url(doi),
        pdf=http_url(row.get("pdf")),
        doi=doi,
        abstract=clean_text(row.get("abstract")),
        order=parse_order(row.get("order")),
    )


def _publication_key(p: Publication) -> tuple:
    # order asc, year desc with missing years last, then title
    return (p.order, p.year is None, -(p.year or 0), _text_key(p.title))


PUBLICATIONS = FeedSchema(
    name="publications",
    label="Publications",
    aliases=PUBLICATION_ALIASES,
    build=build_publication,
    sort_key=_publication_key,
    search_text=lambda p: _join(
        p.title,
        p.authors,
        p.journal,
        p.venue,
        p.type,
        " ".join(p.tags),
        p.year,
        p.doi,
    ),
)

# --------------------------------------------------------------------------
# Resources
# --------------------------------------------------------------------------

RESOURCE_ALIASES: Mapping[str, tuple[str, ...]] = {
    "id": ("id",),
    "title": ("title",),
    "description": ("description", "desc", "설명"),
    "categories": ("categories", "category", "카테고리"),
    "tags": ("tags", "tag", "태그"),
    "files": ("files", "file", "자료", "링크"),
    "created_at": ("createdat", "created_at", "date", "날짜"),
}


def build_resource(row: Mapping[str, str]) -> Resource:
    return Resource(
        id=clean_text(row.get("id")) or "",
        title=clean_text(row.get("title")) or "",
        description=clean_text(row.get("description")) or "",
        categories=tuple(
            normalize_categories(row.get("categories"), CATEGORY_KEYS, CATEGORY_ALIASES)
        ),
        tags=tuple(split_list(row.get("tags"))),
        files=tuple(parse_file_items(row.get("files"))),
        created_at=normalize_date(row.get("created_at")),
    )


def _newest_first(value: str | None) -> tuple[bool, int]:
    day = date_sort_value(value)
    if day is None:
        return (True, 0)
    return (False, -day.toordinal())


RESOURCES = FeedSchema(
    name="resources",
    label="Resources",
    aliases=RESOURCE_ALIASES,
    build=build_resource,
    sort_key=lambda r: _newest_first(r.created_at),
    search_text=lambda r: _join(
        r.title,
        r.description,
        " ".join(r.tags),
        " ".join(category_label(c) for c in r.categories),
        " ".join(f.name for f in r.files),
        r.created_at,
    ),
    categories=lambda r: r.categories,
    tabs=RESOURCE_TABS,
)

# --------------------------------------------------------------------------
# News
# --------------------------------------------------------------------------

NEWS_ALIASES: Mapping[str, tuple[str, ...]] = {
    "id": ("id",),
    "title": ("title",),
    "date": ("date", "createdat", "created_at", "날짜"),
    "summary": ("summary", "description", "desc"),
    "url": ("url", "link", "website"),
    "tags": ("tags", "tag"),
    "image_url": ("imageurl", "image_url", "image"),
}


def build_news_item(row: Mapping[str, str]) -> NewsItem:
    return NewsItem(
        id=clean_text(row.get("id")) or "",
        title=clean_text(row.get("title")) or "",
        date=normalize_date(row.get("date")),
        summary=clean_text(row.get("summary")),
        url=http_url(row.get("url")),
        tags=tuple(split_list(row.get("tags"))),
        image_url=image_url(row.get("image_url")),
    )


NEWS = FeedSchema(
    name="news",
    label="News",
    aliases=NEWS_ALIASES,
    build=build_news_item,
    sort_key=lambda n: (*_newest_first(n.date), _text_key(n.title)),
    search_text=lambda n: _join(n.title, n.summary, " ".join(n.tags), n.date),
)

SCHEMAS: dict[str, FeedSchema] = {
    schema.name: schema for schema in (PEOPLE, PROJECTS, PUBLICATIONS, RESOURCES, NEWS)
}


def get_schema(name: str) -> FeedSchema:
    """Return the schema for a content type name.

    Raises
    ------
    KeyError
        If ``name`` is not a known content type.
    """
    return SCHEMAS[name]


__all__ = [
    "CATEGORY_ALIASES",
    "CATEGORY_KEYS",
    "NEWS",
    "PEOPLE",
    "PROJECTS",
    "PUBLICATIONS",
    "RESOURCES",
    "RESOURCE_TABS",
    "SCHEMAS",
    "category_label",
    "get_schema",
    "person_group",
]
