"""Content types of the lab website: record models and feed schemas."""

from .models import FileItem, NewsItem, Person, Project, Publication, Resource
from .schemas import (
    CATEGORY_ALIASES,
    CATEGORY_KEYS,
    NEWS,
    PEOPLE,
    PROJECTS,
    PUBLICATIONS,
    RESOURCE_TABS,
    RESOURCES,
    SCHEMAS,
    category_label,
    get_schema,
    person_group,
)

__all__ = [
    "CATEGORY_ALIASES",
    "CATEGORY_KEYS",
    "FileItem",
    "NEWS",
    "NewsItem",
    "PEOPLE",
    "PROJECTS",
    "PUBLICATIONS",
    "Person",
    "Project",
    "Publication",
    "RESOURCES",
    "RESOURCE_TABS",
    "Resource",
    "SCHEMAS",
    "category_label",
    "get_schema",
    "person_group",
]
