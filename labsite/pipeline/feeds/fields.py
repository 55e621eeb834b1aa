"""Tolerant per-field normalizers for spreadsheet cells.

Every function here is pure and total: it accepts whatever text a sheet
editor typed (or ``None`` for a missing column) and returns a normalized
value or an "absent" marker. No function raises on bad content; invalid
values degrade to empty lists, ``None`` or a sort sentinel.

Encodings handled
-----------------
- Lists: split on the first of ``,`` ``;`` ``|`` that yields more than one
  token, else on whitespace.
- Categories: like lists without the whitespace fallback, then lower-cased,
  remapped through legacy aliases and restricted to a closed set.
- Files: ``name::url`` pairs joined by ``|``; bare URLs get a default label.
- Dates: ``YYYY-MM-DD`` passes through, other parseable dates are
  normalized, unparseable text is kept verbatim.
- Numbers, years, URLs, ORCID iDs and DOIs.
"""

from __future__ import annotations

import math
import re
import warnings
from collections.abc import Iterable, Mapping
from datetime import date
from typing import NamedTuple

import pandas as pd

from labsite.config import (
    DEFAULT_FILE_LABEL,
    DOI_URL_PREFIX,
    MAX_PUBLICATION_YEAR,
    MIN_PUBLICATION_YEAR,
    ORCID_URL_PREFIX,
    ORDER_SENTINEL,
)

LIST_SEPARATORS: tuple[str, ...] = (",", ";", "|")

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_YEAR = re.compile(r"\b([0-9]{4})\b")
_ORCID = re.compile(r"^\d{4}-\d{4}-\d{4}-\d{3}[\dX]$", re.IGNORECASE)
_DOI_URL = re.compile(r"^https?://doi\.org/", re.IGNORECASE)


class FileItem(NamedTuple):
    """A downloadable file or link attached to a record."""

    name: str
    url: str


def clean_text(value: object) -> str | None:
    """Return the trimmed text of ``value`` or ``None`` when blank.

    Examples
    --------
    >>> clean_text("  Seoul ")
    'Seoul'
    >>> clean_text("   ") is None
    True
    """
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _split_on(raw: str, separator: str) -> list[str]:
    return [token.strip() for token in raw.split(separator) if token.strip()]


def split_list(value: object) -> list[str]:
    """Split a free-text list cell into trimmed tokens.

    The first separator among comma, semicolon and pipe that produces more
    than one token wins; otherwise the value is split on whitespace.

    Parameters
    ----------
    value : object
        Raw cell value.

    Returns
    -------
    list[str]
        Non-empty, trimmed tokens in their original order.

    Examples
    --------
    >>> split_list("a, b,c")
    ['a', 'b', 'c']
    >>> split_list("a;b;c")
    ['a', 'b', 'c']
    >>> split_list("a b c")
    ['a', 'b', 'c']
    >>> split_list("")
    []
    """
    raw = clean_text(value)
    if raw is None:
        return []
    for separator in LIST_SEPARATORS:
        tokens = _split_on(raw, separator)
        if len(tokens) > 1:
            return tokens
    return raw.split()


def normalize_categories(
    value: object,
    allowed: Iterable[str],
    aliases: Mapping[str, str] | None = None,
) -> list[str]:
    """Normalize a category cell against a closed enumeration.

    Tokens are split like :func:`split_list` but without the whitespace
    fallback, so a multi-word label such as ``"python code"`` stays one
    token. Each token is lower-cased, remapped through ``aliases`` and kept
    only if it belongs to ``allowed``.

    Parameters
    ----------
    value : object
        Raw cell value.
    allowed : Iterable[str]
        The closed set of canonical category keys.
    aliases : Mapping[str, str] | None, optional
        Legacy label to canonical key.

    Returns
    -------
    list[str]
        Recognized category keys in their original order.

    Examples
    --------
    >>> normalize_categories("Tool, lecture, workshop", {"python", "lecture"}, {"tool": "python"})
    ['python', 'lecture']
    """
    raw = clean_text(value)
    if raw is None:
        return []
    tokens = [raw]
    for separator in LIST_SEPARATORS:
        split = _split_on(raw, separator)
        if len(split) > 1:
            tokens = split
            break
    allowed_keys = set(allowed)
    remap = aliases or {}
    categories: list[str] = []
    for token in tokens:
        key = token.strip().lower()
        key = remap.get(key, key)
        if key in allowed_keys:
            categories.append(key)
    return categories


def parse_file_items(value: object) -> list[FileItem]:
    """Parse a ``name::url|name::url`` cell into file items.

    An entry without ``::`` that starts with ``http`` is a bare URL and gets
    the default label. Entries whose URL part is empty are dropped.

    Examples
    --------
    >>> parse_file_items("Slides::https://x/a.pdf|https://x/b.pdf")
    [FileItem(name='Slides', url='https://x/a.pdf'), FileItem(name='File', url='https://x/b.pdf')]
    """
    raw = clean_text(value)
    if raw is None:
        return []
    items: list[FileItem] = []
    for part in _split_on(raw, "|"):
        pieces = part.split("::")
        name = pieces[0].strip()
        url = pieces[1].strip() if len(pieces) > 1 else ""
        if not url and name.startswith("http"):
            items.append(FileItem(DEFAULT_FILE_LABEL, name))
            continue
        if url:
            items.append(FileItem(name or DEFAULT_FILE_LABEL, url))
    return items


def normalize_date(value: object) -> str | None:
    """Normalize a free-form date to ``YYYY-MM-DD`` when possible.

    Returns
    -------
    str | None
        ``None`` for blank input, the canonical date when the value parses,
        otherwise the trimmed original text.

    Examples
    --------
    >>> normalize_date("2024-03-05")
    '2024-03-05'
    >>> normalize_date("March 5, 2024")
    '2024-03-05'
    >>> normalize_date("spring semester")
    'spring semester'
    >>> normalize_date("today")
    'today'
    """
    raw = clean_text(value)
    if raw is None:
        return None
    if _ISO_DATE.match(raw):
        return raw
    # A lone word is never a date; pandas would resolve "now" or "today" to the clock
    if raw.isalpha():
        return raw
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(raw, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return raw
    if pd.isna(parsed):
        return raw
    return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"


def date_sort_value(value: str | None) -> date | None:
    """Return a sortable date for a normalized date string, if it is one."""
    if value is None or not _ISO_DATE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_order(value: object, fallback: float = ORDER_SENTINEL) -> float:
    """Parse an ordering value, falling back to a sentinel.

    Examples
    --------
    >>> parse_order(" 3 ")
    3.0
    >>> parse_order("first")
    inf
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if math.isfinite(value) else fallback
    raw = clean_text(value)
    if raw is None or "_" in raw:
        return fallback
    try:
        number = float(raw)
    except ValueError:
        return fallback
    return number if math.isfinite(number) else fallback


def parse_year(value: object) -> int | None:
    """Extract a plausible publication year from free text.

    Examples
    --------
    >>> parse_year("Published 2019, revised")
    2019
    >>> parse_year("1850") is None
    True
    """
    raw = clean_text(value)
    if raw is None:
        return None
    match = _YEAR.search(raw)
    if not match:
        return None
    year = int(match.group(1))
    if year < MIN_PUBLICATION_YEAR or year > MAX_PUBLICATION_YEAR:
        return None
    return year


def is_http_url(value: object) -> bool:
    """Return True when the trimmed value starts with http:// or https://."""
    raw = clean_text(value) or ""
    return raw.startswith("http://") or raw.startswith("https://")


def http_url(value: object) -> str | None:
    """Return the trimmed URL if it is an http(s) URL, else ``None``."""
    return clean_text(value) if is_http_url(value) else None


def image_url(value: object, allow_root_relative: bool = False) -> str | None:
    """Return an image location, optionally accepting ``/public/paths``."""
    raw = clean_text(value)
    if raw is None:
        return None
    if is_http_url(raw) or (allow_root_relative and raw.startswith("/")):
        return raw
    return None


def normalize_orcid(value: object) -> str | None:
    """Expand a bare ORCID iD to its URL; keep anything else as typed.

    Examples
    --------
    >>> normalize_orcid("0000-0002-1825-009X")
    'https://orcid.org/0000-0002-1825-009X'
    """
    raw = clean_text(value)
    if raw is None:
        return None
    if raw.startswith("http"):
        return raw
    if _ORCID.match(raw):
        return f"{ORCID_URL_PREFIX}{raw}"
    return raw


def doi_url(doi: str | None) -> str | None:
    """Build a doi.org link for a DOI, tolerating an existing doi.org prefix."""
    if not doi:
        return None
    return f"{DOI_URL_PREFIX}{_DOI_URL.sub('', doi)}"


__all__ = [
    "FileItem",
    "LIST_SEPARATORS",
    "clean_text",
    "date_sort_value",
    "doi_url",
    "http_url",
    "image_url",
    "is_http_url",
    "normalize_categories",
    "normalize_date",
    "normalize_orcid",
    "parse_file_items",
    "parse_order",
    "parse_year",
    "split_list",
]
