"""Tolerant CSV feed normalization.

Public API for turning spreadsheet CSV exports into typed records: delimiter
detection, header aliasing, per-field normalizers, parsing, and the generic
schema-driven normalizer. Consumers import from this package rather than
its submodules.
"""

from .delimiter import DelimiterChoice, detect_delimiter, first_line, sniff_delimiter
from .fields import (
    FileItem,
    clean_text,
    date_sort_value,
    doi_url,
    http_url,
    image_url,
    is_http_url,
    normalize_categories,
    normalize_date,
    normalize_orcid,
    parse_file_items,
    parse_order,
    parse_year,
    split_list,
)
from .headers import normalize_header, project_row, resolve_field_map
from .normalizer import normalize_feed, normalize_rows
from .parser import ParsedFeed, parse_feed_text
from .schema import ALL_TAB, CategoryTab, FeedSchema, Record

__all__ = [
    "ALL_TAB",
    "CategoryTab",
    "DelimiterChoice",
    "FeedSchema",
    "FileItem",
    "ParsedFeed",
    "Record",
    "clean_text",
    "date_sort_value",
    "detect_delimiter",
    "doi_url",
    "first_line",
    "http_url",
    "image_url",
    "is_http_url",
    "normalize_categories",
    "normalize_date",
    "normalize_feed",
    "normalize_header",
    "normalize_orcid",
    "normalize_rows",
    "parse_feed_text",
    "parse_file_items",
    "parse_order",
    "parse_year",
    "project_row",
    "resolve_field_map",
    "sniff_delimiter",
    "split_list",
]
