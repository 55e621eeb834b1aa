"""Tests for per-field cell normalizers."""

import math

import pytest

from labsite.pipeline.content import CATEGORY_ALIASES, CATEGORY_KEYS
from labsite.pipeline.feeds import (
    FileItem,
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


@pytest.mark.parametrize("raw", ["a, b,c", "a;b;c", "a b c", "a | b | c", " a  b\tc "])
def test_split_list_separators(raw):
    assert split_list(raw) == ["a", "b", "c"]


def test_split_list_prefers_first_separator_that_splits():
    assert split_list("x y, z") == ["x y", "z"]
    assert split_list("x;y|z") == ["x", "y|z"]


def test_split_list_blank_and_empty_tokens():
    assert split_list(None) == []
    assert split_list("   ") == []
    assert split_list("a,,b, ") == ["a", "b"]


def _categories(value):
    return normalize_categories(value, CATEGORY_KEYS, CATEGORY_ALIASES)


def test_categories_closed_enumeration():
    assert _categories("workshop") == []
    assert _categories("Lecture; workshop; ARTICLE") == ["lecture", "article"]


@pytest.mark.parametrize("legacy", ["tool", "Tool", "py", "python code", "Python Code"])
def test_legacy_category_aliases_map_to_python(legacy):
    assert _categories(legacy) == ["python"]


def test_category_normalization_is_idempotent():
    once = _categories("tool|lecture")
    assert once == ["python", "lecture"]
    assert _categories(",".join(once)) == once


def test_categories_have_no_whitespace_fallback():
    assert _categories("lecture article") == []


def test_file_pairs():
    assert parse_file_items("Slides::https://x/a.pdf|https://x/b.pdf") == [
        FileItem("Slides", "https://x/a.pdf"),
        FileItem("File", "https://x/b.pdf"),
    ]


def test_file_entries_without_url_are_dropped():
    assert parse_file_items("Notes::|just text|::https://x/c.zip") == [
        FileItem("File", "https://x/c.zip")
    ]
    assert parse_file_items("") == []


def test_order_sentinel_sorts_after_every_finite_value():
    orders = [parse_order(v) for v in ("", "abc", "1_000", "10", "-2", "nan")]
    assert orders[0] == orders[1] == orders[2] == orders[5] == math.inf
    assert sorted(orders)[:2] == [-2.0, 10.0]
    assert parse_order(3) == 3.0


def test_normalize_date():
    assert normalize_date("2024-03-05") == "2024-03-05"
    assert normalize_date(" 2024/03/05 ") == "2024-03-05"
    assert normalize_date("not a date") == "not a date"
    assert normalize_date("") is None


@pytest.mark.parametrize("word", ["today", "now", "Today", "yesterday"])
def test_relative_date_words_are_kept_verbatim(word):
    assert normalize_date(word) == word
    assert date_sort_value(normalize_date(word)) is None


def test_date_sort_value_only_accepts_iso_dates():
    assert date_sort_value("2024-03-05").year == 2024
    assert date_sort_value("2024-13-40") is None
    assert date_sort_value("spring") is None
    assert date_sort_value(None) is None


def test_parse_year_range():
    assert parse_year("2019") == 2019
    assert parse_year("Spring 2021 issue") == 2021
    assert parse_year("1899") is None
    assert parse_year("in press") is None


def test_urls():
    assert http_url(" https://lab.example ") == "https://lab.example"
    assert http_url("lab.example") is None
    assert image_url("/img/a.png") is None
    assert image_url("/img/a.png", allow_root_relative=True) == "/img/a.png"


def test_orcid_and_doi():
    assert normalize_orcid("0000-0002-1825-009X") == "https://orcid.org/0000-0002-1825-009X"
    assert normalize_orcid("https://orcid.org/0000-0002-1825-0097") == (
        "https://orcid.org/0000-0002-1825-0097"
    )
    assert normalize_orcid("pending") == "pending"
    assert doi_url("10.1000/xyz") == "https://doi.org/10.1000/xyz"
    assert doi_url("https://doi.org/10.1000/xyz") == "https://doi.org/10.1000/xyz"
    assert doi_url(None) is None


def test_clean_text():
    assert clean_text(None) is None
    assert clean_text(" x ") == "x"
