"""Tests for the schema-driven record normalizer."""

import math

from labsite.pipeline.content import NEWS, PEOPLE, RESOURCES
from labsite.pipeline.feeds import normalize_feed, normalize_rows, parse_feed_text


def test_rows_without_id_or_label_are_dropped():
    rows = [
        {"id": "1", "name": "Kim"},
        {"id": "", "name": "No id"},
        {"id": "3", "name": "   "},
        {"id": " 4 ", "name": " Lee "},
    ]
    people = normalize_rows(rows, ["id", "name"], PEOPLE)
    assert [(p.id, p.name) for p in people] == [("1", "Kim"), ("4", "Lee")]


def test_every_kept_record_has_id_and_label():
    parsed = parse_feed_text("id,title\n1,A\n,B\n3,\n4,D\n")
    records = normalize_feed(parsed, NEWS)
    assert records
    assert all(r.id.strip() and r.label.strip() for r in records)


def test_missing_order_sorts_last():
    parsed = parse_feed_text("id,name,order\na,Zed,2\nb,Amy,\nc,Bob,1\nd,Cat,x\n")
    people = normalize_feed(parsed, PEOPLE)
    assert [p.id for p in people] == ["c", "a", "b", "d"]
    assert math.isinf(people[-1].order)


def test_duplicate_ids_are_kept():
    parsed = parse_feed_text("id,title\n1,A\n1,B\n")
    assert [r.title for r in normalize_feed(parsed, NEWS)] == ["A", "B"]


def test_resources_newest_first_with_stable_ties_and_invalid_dates_last():
    parsed = parse_feed_text(
        "id,title,date\n"
        "1,Old,2020-01-01\n"
        "2,Undated,\n"
        "3,New,2024-05-01\n"
        "4,Also new,2024-05-01\n"
        "5,Vague,someday\n"
    )
    resources = normalize_feed(parsed, RESOURCES)
    assert [r.id for r in resources] == ["3", "4", "1", "2", "5"]
    assert resources[-1].created_at == "someday"
