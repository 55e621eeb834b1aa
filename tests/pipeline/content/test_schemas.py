"""Tests for content type schemas: aliases, builders and base ordering."""

import pytest

from labsite.pipeline.content import (
    NEWS,
    PEOPLE,
    PROJECTS,
    PUBLICATIONS,
    RESOURCES,
    SCHEMAS,
    FileItem,
    Person,
    get_schema,
    person_group,
)
from labsite.pipeline.feeds import normalize_feed, parse_feed_text


def _load(text, schema):
    return normalize_feed(parse_feed_text(text), schema)


def test_schema_registry():
    assert set(SCHEMAS) == {"people", "projects", "publications", "resources", "news"}
    assert get_schema("news") is NEWS
    with pytest.raises(KeyError):
        get_schema("events")


def test_people_aliases_and_fields():
    text = (
        "ID,Name,Role,Status,Interests,Methods,Photo,Site,ORCID,Email,Order\n"
        "p1,Kim Minji,PI,Faculty,SLA; corpus,eye-tracking,https://x/p.jpg,"
        "https://kim.example,0000-0002-1825-009X,kim@example.org,1\n"
    )
    (person,) = _load(text, PEOPLE)
    assert person.interests == ("SLA", "corpus")
    assert person.methods == ("eye-tracking",)
    assert person.photo_url == "https://x/p.jpg"
    assert person.website == "https://kim.example"
    assert person.orcid == "https://orcid.org/0000-0002-1825-009X"
    assert person.order == 1.0


def test_people_sorted_by_order_then_name_and_grouped_by_status():
    people = _load("id,name,order,status\n1,bo,,\n2,Ahn,,Alumni\n3,Cho,0,\n", PEOPLE)
    assert [p.name for p in people] == ["Cho", "Ahn", "bo"]
    assert person_group(people[0]) == "People"
    assert person_group(people[1]) == "Alumni"


def test_projects_dates_and_root_relative_image():
    text = (
        "id,title,desc,tag,start,end,link,github,image\n"
        "x,Parser,Builds *trees*,nlp|syntax,2023/3/1,,https://p.example,"
        "https://github.com/lab/p,/img/p.png\n"
    )
    (project,) = _load(text, PROJECTS)
    assert project.description == "Builds *trees*"
    assert project.tags == ("nlp", "syntax")
    assert project.start_date == "2023-03-01"
    assert project.end_date is None
    assert project.repo == "https://github.com/lab/p"
    assert project.image_url == "/img/p.png"


def test_publications_korean_headers_doi_fallback_and_ordering():
    text = (
        "id,title,author,년도,저널,doi,초록\n"
        "a,Older,Kim,2019,JSLA,10.1/old,Abstract A\n"
        "b,Newer,Lee,2023,JSLA,,\n"
        "c,Undated,Park,in press,,,\n"
    )
    pubs = _load(text, PUBLICATIONS)
    assert [p.id for p in pubs] == ["b", "a", "c"]
    older = pubs[1]
    assert older.year == 2019
    assert older.venue_label == "JSLA"
    assert older.url == "https://doi.org/10.1/old"
    assert older.abstract == "Abstract A"
    assert pubs[2].year is None


def test_publication_explicit_url_wins_over_doi():
    (pub,) = _load("id,title,url,doi\n1,T,https://pub.example,10.1/x\n", PUBLICATIONS)
    assert pub.url == "https://pub.example"


def test_resources_korean_headers_and_categories():
    text = (
        "id,title,설명,카테고리,태그,자료,날짜\n"
        "r1,Intro to pandas,Notebook,Tool,python data,Notebook::https://x/n.ipynb,2024-02-01\n"
    )
    (resource,) = _load(text, RESOURCES)
    assert resource.description == "Notebook"
    assert resource.categories == ("python",)
    assert resource.tags == ("python", "data")
    assert resource.files == (FileItem("Notebook", "https://x/n.ipynb"),)
    assert resource.created_at == "2024-02-01"
    assert RESOURCES.categories(resource) == ("python",)


def test_news_newest_first_then_title():
    text = "id,title,createdAt\n1,B,2024-01-01\n2,A,2024-01-01\n3,C,2025-06-01\n4,D,\n"
    news = _load(text, NEWS)
    assert [n.id for n in news] == ["3", "2", "1", "4"]


def test_search_text_covers_type_specific_fields():
    person = Person("1", "Kim", role="PI", interests=("corpus",), methods=("ERP",))
    text = PEOPLE.search_text(person)
    assert "corpus" in text and "ERP" in text and "PI" in text
