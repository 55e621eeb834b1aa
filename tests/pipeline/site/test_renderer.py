"""Tests for HTML rendering of pages, cards and error panels."""

import math

import pytest

from labsite.config import HOME_SECTIONS, PAGE_BLURBS, PAGE_FILENAMES, PAGE_TEMPLATE_PATH
from labsite.pipeline.content import (
    PEOPLE,
    PUBLICATIONS,
    RESOURCES,
    Person,
    Publication,
    Resource,
)
from labsite.pipeline.feeds import FileItem
from labsite.pipeline.loader import FeedDiagnostics, LoadResult
from labsite.pipeline.site import renderer


def test_clean_html_output():
    assert renderer.clean_html_output("<p></p><h1>Hi</h1>\n <p>&nbsp;</p>") == "<h1>Hi</h1>"
    with pytest.raises(TypeError):
        renderer.clean_html_output(None)


def test_markdown_is_rendered_and_raw_html_escaped():
    html = renderer.markdown_to_html("**bold** <script>alert(1)</script>")
    assert "<strong>bold</strong>" in html
    assert "<script>" not in html
    assert renderer.markdown_to_html(None) == ""


def test_nav_marks_active_page():
    nav = renderer.render_nav("people", "Lab & Co")
    assert 'href="people.html" class="active"' in nav
    assert "Lab &amp; Co" in nav
    assert nav.index("people.html") < nav.index("publications.html") < nav.index("resources.html")


def test_resource_cards_carry_search_and_category_attributes():
    record = Resource(
        "r1",
        'Pandas "intro"',
        description="Load *CSV*",
        categories=("python",),
        files=(FileItem("Notebook", "https://x/n.ipynb"),),
    )
    view_counts = {"all": 1, "python": 1, "lecture": 0, "article": 0}
    body = renderer.render_feed_body(RESOURCES, LoadResult(records=(record,)), view_counts)
    assert 'data-categories="python"' in body
    assert 'data-search="pandas &quot;intro&quot; load *csv* python code notebook"' in body
    assert 'data-tab="python" data-match="python"' in body
    assert 'data-tab="all" data-match=""' in body
    assert "Python code (1)" in body
    assert "<em>CSV</em>" in body
    assert 'href="https://x/n.ipynb"' in body
    assert 'id="no-results"' in body


def test_people_page_groups_by_status():
    people = (Person("1", "Kim", status="Faculty"), Person("2", "Lee"))
    body = renderer.render_feed_body(PEOPLE, LoadResult(records=people), {"all": 2})
    assert body.count('<section class="group">') == 2
    assert body.index("<h2>Faculty</h2>") < body.index("<h2>People</h2>")
    assert 'class="tabs"' not in body


def test_failed_feed_renders_error_panel_with_diagnostics():
    result = LoadResult(
        error="HTTP 404",
        diagnostics=FeedDiagnostics(url="https://x/p.csv", status=404),
    )
    body = renderer.render_feed_body(PUBLICATIONS, result, {"all": 0})
    assert 'class="error"' in body
    assert "HTTP 404" in body
    assert "https://x/p.csv" in body
    assert "<td>Status</td><td><code>404</code></td>" in body


def test_empty_feed_renders_no_results():
    body = renderer.render_feed_body(PUBLICATIONS, LoadResult(), {"all": 0})
    assert "No results." in body
    assert 'id="search"' not in body


def test_feed_page_carries_records_only_as_escaped_cards():
    pub = Publication("1", "</script><b>x</b>", order=math.inf)
    body = renderer.render_feed_body(PUBLICATIONS, LoadResult(records=[pub]), {"all": 1})
    html = renderer.generate_page_html(PAGE_TEMPLATE_PATH, "Publications", "<nav></nav>", body)
    assert "&lt;/script&gt;&lt;b&gt;x&lt;/b&gt;" in html
    assert "<b>x</b>" not in html
    assert 'type="application/json"' not in html


def test_generate_page_html_fills_placeholders():
    html = renderer.generate_page_html(
        PAGE_TEMPLATE_PATH, "News | <Lab>", "<nav></nav>", "<p>body</p>"
    )
    assert "<title>News | &lt;Lab&gt;</title>" in html
    assert "<p>body</p>" in html
    for placeholder in ("{page_title}", "{nav_html}", "{body_html}", "{records_json}"):
        assert placeholder not in html


def test_write_html_output(tmp_path):
    target = tmp_path / "nested" / "index.html"
    assert renderer.write_html_output("<html></html>", target) is True
    assert target.read_text(encoding="utf-8") == "<html></html>"


def test_write_html_output_failure_returns_false(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    assert renderer.write_html_output("<html></html>", blocker / "index.html") is False


def test_home_lists_configured_sections_in_order(monkeypatch):
    html = renderer.render_home("Lab", "Desc")
    positions = [html.index(f'href="{PAGE_FILENAMES[name]}"') for name in HOME_SECTIONS]
    assert positions == sorted(positions)
    for name in HOME_SECTIONS:
        assert PAGE_BLURBS[name] in html

    monkeypatch.setattr(renderer, "HOME_SECTIONS", ("news",))
    html = renderer.render_home("Lab", "Desc")
    assert 'href="news.html"' in html
    assert 'href="people.html"' not in html
