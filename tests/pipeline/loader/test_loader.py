"""Tests for FeedLoader: error surface, diagnostics and reload ordering."""

import asyncio

import pytest

from labsite.exceptions import FeedParseError, FeedTransportError
from labsite.pipeline.content import NEWS, PEOPLE
from labsite.pipeline.loader import FeedConfig, FeedLoader, FetchResponse
from labsite.pipeline.loader import loader as loader_mod

URL = "https://x/feed.csv"


def _config():
    return FeedConfig({"news": URL, "people": URL})


def _fetch_text(text, status=200):
    async def fetch(url):
        return FetchResponse(status, text)

    return fetch


@pytest.mark.asyncio
async def test_missing_url_fails_before_fetching():
    calls = []

    async def fetch(url):
        calls.append(url)
        return FetchResponse(200, "")

    loader = FeedLoader(NEWS, FeedConfig(), fetch=fetch)
    result = await loader.load()
    assert result.error == "NEWS_SHEET_CSV_URL is not set."
    assert result.records == ()
    assert result.diagnostics.url is None
    assert calls == []


@pytest.mark.asyncio
async def test_successful_load_fills_diagnostics():
    loader = FeedLoader(NEWS, _config(), fetch=_fetch_text("ID;Title\n1;Hello\n2;\n"))
    result = await loader.load()
    assert result.ok
    assert [n.title for n in result.records] == ["Hello"]
    diag = result.diagnostics
    assert diag.url == URL
    assert diag.status == 200
    assert diag.delimiter == ";"
    assert diag.delimiter_reason == "Semicolon delimiter detected in header"
    assert diag.header_line == "ID;Title"
    assert diag.parsed_fields == ("id", "title")
    assert loader.records == result.records


@pytest.mark.asyncio
async def test_header_line_is_truncated():
    header = "id," + "x" * 300
    loader = FeedLoader(NEWS, _config(), fetch=_fetch_text(header + "\n"))
    result = await loader.load()
    assert len(result.diagnostics.header_line) == 200


@pytest.mark.asyncio
async def test_http_error_clears_records_and_keeps_status():
    responses = iter([FetchResponse(200, "id,title\n1,A\n")])

    async def fetch(url):
        try:
            return next(responses)
        except StopIteration:
            raise FeedTransportError("HTTP 500", status=500) from None

    loader = FeedLoader(NEWS, _config(), fetch=fetch)
    assert (await loader.load()).ok
    result = await loader.load()
    assert result.error == "HTTP 500"
    assert result.diagnostics.status == 500
    assert loader.records == ()


@pytest.mark.asyncio
async def test_parse_error_reports_message(monkeypatch):
    import labsite.pipeline.loader.loader as loader_mod

    def boom(text):
        raise FeedParseError("Error tokenizing data")

    monkeypatch.setattr(loader_mod, "parse_feed_text", boom)
    result = await FeedLoader(NEWS, _config(), fetch=_fetch_text("x")).load()
    assert result.error == "Error tokenizing data"
    assert result.diagnostics.status == 200


@pytest.mark.asyncio
async def test_unexpected_error_uses_generic_message():
    async def fetch(url):
        raise RuntimeError()

    result = await FeedLoader(PEOPLE, _config(), fetch=fetch).load()
    assert result.error == "Unknown error while loading People sheet."


@pytest.mark.asyncio
async def test_newest_load_wins_over_slower_earlier_load():
    first_release = asyncio.Event()
    payloads = iter(["id,title\n1,First\n", "id,title\n2,Second\n"])

    async def fetch(url):
        text = next(payloads)
        if "First" in text:
            await first_release.wait()
        return FetchResponse(200, text)

    loader = FeedLoader(NEWS, _config(), fetch=fetch)
    first = asyncio.create_task(loader.load())
    await asyncio.sleep(0)
    second = await loader.load()
    assert [n.title for n in loader.records] == ["Second"]
    first_release.set()
    stale = await first
    assert [n.title for n in stale.records] == ["First"]
    assert loader.current is second
    assert [n.title for n in loader.records] == ["Second"]


@pytest.mark.asyncio
async def test_close_discards_in_flight_result():
    release = asyncio.Event()

    async def fetch(url):
        await release.wait()
        return FetchResponse(200, "id,title\n1,A\n")

    loader = FeedLoader(NEWS, _config(), fetch=fetch)
    task = asyncio.create_task(loader.load())
    await asyncio.sleep(0)
    loader.close()
    release.set()
    await task
    assert loader.records == ()


@pytest.mark.asyncio
async def test_injected_fetcher_never_builds_http_client(monkeypatch):
    def no_client(config):
        raise AssertionError("FeedClient should not be constructed")

    monkeypatch.setattr(loader_mod, "FeedClient", no_client)
    loader = FeedLoader(NEWS, _config(), fetch=_fetch_text("id,title\n1,A\n"))
    result = await loader.load()
    assert result.ok
    assert [r.title for r in result.records] == ["A"]


@pytest.mark.asyncio
async def test_default_fetch_builds_one_client_on_first_use(monkeypatch):
    built = []
    shared_session = object()

    class RecordingClient:
        def __init__(self, config):
            built.append(config)

        async def fetch_text(self, session, url):
            assert session is shared_session
            return FetchResponse(200, "id,title\n1,A\n")

    monkeypatch.setattr(loader_mod, "FeedClient", RecordingClient)
    config = _config()
    loader = FeedLoader(NEWS, config, session=shared_session)
    assert built == []
    await loader.load()
    result = await loader.load()
    assert result.ok
    assert built == [config]
