"""Tests for RSS feed fetching and parsing."""

from datetime import datetime, timezone

import httpx

from ggnews.ingestion import RSSFetcher, extract_image_url, html_to_text
from ggnews.models import Source

from .fakes import rss_feed, rss_item

FEED_URL = "https://news.example.com/feed"
SOURCE = Source(id=1, name="Example", url=FEED_URL)


def test_parses_items(feeds, fetcher):
    feeds.routes[FEED_URL] = rss_feed(
        rss_item(
            "Valorant Patch 8.11 notes",
            link="https://news.example.com/valorant-8-11",
            guid="val-811",
            description="<p>Agent changes for <b>Jett</b></p>",
            content='<p>Full notes</p><img src="https://cdn.example.com/jett.jpg">',
            enclosure="https://cdn.example.com/cover.jpg",
        ),
        rss_item("Second story", link="https://news.example.com/second"),
    )

    result = fetcher.fetch_feed(SOURCE)

    assert result.success
    assert result.error is None
    assert result.item_count == 2
    first = result.items[0]
    assert first.title == "Valorant Patch 8.11 notes"
    assert first.link == "https://news.example.com/valorant-8-11"
    assert first.guid == "val-811"
    assert first.identity == "https://news.example.com/valorant-8-11"
    assert first.content_snippet == "Agent changes for Jett"
    assert "<img" in first.content
    assert first.enclosure_url == "https://cdn.example.com/cover.jpg"
    assert first.published == datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)
    assert first.source_name == "Example"
    assert result.items[1].title == "Second story"


def test_sends_user_agent(feeds, fetcher):
    feeds.routes[FEED_URL] = rss_feed()

    fetcher.fetch_feed(SOURCE)

    assert feeds.requests[0].headers["User-Agent"] == "ggLobby-NewsBot/1.0"


def test_empty_feed_succeeds(feeds, fetcher):
    feeds.routes[FEED_URL] = rss_feed()

    result = fetcher.fetch_feed(SOURCE)

    assert result.success
    assert result.items == []


def test_timeout_is_reported(feeds, fetcher):
    feeds.routes[FEED_URL] = httpx.ReadTimeout("timed out")

    result = fetcher.fetch_feed(SOURCE)

    assert not result.success
    assert result.error == "Request timed out after 15s"
    assert result.items == []


def test_http_error_status_is_reported(feeds, fetcher):
    feeds.routes[FEED_URL] = 500

    result = fetcher.fetch_feed(SOURCE)

    assert not result.success
    assert result.error == "HTTP 500"


def test_connection_error_is_reported(feeds, fetcher):
    feeds.routes[FEED_URL] = httpx.ConnectError("connection refused")

    result = fetcher.fetch_feed(SOURCE)

    assert not result.success
    assert result.error.startswith("HTTP error:")


def test_malformed_feed_is_reported(feeds, fetcher):
    feeds.routes[FEED_URL] = b"Service temporarily unavailable"

    result = fetcher.fetch_feed(SOURCE)

    assert not result.success
    assert result.error.startswith("Invalid RSS feed")


def test_custom_timeout_in_message(feeds):
    feeds.routes[FEED_URL] = httpx.ConnectTimeout("slow")
    fetcher = RSSFetcher(timeout=2.5, transport=feeds.transport)

    result = fetcher.fetch_feed(SOURCE)

    assert result.error == "Request timed out after 2.5s"


def test_html_helpers():
    html = '<div><p>Hello   <b>world</b></p><img alt="x"><img src="/a.png"></div>'
    assert html_to_text(html) == "Hello world"
    assert extract_image_url(html) == "/a.png"
    assert extract_image_url("<p>no images</p>") is None
    assert html_to_text("") == ""
