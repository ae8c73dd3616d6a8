"""RSS feed fetcher."""

import calendar
import logging
from datetime import datetime
from typing import Any, Optional

import feedparser
import httpx
import pendulum

from ..models import Source
from .html import html_to_text
from .models import FeedItem, FeedResult

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "ggLobby-NewsBot/1.0"


def _parse_timestamp(parsed: Any) -> Optional[datetime]:
    """Convert a feedparser UTC time tuple to an aware datetime."""
    if not parsed:
        return None
    try:
        return pendulum.from_timestamp(calendar.timegm(parsed))
    except (TypeError, ValueError, OverflowError):
        return None


class RSSFetcher:
    """Fetch and parse RSS feeds."""

    def __init__(
        self,
        timeout: float = 15.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize RSS fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with every request
            transport: Optional httpx transport (used to stub the network in tests)
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            follow_redirects=True,
            headers={
                "User-Agent": self.user_agent,
                "Accept": "application/rss+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8",
            },
            transport=self.transport,
        )

    def _parse_entry(self, entry: Any, source_name: str) -> FeedItem:
        """Build a FeedItem from a feedparser entry."""
        content = ""
        if entry.get("content"):
            content = entry.content[0].get("value", "") or ""
        summary = entry.get("summary", "") or ""
        if not content:
            content = summary

        enclosure_url = None
        for enclosure in entry.get("enclosures", []):
            href = enclosure.get("href") or enclosure.get("url")
            if href:
                enclosure_url = href
                break

        return FeedItem(
            title=(entry.get("title") or "").strip(),
            link=entry.get("link") or None,
            guid=entry.get("id") or None,
            published=_parse_timestamp(
                entry.get("published_parsed") or entry.get("updated_parsed")
            ),
            content=content,
            content_snippet=html_to_text(summary or content),
            enclosure_url=enclosure_url,
            source_name=source_name,
        )

    def fetch_feed(self, source: Source) -> FeedResult:
        """Fetch and parse a single RSS feed.

        Never raises: every failure is reported through ``FeedResult.error``.
        """
        try:
            with self._client() as client:
                response = client.get(source.url)
                response.raise_for_status()

            feed = feedparser.parse(response.content)

            if feed.bozo and not feed.entries:
                return FeedResult(
                    source_name=source.name,
                    source_url=source.url,
                    success=False,
                    error=f"Invalid RSS feed: {feed.get('bozo_exception', 'unparseable document')}",
                )

            items = [self._parse_entry(entry, source.name) for entry in feed.entries]

            return FeedResult(
                source_name=source.name,
                source_url=source.url,
                success=True,
                items=items,
                item_count=len(items),
            )

        except httpx.TimeoutException:
            return FeedResult(
                source_name=source.name,
                source_url=source.url,
                success=False,
                error=f"Request timed out after {self.timeout:g}s",
            )
        except httpx.HTTPStatusError as e:
            return FeedResult(
                source_name=source.name,
                source_url=source.url,
                success=False,
                error=f"HTTP {e.response.status_code}",
            )
        except httpx.HTTPError as e:
            return FeedResult(
                source_name=source.name,
                source_url=source.url,
                success=False,
                error=f"HTTP error: {e}",
            )
        except Exception as e:
            logger.exception("Unexpected error fetching %s", source.url)
            return FeedResult(
                source_name=source.name,
                source_url=source.url,
                success=False,
                error=f"Unexpected error: {e}",
            )
