"""RSS ingestion."""

from .html import extract_image_url, html_to_text
from .models import FeedItem, FeedResult
from .rss_fetcher import RSSFetcher

__all__ = [
    "RSSFetcher",
    "FeedItem",
    "FeedResult",
    "extract_image_url",
    "html_to_text",
]
