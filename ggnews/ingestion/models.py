"""Data models for ingestion."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FeedItem(BaseModel):
    """Parsed RSS feed item."""

    title: str = Field("", description="Item title")
    link: Optional[str] = Field(None, description="Item URL")
    guid: Optional[str] = Field(None, description="Item GUID")
    published: Optional[datetime] = Field(None, description="Publication date (UTC)")
    content: str = Field("", description="Raw item content, may contain HTML")
    content_snippet: str = Field("", description="Plain-text snippet of the item")
    enclosure_url: Optional[str] = Field(None, description="First enclosure URL")
    source_name: str = Field(..., description="Source name")

    @property
    def identity(self) -> Optional[str]:
        """Stable identity of the item: its link, falling back to its GUID."""
        return self.link or self.guid or None


class FeedResult(BaseModel):
    """Result of fetching an RSS feed."""

    source_name: str = Field(..., description="Source name")
    source_url: str = Field(..., description="RSS feed URL")
    success: bool = Field(..., description="Whether fetch was successful")
    items: list[FeedItem] = Field(default_factory=list, description="Parsed feed items")
    error: Optional[str] = Field(None, description="Error message if failed")
    item_count: int = Field(0, description="Number of items in the feed")
