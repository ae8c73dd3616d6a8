"""Article model for fetched and manually authored news items."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from .base import DBModel

ARTICLE_STATUSES = ("pending", "approved", "rejected", "published")
CATEGORIES = ("patch", "tournament", "event", "roster", "meta", "update", "general")
REGIONS = ("india", "asia", "sea", "global")
DEFAULT_CATEGORY = "general"
DEFAULT_REGION = "global"

ArticleStatus = Literal["pending", "approved", "rejected", "published"]


class Article(DBModel):
    """News article model."""

    # Identity
    external_id: Optional[str] = Field(None, description="Feed GUID or URL")
    original_url: str = Field("", description="Source URL, dedup key for fetched articles")
    source_id: Optional[int] = Field(None, description="Foreign key to news_sources; None for manual articles")

    # Original content
    original_title: str = Field(..., description="Title as it appeared in the feed")
    original_content: Optional[str] = Field(None, description="Raw feed content")
    original_published_at: Optional[datetime] = Field(None, description="Feed publication timestamp")

    # Editable content
    title: str = Field(..., description="Display title")
    summary: Optional[str] = Field(None, description="Summary text")
    excerpt: Optional[str] = Field(None, description="Short excerpt for cards")
    thumbnail_url: Optional[str] = Field(None, description="Thumbnail image URL")

    # Classification
    game_slug: str = Field(..., description="Supported game slug")
    category: str = Field(DEFAULT_CATEGORY, description="Article category")
    region: str = Field(DEFAULT_REGION, description="Article region")
    tags: List[str] = Field(default_factory=list, description="Tags")
    ai_relevance_score: float = Field(0.0, description="Normalized relevance", ge=0.0, le=1.0)
    ai_processed: bool = Field(False, description="Whether an LLM rewrote or labeled the article")

    # Workflow
    status: ArticleStatus = Field("pending", description="Moderation status")
    rejection_reason: Optional[str] = Field(None, description="Reason given on rejection")
    is_featured: bool = Field(False, description="Featured flag")
    is_pinned: bool = Field(False, description="Pinned flag")
    moderated_by: Optional[str] = Field(None, description="Operator who last moderated the article")
    moderated_at: Optional[datetime] = Field(None, description="When the article was last moderated")
    published_at: Optional[datetime] = Field(None, description="When the article was first published")

    # Engagement
    views_count: int = Field(0, description="View counter")

    @property
    def is_fetched(self) -> bool:
        """Whether the article came from a feed source."""
        return self.source_id is not None
