"""Article list filters used by the moderation gateway."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .article import Article


class ArticleQuery(BaseModel):
    """Filter, search and pagination for article listings."""

    status: Optional[str] = Field(None, description="Exact status")
    game: Optional[str] = Field(None, description="Exact game slug")
    category: Optional[str] = Field(None, description="Exact category")
    region: Optional[str] = Field(None, description="Exact region")
    search: Optional[str] = Field(None, description="Case-insensitive substring of title or original title")
    source_type: Optional[Literal["manual", "fetched"]] = Field(
        None,
        description="manual: unsourced or approved/published; fetched: sourced and pending/rejected",
    )
    limit: int = Field(20, ge=1, le=100)
    offset: int = Field(0, ge=0)


class ArticlePage(BaseModel):
    """One page of articles with the exact total count."""

    articles: List[Article] = Field(default_factory=list)
    total: int = Field(0, description="Total matching articles")
    limit: int
    offset: int
