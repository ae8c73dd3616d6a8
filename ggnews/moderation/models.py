"""Input models for operator-authored changes."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..classification.keywords import SUPPORTED_GAMES
from ..models.article import ARTICLE_STATUSES, CATEGORIES, REGIONS


class ArticleDraft(BaseModel):
    """A manually authored article."""

    title: str = Field(..., description="Display title")
    game_slug: str = Field(..., description="Supported game slug")
    summary: Optional[str] = None
    excerpt: Optional[str] = None
    thumbnail_url: Optional[str] = None
    original_url: str = ""
    category: str = "general"
    region: str = "india"
    tags: List[str] = Field(default_factory=list)
    is_featured: bool = False
    is_pinned: bool = False
    status: str = "published"

    @field_validator("title")
    @classmethod
    def require_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("summary", "excerpt", "thumbnail_url")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("original_url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        return v.strip()

    @field_validator("game_slug")
    @classmethod
    def validate_game(cls, v: str) -> str:
        if v not in SUPPORTED_GAMES:
            raise ValueError(f"Unsupported game '{v}'")
        return v

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        if v not in CATEGORIES:
            raise ValueError(f"Unknown category '{v}'")
        return v

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        if v not in REGIONS:
            raise ValueError(f"Unknown region '{v}'")
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in ARTICLE_STATUSES:
            raise ValueError(f"Unknown status '{v}'")
        return v
