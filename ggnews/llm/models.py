"""Structured LLM outputs."""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from ..models.article import CATEGORIES, DEFAULT_CATEGORY, DEFAULT_REGION, REGIONS

MAX_TITLE_CHARS = 120
MAX_EXCERPT_CHARS = 200
MAX_TAGS = 5


class ArticleRewrite(BaseModel):
    """Rewritten headline, summary and card excerpt."""

    title: str = Field(..., description="Headline")
    summary: str = Field("", description="Two to three paragraph summary")
    excerpt: str = Field("", description="One sentence excerpt")

    @field_validator("title")
    @classmethod
    def clip_title(cls, v: str) -> str:
        return v.strip()[:MAX_TITLE_CHARS]

    @field_validator("excerpt")
    @classmethod
    def clip_excerpt(cls, v: str) -> str:
        return v.strip()[:MAX_EXCERPT_CHARS]


class ArticleLabels(BaseModel):
    """Category, region and freeform tags.

    Values outside the known enums fall back to the defaults instead of
    failing validation.
    """

    category: str = Field(DEFAULT_CATEGORY, description="Article category")
    region: str = Field(DEFAULT_REGION, description="Article region")
    tags: List[str] = Field(default_factory=list, description="Lowercase hyphenated tags")

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> str:
        v = v.strip().lower() if isinstance(v, str) else v
        return v if v in CATEGORIES else DEFAULT_CATEGORY

    @field_validator("region", mode="before")
    @classmethod
    def coerce_region(cls, v: Any) -> str:
        v = v.strip().lower() if isinstance(v, str) else v
        return v if v in REGIONS else DEFAULT_REGION

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: Any) -> List[str]:
        if not isinstance(v, list):
            return []
        tags = []
        for tag in v:
            if isinstance(tag, str) and tag.strip():
                tags.append("-".join(tag.strip().lower().split()))
        return tags[:MAX_TAGS]
