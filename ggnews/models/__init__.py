"""Data models for ggnews."""

from .article import (
    ARTICLE_STATUSES,
    CATEGORIES,
    DEFAULT_CATEGORY,
    DEFAULT_REGION,
    REGIONS,
    Article,
)
from .fetch_log import FetchLog
from .query import ArticlePage, ArticleQuery
from .source import Source

__all__ = [
    "ARTICLE_STATUSES",
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "DEFAULT_REGION",
    "REGIONS",
    "Article",
    "ArticlePage",
    "ArticleQuery",
    "FetchLog",
    "Source",
]
