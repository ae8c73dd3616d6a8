"""Article classifiers: keyword-only and LLM-assisted."""

import hashlib
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, Field

from ..cache import Cache, MemoryCache
from ..llm.models import ArticleLabels, ArticleRewrite
from ..llm.provider import LLMProvider
from .relevance import GameMatch, detect_game
from .tagger import build_tags, detect_category, detect_region

logger = logging.getLogger(__name__)


class Classification(BaseModel):
    """Everything the pipeline derives about an accepted article."""

    game_slug: str = Field(..., description="Supported game slug")
    score: int = Field(..., description="Raw keyword score")
    relevance: float = Field(..., description="Normalized relevance", ge=0.0, le=1.0)
    category: str = Field(..., description="Article category")
    region: str = Field(..., description="Article region")
    tags: List[str] = Field(default_factory=list)
    title: Optional[str] = Field(None, description="Rewritten title, if any")
    summary: Optional[str] = Field(None, description="Rewritten summary, if any")
    excerpt: Optional[str] = Field(None, description="Rewritten excerpt, if any")
    ai_processed: bool = Field(False, description="Whether an LLM contributed")


class TextClassifier(ABC):
    """Decide whether an article belongs to a supported game and label it."""

    @abstractmethod
    def classify(
        self,
        title: str,
        content: str,
        region_override: Optional[str] = None,
    ) -> Optional[Classification]:
        """
        Classify an article.

        Args:
            title: Article title
            content: Plain-text snippet or content
            region_override: Region forced by the source, wins over detection

        Returns:
            Classification, or None when the article is not about a supported game
        """
        pass


class KeywordTextClassifier(TextClassifier):
    """Deterministic classifier built only from the keyword tables."""

    def classify(
        self,
        title: str,
        content: str,
        region_override: Optional[str] = None,
    ) -> Optional[Classification]:
        text = f"{title} {content}"
        match = detect_game(text)
        if match is None:
            return None

        region = detect_region(text, region_override)
        category = detect_category(text)

        return Classification(
            game_slug=match.slug,
            score=match.score,
            relevance=match.relevance,
            category=category,
            region=region,
            tags=build_tags(category, region),
        )


class LLMTextClassifier(TextClassifier):
    """Keyword game gate followed by LLM labeling and optional rewriting.

    The game decision stays with the keyword scorer; the model only picks
    category, region and tags, and rewrites the text when ``summarize`` is on.
    Provider answers are cached per article text.
    """

    def __init__(
        self,
        provider: LLMProvider,
        cache: Optional[Cache] = None,
        summarize: bool = False,
    ) -> None:
        """
        Initialize LLM classifier.

        Args:
            provider: LLM provider
            cache: Cache for provider answers (defaults to a private MemoryCache)
            summarize: Also rewrite title, summary and excerpt
        """
        self.provider = provider
        self.cache = cache if cache is not None else MemoryCache()
        self.summarize = summarize

    def _cache_key(self, title: str, content: str, game_slug: str) -> str:
        digest = hashlib.sha256(f"{game_slug}\n{title}\n{content}".encode()).hexdigest()
        return f"llm:{int(self.summarize)}:{digest}"

    def _ask_model(self, title: str, content: str, match: GameMatch) -> dict:
        key = self._cache_key(title, content, match.slug)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        rewrite: Optional[ArticleRewrite] = None
        if self.summarize:
            rewrite = self.provider.summarize(title, content, match.slug)

        labels = self.provider.classify(
            rewrite.title if rewrite else title,
            rewrite.summary if rewrite and rewrite.summary else content,
            match.slug,
        )

        answer = {"rewrite": rewrite, "labels": labels}
        self.cache.set(key, answer)
        return answer

    def classify(
        self,
        title: str,
        content: str,
        region_override: Optional[str] = None,
    ) -> Optional[Classification]:
        match = detect_game(f"{title} {content}")
        if match is None:
            return None

        answer = self._ask_model(title, content, match)
        labels: ArticleLabels = answer["labels"]
        rewrite: Optional[ArticleRewrite] = answer["rewrite"]

        region = region_override or labels.region
        category = labels.category

        classification = Classification(
            game_slug=match.slug,
            score=match.score,
            relevance=match.relevance,
            category=category,
            region=region,
            tags=build_tags(category, region, labels.tags),
            ai_processed=True,
        )
        if rewrite is not None:
            classification.title = rewrite.title
            classification.summary = rewrite.summary or None
            classification.excerpt = rewrite.excerpt or None
        return classification
