"""LLM provider interface and implementations."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from openai import OpenAI

from ..classification.keywords import GAME_DISPLAY_NAMES, REGION_KEYWORDS
from .models import ArticleLabels, ArticleRewrite

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are a gaming news editor for an Indian gaming community platform. "
    "Write concise, factual summaries. Avoid clickbait. Focus on what matters "
    "to competitive gamers in India and Asia."
)

CLASSIFY_SYSTEM_PROMPT = (
    "You are a news classifier for a gaming platform. Be precise with "
    "categorization. Prioritize India/Asia region detection."
)


def fallback_rewrite(title: str, content: str) -> ArticleRewrite:
    """Deterministic rewrite used when the model cannot be reached or parsed."""
    return ArticleRewrite(
        title=title,
        summary=(content or "")[:500],
        excerpt=title[:200],
    )


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations never raise from ``summarize`` or ``classify``; they return
    deterministic fallbacks instead.
    """

    @abstractmethod
    def summarize(self, title: str, content: str, game_slug: str) -> ArticleRewrite:
        """
        Rewrite an article for the platform audience.

        Args:
            title: Original title
            content: Original content
            game_slug: Detected game

        Returns:
            Rewritten title, summary and excerpt
        """
        pass

    @abstractmethod
    def classify(self, title: str, summary: str, game_slug: str) -> ArticleLabels:
        """
        Classify an article into category, region and tags.

        Args:
            title: Article title
            summary: Article summary or content
            game_slug: Detected game

        Returns:
            Validated labels
        """
        pass

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI implementation of LLM provider, using JSON mode."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[Any] = None,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model name to use
            base_url: Custom base URL
            timeout: Request timeout in seconds
            client: Preconfigured OpenAI-compatible client
        """
        self.client = client or OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self.model = model
        self.total_tokens = 0
        self.api_calls = 0
        self.failures = 0

    def _complete_json(self, system: str, prompt: str, max_tokens: int) -> Dict[str, Any]:
        """Run a chat completion in JSON mode and decode the object."""
        self.api_calls += 1
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=0.2,
            max_tokens=max_tokens,
        )

        if response.usage:
            self.total_tokens += response.usage.total_tokens

        data = json.loads(response.choices[0].message.content or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        return data

    def summarize(self, title: str, content: str, game_slug: str) -> ArticleRewrite:
        """Rewrite article using OpenAI."""
        game = GAME_DISPLAY_NAMES.get(game_slug, game_slug)
        prompt = f"""Rewrite this gaming news article for an Indian gaming community audience.

Original Title: {title}
Game: {game}
Original Content (first 2000 chars): {(content or title)[:2000]}

Instructions:
1. Write a concise, engaging headline (max 120 chars). Keep it informative, not clickbait.
2. Write a 2-3 paragraph summary focusing on what matters to Indian/Asian competitive gamers.
3. Write a one-sentence excerpt (max 200 chars) for card display.

India/Asia relevance keywords to check for: {", ".join(REGION_KEYWORDS)}

Respond in JSON format:
{{"title": "...", "summary": "...", "excerpt": "..."}}"""

        try:
            data = self._complete_json(SUMMARY_SYSTEM_PROMPT, prompt, max_tokens=500)
            if not str(data.get("title") or "").strip():
                data["title"] = title
            return ArticleRewrite.model_validate(data)
        except Exception as e:
            self.failures += 1
            logger.warning("LLM summarization failed for '%s': %s", title, e)
            return fallback_rewrite(title, content)

    def classify(self, title: str, summary: str, game_slug: str) -> ArticleLabels:
        """Classify article using OpenAI."""
        game = GAME_DISPLAY_NAMES.get(game_slug, game_slug)
        prompt = f"""Classify this gaming news article.

Title: {title}
Game: {game}
Summary: {(summary or "")[:2000]}

Categories (pick exactly one):
- patch: Game patches, balance changes, bug fixes, new agent/character releases
- tournament: Tournament announcements, results, brackets, qualifiers
- event: In-game events, limited-time modes, seasonal events, collaborations
- update: Game updates, new features, new maps, new modes (not balance patches)
- roster: Team roster changes, player transfers, org announcements
- meta: Meta analysis, tier lists, strategy discussions
- general: Everything else

Regions (pick the most relevant):
- india: Specifically about Indian esports/gaming scene
- asia: About Asian esports (Japan, Korea, SEA, China, Pacific)
- sea: Southeast Asia specifically
- global: International or no specific region

Also generate 2-5 relevant tags (lowercase, hyphenated).

Respond in JSON format:
{{"category": "...", "region": "...", "tags": ["tag-1", "tag-2"]}}"""

        try:
            data = self._complete_json(CLASSIFY_SYSTEM_PROMPT, prompt, max_tokens=150)
            return ArticleLabels.model_validate(data)
        except Exception as e:
            self.failures += 1
            logger.warning("LLM classification failed for '%s': %s", title, e)
            return ArticleLabels()

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "failures": self.failures,
            "model": self.model,
        }


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for offline runs and tests."""

    def __init__(self, labels: Optional[ArticleLabels] = None) -> None:
        """Initialize mock provider."""
        self.labels = labels or ArticleLabels(tags=["mock"])
        self.calls: List[Tuple[str, str]] = []

    def summarize(self, title: str, content: str, game_slug: str) -> ArticleRewrite:
        """Mock summarization."""
        self.calls.append(("summarize", title))
        return ArticleRewrite(
            title=title,
            summary=f"Mock summary of '{title[:50]}'",
            excerpt=title,
        )

    def classify(self, title: str, summary: str, game_slug: str) -> ArticleLabels:
        """Mock classification."""
        self.calls.append(("classify", title))
        return self.labels.model_copy()

    def get_usage_stats(self) -> Dict:
        """Get mock usage statistics."""
        return {
            "total_tokens": 0,
            "api_calls": len(self.calls),
            "failures": 0,
            "model": "mock",
        }
