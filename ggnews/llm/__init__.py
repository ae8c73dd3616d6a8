"""Language model providers."""

from .models import ArticleLabels, ArticleRewrite
from .provider import LLMProvider, MockLLMProvider, OpenAIProvider, fallback_rewrite

__all__ = [
    "ArticleLabels",
    "ArticleRewrite",
    "LLMProvider",
    "MockLLMProvider",
    "OpenAIProvider",
    "fallback_rewrite",
]
