"""Build pipeline collaborators from configuration."""

import logging
from typing import Optional

from ..cache import MemoryCache
from ..classification.classifier import KeywordTextClassifier, LLMTextClassifier, TextClassifier
from ..config import Config
from ..db import ContentStore
from ..ingestion import RSSFetcher
from ..llm import LLMProvider, MockLLMProvider, OpenAIProvider
from .coordinator import IngestionCoordinator

logger = logging.getLogger(__name__)


def build_llm_provider(config: Config) -> Optional[LLMProvider]:
    """Get configured LLM provider, or None when it cannot be used."""
    llm_config = config.get_llm_config()
    provider = llm_config.get("provider")

    if provider == "mock":
        return MockLLMProvider()

    if provider == "openai":
        api_key = llm_config.get("api_key")
        if not api_key:
            logger.warning("No OpenAI API key found, falling back to keyword classification")
            return None
        return OpenAIProvider(
            api_key=api_key,
            model=llm_config.get("model", "gpt-4o-mini"),
            base_url=llm_config.get("base_url"),
            timeout=llm_config.get("timeout", 30.0),
        )

    logger.warning("Unknown LLM provider '%s', falling back to keyword classification", provider)
    return None


def build_classifier(config: Config) -> TextClassifier:
    """Select the article classifier named by ``classifier.mode``."""
    settings = config.config.classifier
    if settings.mode == "llm":
        provider = build_llm_provider(config)
        if provider is not None:
            return LLMTextClassifier(
                provider,
                cache=MemoryCache(default_ttl=settings.cache_ttl_seconds),
                summarize=settings.summarize,
            )
    return KeywordTextClassifier()


def build_coordinator(config: Config, store: ContentStore) -> IngestionCoordinator:
    """Wire a coordinator from configuration."""
    ingestion = config.config.ingestion
    return IngestionCoordinator(
        store=store,
        fetcher=RSSFetcher(timeout=ingestion.request_timeout, user_agent=ingestion.user_agent),
        classifier=build_classifier(config),
        config=ingestion,
    )
