"""Tests for LLM-assisted classification."""

import json
from types import SimpleNamespace
from typing import List, Union

import pytest

from ggnews.cache import MemoryCache
from ggnews.classification.classifier import KeywordTextClassifier, LLMTextClassifier
from ggnews.llm import ArticleLabels, MockLLMProvider, OpenAIProvider


class FakeCompletions:
    """Returns queued replies in order; an Exception in the queue is raised."""

    def __init__(self, replies: List[Union[str, Exception]]) -> None:
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=reply))],
            usage=SimpleNamespace(total_tokens=42),
        )


def fake_client(*replies: Union[str, Exception]) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(list(replies))))


def labels_reply(**data) -> str:
    return json.dumps(data)


TITLE = "Valorant Patch 8.11 notes"
CONTENT = "Agent changes for Jett"


def test_keyword_classifier():
    result = KeywordTextClassifier().classify(TITLE, CONTENT)

    assert result.game_slug == "valorant"
    assert result.category == "patch"
    assert result.region == "global"
    assert result.tags == ["PATCH"]
    assert result.ai_processed is False
    assert result.title is None


def test_keyword_classifier_rejects_unrelated_text():
    assert KeywordTextClassifier().classify("CS2 Major results", "NAVI beats FaZe") is None


def test_llm_labels_are_used():
    client = fake_client(labels_reply(category="patch", region="asia", tags=["Agent Balance", "jett"]))
    classifier = LLMTextClassifier(OpenAIProvider(client=client))

    result = classifier.classify(TITLE, CONTENT)

    assert result.game_slug == "valorant"
    assert result.category == "patch"
    assert result.region == "asia"
    assert result.tags == ["ASIA", "PATCH", "agent-balance", "jett"]
    assert result.relevance == pytest.approx(0.4)
    assert result.ai_processed is True

    call = client.chat.completions.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    assert call["model"] == "gpt-4o-mini"


def test_llm_is_not_asked_about_unrelated_text():
    client = fake_client()
    classifier = LLMTextClassifier(OpenAIProvider(client=client))

    assert classifier.classify("CS2 Major results", "NAVI beats FaZe") is None
    assert client.chat.completions.calls == []


def test_invalid_labels_fall_back_to_defaults():
    client = fake_client(labels_reply(category="drama", region="mars", tags="not-a-list"))
    classifier = LLMTextClassifier(OpenAIProvider(client=client))

    result = classifier.classify(TITLE, CONTENT)

    assert result.category == "general"
    assert result.region == "global"
    assert result.tags == ["GENERAL"]


def test_provider_failure_falls_back():
    client = fake_client(RuntimeError("rate limited"))
    provider = OpenAIProvider(client=client)
    classifier = LLMTextClassifier(provider)

    result = classifier.classify(TITLE, CONTENT)

    assert result.game_slug == "valorant"
    assert result.category == "general"
    assert result.region == "global"
    assert provider.get_usage_stats()["failures"] == 1


def test_non_json_reply_falls_back():
    provider = OpenAIProvider(client=fake_client("definitely not json"))

    assert provider.classify(TITLE, CONTENT, "valorant") == ArticleLabels()
    assert provider.failures == 1


def test_region_override_wins_over_model():
    client = fake_client(labels_reply(category="patch", region="asia", tags=[]))
    classifier = LLMTextClassifier(OpenAIProvider(client=client))

    result = classifier.classify(TITLE, CONTENT, region_override="india")

    assert result.region == "india"
    assert result.tags == ["INDIA", "PATCH"]


def test_summarize_rewrites_text():
    client = fake_client(
        json.dumps({"title": "Jett gets reworked", "summary": "Long summary", "excerpt": "Short"}),
        labels_reply(category="patch", region="global", tags=[]),
    )
    classifier = LLMTextClassifier(OpenAIProvider(client=client), summarize=True)

    result = classifier.classify(TITLE, CONTENT)

    assert result.title == "Jett gets reworked"
    assert result.summary == "Long summary"
    assert result.excerpt == "Short"
    assert len(client.chat.completions.calls) == 2


def test_summarize_failure_keeps_original_text():
    client = fake_client(RuntimeError("down"), RuntimeError("down"))
    classifier = LLMTextClassifier(OpenAIProvider(client=client), summarize=True)

    result = classifier.classify(TITLE, CONTENT)

    assert result.title == TITLE
    assert result.summary == CONTENT
    assert result.excerpt == TITLE


def test_rewrite_is_clipped():
    client = fake_client(json.dumps({"title": "x" * 300, "summary": "s", "excerpt": "e" * 300}))
    rewrite = OpenAIProvider(client=client).summarize(TITLE, CONTENT, "valorant")

    assert len(rewrite.title) == 120
    assert len(rewrite.excerpt) == 200


def test_rewrite_prompt_lists_asia_keywords():
    client = fake_client(json.dumps({"title": "t", "summary": "s", "excerpt": "e"}))

    OpenAIProvider(client=client).summarize(TITLE, CONTENT, "valorant")

    prompt = client.chat.completions.calls[0]["messages"][1]["content"]
    keywords = prompt.split("relevance keywords to check for:")[1].split("\n")[0]
    assert "bgmi" in keywords
    assert "southeast asia" in keywords
    assert "vct pacific" in keywords


def test_answers_are_cached():
    provider = MockLLMProvider(labels=ArticleLabels(category="meta", region="india", tags=["tier-list"]))
    cache = MemoryCache()
    classifier = LLMTextClassifier(provider, cache=cache)

    first = classifier.classify(TITLE, CONTENT)
    second = classifier.classify(TITLE, CONTENT)

    assert first == second
    assert provider.calls == [("classify", TITLE)]
    assert len(cache) == 1


def test_expired_answers_are_refreshed():
    now = [0.0]
    provider = MockLLMProvider()
    classifier = LLMTextClassifier(provider, cache=MemoryCache(default_ttl=10, clock=lambda: now[0]))

    classifier.classify(TITLE, CONTENT)
    now[0] = 11.0
    classifier.classify(TITLE, CONTENT)

    assert len(provider.calls) == 2
