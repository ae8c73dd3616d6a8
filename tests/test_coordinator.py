"""Tests for ingestion runs."""

import httpx
import pytest

from ggnews.classification.classifier import Classification, TextClassifier
from ggnews.config import IngestionConfig
from ggnews.errors import RunInProgressError
from ggnews.models import Article
from ggnews.pipeline import IngestionCoordinator

from .conftest import FIXED_NOW
from .fakes import rss_feed, rss_item

VAL_FEED = "https://valorant.example.com/rss"
ESPORTS_FEED = "https://esports.example.com/rss"
SLOW_FEED = "https://slow.example.com/rss"


def patch_item(n: int = 811, **kwargs) -> str:
    return rss_item(
        "Valorant Patch 8.11 notes",
        link=f"https://valorant.example.com/patch-{n}",
        description="Agent changes for Jett",
        **kwargs,
    )


def test_valorant_patch_is_queued(store, feeds, coordinator):
    source = store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed(patch_item(enclosure="https://cdn.example.com/811.jpg"))

    summary = coordinator.run()

    assert summary.sources_processed == 1
    assert summary.total_found == 1
    assert summary.total_new == 1
    assert summary.errors == []

    article = store.articles.by_url("https://valorant.example.com/patch-811")
    assert article.status == "pending"
    assert article.game_slug == "valorant"
    assert article.category == "patch"
    assert article.region == "global"
    assert article.tags == ["PATCH"]
    assert article.ai_relevance_score == pytest.approx(0.4)
    assert article.ai_processed is False
    assert article.source_id == source.id
    assert article.title == "Valorant Patch 8.11 notes"
    assert article.original_title == "Valorant Patch 8.11 notes"
    assert article.excerpt == "Agent changes for Jett"
    assert article.thumbnail_url == "https://cdn.example.com/811.jpg"
    assert article.published_at is None

    assert store.sources.rows[source.id].last_fetched_at == FIXED_NOW


def test_fetch_log_is_completed(store, feeds, coordinator):
    source = store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed(
        patch_item(1),
        rss_item("CS2 Major results", link="https://valorant.example.com/cs2", description="NAVI beats FaZe"),
    )

    coordinator.run()

    [log] = store.fetch_logs.recent(source_id=source.id)
    assert log.status == "completed"
    assert log.articles_found == 2
    assert log.articles_new == 1
    assert log.articles_processed == 2
    assert log.completed_at is not None


def test_second_run_inserts_nothing(store, feeds, coordinator):
    store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed(patch_item(1), patch_item(2))

    first = coordinator.run()
    second = coordinator.run()

    assert first.total_new == 2
    assert second.total_found == 2
    assert second.total_new == 0
    assert second.to_response()["totalNew"] == 0
    assert len(store.articles.rows) == 2


def test_unrelated_game_is_not_persisted(store, feeds, coordinator):
    store.sources.add("Esports", ESPORTS_FEED)
    feeds.routes[ESPORTS_FEED] = rss_feed(
        rss_item("CS2 Major results", link="https://esports.example.com/cs2", description="NAVI beats FaZe"),
    )

    summary = coordinator.run()

    assert summary.total_found == 1
    assert summary.total_new == 0
    assert store.articles.rows == {}


def test_failing_source_does_not_stop_run(store, feeds, coordinator):
    good = store.sources.add("Valorant News", VAL_FEED)
    slow = store.sources.add("Slow Site", SLOW_FEED)
    feeds.routes[VAL_FEED] = rss_feed(patch_item())
    feeds.routes[SLOW_FEED] = httpx.ReadTimeout("timed out")

    summary = coordinator.run()

    assert summary.sources_processed == 2
    assert summary.total_new == 1
    assert summary.errors == ["Failed to fetch Slow Site: Request timed out after 15s"]

    [good_log] = store.fetch_logs.recent(source_id=good.id)
    [slow_log] = store.fetch_logs.recent(source_id=slow.id)
    assert good_log.status == "completed"
    assert slow_log.status == "failed"
    assert slow_log.error_message == "Failed to fetch Slow Site: Request timed out after 15s"
    assert store.sources.rows[slow.id].last_fetched_at is None


def test_inactive_sources_are_skipped(store, feeds, coordinator):
    store.sources.add("Valorant News", VAL_FEED, is_active=False)

    summary = coordinator.run()

    assert summary.sources_processed == 0
    assert feeds.requests == []


def test_source_region_overrides_detection(store, feeds, coordinator):
    store.sources.add("SEA Desk", VAL_FEED, region="sea")
    feeds.routes[VAL_FEED] = rss_feed(patch_item())

    coordinator.run()

    article = store.articles.by_url("https://valorant.example.com/patch-811")
    assert article.region == "sea"
    assert article.tags == ["SEA", "PATCH"]


def test_item_without_link_uses_guid(store, feeds, coordinator):
    store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed(
        rss_item("Valorant Champions recap", guid="urn:recap:1", description="Recap"),
    )

    coordinator.run()

    article = store.articles.by_url("urn:recap:1")
    assert article is not None
    assert article.external_id == "urn:recap:1"


def test_thumbnail_falls_back_to_first_image(store, feeds, coordinator):
    store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed(
        patch_item(content='<p>Notes</p><img src="https://cdn.example.com/inline.png">'),
    )

    coordinator.run()

    article = store.articles.by_url("https://valorant.example.com/patch-811")
    assert article.thumbnail_url == "https://cdn.example.com/inline.png"


def test_only_first_items_are_examined(store, feeds, fetcher):
    source = store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed(*(patch_item(n) for n in range(5)))
    coordinator = IngestionCoordinator(
        store=store,
        fetcher=fetcher,
        config=IngestionConfig(max_items_per_source=3, keep_pending_per_game=10),
    )

    summary = coordinator.run()

    assert summary.total_found == 5
    assert summary.total_new == 3
    [log] = store.fetch_logs.recent(source_id=source.id)
    assert log.articles_found == 5
    assert log.articles_processed == 3


def test_retention_keeps_newest_pending_per_game(store, feeds, coordinator):
    source = store.sources.add("Valorant News", VAL_FEED)
    manual = store.articles.insert(
        Article(original_title="Manual", title="Manual", game_slug="valorant", status="pending")
    )
    approved = store.articles.insert(
        Article(
            source_id=source.id,
            original_url="https://valorant.example.com/approved",
            original_title="Approved",
            title="Approved",
            game_slug="valorant",
            status="approved",
        )
    )
    feeds.routes[VAL_FEED] = rss_feed(*(patch_item(n) for n in range(8)))

    summary = coordinator.run()

    assert summary.total_new == 8
    assert summary.total_removed == 3

    pending = [
        a for a in store.articles.rows.values()
        if a.status == "pending" and a.source_id is not None and a.game_slug == "valorant"
    ]
    assert len(pending) == 5
    assert {a.original_url for a in pending} == {
        f"https://valorant.example.com/patch-{n}" for n in range(3, 8)
    }
    assert manual.id in store.articles.rows
    assert approved.id in store.articles.rows


def test_item_store_failure_is_skipped(store, feeds, coordinator):
    source = store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed(patch_item(1), patch_item(2))
    store.articles.fail_insert_urls.add("https://valorant.example.com/patch-1")

    summary = coordinator.run()

    assert summary.total_new == 1
    assert summary.errors == []
    assert store.articles.by_url("https://valorant.example.com/patch-2") is not None
    [log] = store.fetch_logs.recent(source_id=source.id)
    assert log.status == "completed"
    assert log.articles_new == 1


def test_fetch_log_failure_skips_source(store, feeds, coordinator):
    store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed(patch_item())
    store.fetch_logs.fail_start = True

    summary = coordinator.run()

    assert summary.total_new == 0
    assert len(summary.errors) == 1
    assert summary.errors[0].startswith("Failed to fetch Valorant News")
    assert feeds.requests == []


def test_concurrent_run_is_refused(store, coordinator):
    store.locked = True

    with pytest.raises(RunInProgressError):
        coordinator.run()


def test_lock_released_after_run(store, feeds, coordinator):
    store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed()

    coordinator.run()

    assert store.locked is False


def test_no_active_sources(store, coordinator):
    summary = coordinator.run()

    assert summary.sources_processed == 0
    assert summary.total_new == 0
    assert summary.to_response() == {
        "success": True,
        "sourcesProcessed": 0,
        "totalFound": 0,
        "totalNew": 0,
        "totalRemoved": 0,
        "errors": None,
    }


class RewritingClassifier(TextClassifier):
    def classify(self, title, content, region_override=None):
        return Classification(
            game_slug="bgmi",
            score=3,
            relevance=0.3,
            category="tournament",
            region=region_override or "india",
            tags=["INDIA", "TOURNAMENT"],
            title=f"Rewritten: {title}",
            summary="A summary",
            excerpt="An excerpt",
            ai_processed=True,
        )


def test_classifier_output_is_stored(store, feeds, fetcher):
    store.sources.add("Valorant News", VAL_FEED)
    feeds.routes[VAL_FEED] = rss_feed(patch_item())
    coordinator = IngestionCoordinator(store=store, fetcher=fetcher, classifier=RewritingClassifier())

    coordinator.run()

    article = store.articles.by_url("https://valorant.example.com/patch-811")
    assert article.title == "Rewritten: Valorant Patch 8.11 notes"
    assert article.original_title == "Valorant Patch 8.11 notes"
    assert article.summary == "A summary"
    assert article.excerpt == "An excerpt"
    assert article.ai_processed is True
    assert article.game_slug == "bgmi"
