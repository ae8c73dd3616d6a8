"""Ingestion coordinator: poll sources, classify items, queue articles, prune."""

import logging
from typing import Callable, List, Optional, Sequence

import pendulum
from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from ..classification.classifier import Classification, KeywordTextClassifier, TextClassifier
from ..classification.keywords import SUPPORTED_GAMES
from ..config import IngestionConfig
from ..db import ContentStore
from ..errors import StoreError
from ..ingestion import FeedItem, RSSFetcher, extract_image_url
from ..models import Article, Source

logger = logging.getLogger(__name__)
console = Console()


class SourceReport(BaseModel):
    """Outcome of one source within a run."""

    source_id: int
    source_name: str
    success: bool
    found: int = 0
    processed: int = 0
    new: int = 0
    skipped_existing: int = 0
    skipped_irrelevant: int = 0
    item_errors: int = 0
    error: Optional[str] = None


class IngestionSummary(BaseModel):
    """Result of an ingestion run. Partial source failures still produce a summary."""

    sources_processed: int = Field(0, description="Active sources attempted")
    total_found: int = Field(0, description="Items present across all fetched feeds")
    total_new: int = Field(0, description="Articles inserted")
    total_removed: int = Field(0, description="Pending articles deleted by retention cleanup")
    errors: List[str] = Field(default_factory=list, description="One message per failed source")
    sources: List[SourceReport] = Field(default_factory=list)

    def to_response(self) -> dict:
        """Camel-cased payload for the moderation UI."""
        return {
            "success": True,
            "sourcesProcessed": self.sources_processed,
            "totalFound": self.total_found,
            "totalNew": self.total_new,
            "totalRemoved": self.total_removed,
            "errors": self.errors or None,
        }


class IngestionCoordinator:
    """Run one sequential ingestion pass over every active source.

    Sources are fetched one after another, then retention cleanup runs once
    over the whole article table. The store's run lock is held throughout.
    """

    def __init__(
        self,
        store: ContentStore,
        fetcher: Optional[RSSFetcher] = None,
        classifier: Optional[TextClassifier] = None,
        config: Optional[IngestionConfig] = None,
        games: Sequence[str] = SUPPORTED_GAMES,
        clock: Callable[[], pendulum.DateTime] = lambda: pendulum.now("UTC"),
    ) -> None:
        """
        Initialize ingestion coordinator.

        Args:
            store: Content store
            fetcher: Feed fetcher (built from config when omitted)
            classifier: Article classifier (keyword classifier when omitted)
            config: Ingestion parameters
            games: Games covered by retention cleanup
            clock: Time source for last_fetched_at stamps
        """
        self.store = store
        self.config = config or IngestionConfig()
        self.fetcher = fetcher or RSSFetcher(
            timeout=self.config.request_timeout,
            user_agent=self.config.user_agent,
        )
        self.classifier = classifier or KeywordTextClassifier()
        self.games = tuple(games)
        self.clock = clock

    def run(self) -> IngestionSummary:
        """
        Fetch every active source, queue new relevant articles, then prune.

        Returns:
            Run summary

        Raises:
            RunInProgressError: another run holds the run lock
        """
        with self.store.run_lock():
            summary = IngestionSummary()

            sources = self.store.sources.list_active()
            if not sources:
                logger.warning("No active news sources found")
                return summary

            summary.sources_processed = len(sources)
            for source in sources:
                report = self.process_source(source)
                summary.sources.append(report)
                summary.total_found += report.found
                summary.total_new += report.new
                if report.error:
                    summary.errors.append(report.error)

            summary.total_removed = self.cleanup()

        logger.info(
            "Ingestion finished: %d sources, %d found, %d new, %d removed, %d errors",
            summary.sources_processed,
            summary.total_found,
            summary.total_new,
            summary.total_removed,
            len(summary.errors),
        )
        return summary

    def process_source(self, source: Source) -> SourceReport:
        """Fetch one source and queue its new relevant items."""
        report = SourceReport(source_id=source.id, source_name=source.name, success=False)

        try:
            log = self.store.fetch_logs.start(source.id)
        except StoreError as e:
            report.error = f"Failed to fetch {source.name}: could not create fetch log ({e})"
            logger.error(report.error)
            return report

        result = self.fetcher.fetch_feed(source)
        if not result.success:
            report.error = f"Failed to fetch {source.name}: {result.error}"
            logger.error(report.error)
            self._fail_log(log.id, report.error)
            return report

        report.found = len(result.items)
        for item in result.items[: self.config.max_items_per_source]:
            report.processed += 1
            try:
                self._process_item(source, item, report)
            except StoreError as e:
                report.item_errors += 1
                logger.error("Skipping item %s from %s: %s", item.identity, source.name, e)

        try:
            self.store.fetch_logs.complete(log.id, report.found, report.new, report.processed)
            self.store.sources.mark_fetched(source.id, self.clock())
        except StoreError as e:
            logger.error("Could not finalize fetch of %s: %s", source.name, e)

        report.success = True
        logger.info(
            "%s: %d found, %d new, %d duplicate, %d irrelevant",
            source.name,
            report.found,
            report.new,
            report.skipped_existing,
            report.skipped_irrelevant,
        )
        return report

    def _fail_log(self, log_id: int, message: str) -> None:
        try:
            self.store.fetch_logs.fail(log_id, message)
        except StoreError as e:
            logger.error("Could not mark fetch log %s failed: %s", log_id, e)

    def _process_item(self, source: Source, item: FeedItem, report: SourceReport) -> None:
        url = item.identity
        if not url:
            return

        if self.store.articles.exists_by_url(url):
            report.skipped_existing += 1
            return

        title = item.title or "Untitled"
        content = item.content_snippet or item.content
        classification = self.classifier.classify(title, content, source.region)
        if classification is None:
            report.skipped_irrelevant += 1
            return

        self.store.articles.insert(self.build_article(source, item, classification))
        report.new += 1

    def build_article(
        self,
        source: Source,
        item: FeedItem,
        classification: Classification,
    ) -> Article:
        """Assemble the pending article for a classified feed item."""
        url = item.identity
        title = item.title or "Untitled"
        excerpt = item.content_snippet[: self.config.excerpt_length] or None

        return Article(
            source_id=source.id,
            external_id=item.guid or url,
            original_url=url,
            original_title=title,
            original_content=item.content[: self.config.content_max_chars],
            original_published_at=item.published,
            title=classification.title or title,
            summary=classification.summary or excerpt,
            excerpt=classification.excerpt or excerpt,
            thumbnail_url=item.enclosure_url or extract_image_url(item.content),
            game_slug=classification.game_slug,
            category=classification.category,
            region=classification.region,
            tags=classification.tags,
            ai_relevance_score=classification.relevance,
            ai_processed=classification.ai_processed,
            status="pending",
        )

    def cleanup(self) -> int:
        """Keep only the newest pending fetched articles per game."""
        keep = self.config.keep_pending_per_game
        removed = 0
        for game in self.games:
            try:
                deleted = self.store.articles.prune_pending(game, keep)
            except StoreError as e:
                logger.error("Retention cleanup failed for %s: %s", game, e)
                continue
            if deleted:
                logger.info("Removed %d old pending %s articles", deleted, game)
            removed += deleted
        return removed


def print_ingestion_summary(summary: IngestionSummary) -> None:
    """Print summary of an ingestion run."""
    table = Table(title="Ingestion Summary")
    table.add_column("Source", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Found", justify="right")
    table.add_column("Processed", justify="right")
    table.add_column("New", justify="right", style="green")
    table.add_column("Details", style="dim")

    for report in summary.sources:
        status = "[green]ok[/green]" if report.success else "[red]failed[/red]"
        if report.success:
            details = f"{report.skipped_existing} duplicate, {report.skipped_irrelevant} irrelevant"
            if report.item_errors:
                details += f", {report.item_errors} errors"
        else:
            details = report.error or "Failed"
        table.add_row(
            report.source_name,
            status,
            str(report.found),
            str(report.processed),
            str(report.new),
            details,
        )

    console.print(table)
    console.print(f"  Sources processed: {summary.sources_processed}")
    console.print(f"  Total found: {summary.total_found}")
    console.print(f"  Total new: [green]{summary.total_new}[/green]")
    console.print(f"  Removed by cleanup: {summary.total_removed}")

    if summary.errors:
        console.print("\n[bold red]Errors:[/bold red]")
        for error in summary.errors:
            console.print(f"  - {error}")
