"""Content store interfaces consumed by the pipeline and moderation gateway."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..config import SourceConfig
from ..models import Article, ArticlePage, ArticleQuery, FetchLog, Source


class SourceRepository(ABC):
    """Feed sources."""

    @abstractmethod
    def list_active(self) -> List[Source]:
        """Sources with ``is_active`` set, ordered by id."""

    @abstractmethod
    def list_all(self) -> List[Source]:
        """All sources, ordered by name."""

    @abstractmethod
    def upsert(self, source: SourceConfig) -> Source:
        """Insert or update a source by name."""

    @abstractmethod
    def deactivate_missing(self, names: Iterable[str]) -> int:
        """Deactivate every source whose name is not in ``names``; returns the count."""

    @abstractmethod
    def mark_fetched(self, source_id: int, fetched_at: datetime) -> None:
        """Stamp ``last_fetched_at``."""

    def sync(self, sources: List[SourceConfig]) -> int:
        """Upsert every configured source and deactivate the rest; returns the deactivated count."""
        for source in sources:
            self.upsert(source)
        return self.deactivate_missing(s.name for s in sources)


class FetchLogRepository(ABC):
    """Per-source fetch audit trail."""

    @abstractmethod
    def start(self, source_id: int) -> FetchLog:
        """Create a ``started`` log row."""

    @abstractmethod
    def complete(self, log_id: int, found: int, new: int, processed: int) -> None:
        """Mark a log row ``completed`` with its counts."""

    @abstractmethod
    def fail(self, log_id: int, error_message: str) -> None:
        """Mark a log row ``failed``."""

    @abstractmethod
    def recent(self, limit: int = 20, source_id: Optional[int] = None) -> List[FetchLog]:
        """Most recent log rows first."""


class ArticleRepository(ABC):
    """News articles."""

    @abstractmethod
    def exists_by_url(self, original_url: str) -> bool:
        """Whether any article already has this original URL."""

    @abstractmethod
    def insert(self, article: Article) -> Article:
        """Insert an article and return it with id and timestamps set."""

    @abstractmethod
    def get(self, article_id: int) -> Optional[Article]:
        """Fetch one article."""

    @abstractmethod
    def update(self, article_id: int, changes: Dict[str, Any]) -> Optional[Article]:
        """Apply column changes; returns the updated article or None if missing."""

    @abstractmethod
    def delete(self, article_id: int) -> bool:
        """Delete one article; returns whether it existed."""

    @abstractmethod
    def query(self, query: ArticleQuery) -> ArticlePage:
        """Filtered page of articles, newest first, with the exact total."""

    @abstractmethod
    def prune_pending(self, game_slug: str, keep: int) -> int:
        """
        Delete pending fetched articles of a game beyond the ``keep`` newest.

        Approved, rejected, published and manually authored articles are
        never touched.

        Returns:
            Number of deleted articles
        """


class ContentStore(ABC):
    """Bundle of repositories plus the ingestion run lock."""

    sources: SourceRepository
    fetch_logs: FetchLogRepository
    articles: ArticleRepository

    @abstractmethod
    def run_lock(self) -> AbstractContextManager:
        """
        Hold the exclusive ingestion lock for the duration of the block.

        Raises:
            RunInProgressError: another run holds the lock
        """
