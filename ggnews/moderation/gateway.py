"""Moderation gateway: the only path that moves articles through review.

Callers are expected to have verified operator privileges already; the
gateway only checks that the operator id is present.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional

import pendulum
from pydantic import ValidationError

from ..classification.keywords import SUPPORTED_GAMES
from ..db import ArticleRepository
from ..errors import (
    ArticleNotFoundError,
    InvalidTransitionError,
    InvalidUpdateError,
    ModerationError,
)
from ..models import ARTICLE_STATUSES, CATEGORIES, REGIONS, Article, ArticlePage, ArticleQuery
from .models import ArticleDraft

logger = logging.getLogger(__name__)

MODERATED_STATUSES = frozenset({"approved", "rejected", "published"})

# Status changes an operator may apply. Re-applying the current status is
# always allowed and only refreshes the moderator stamp. Published and
# rejected articles can be sent back to the queue; published_at survives.
TRANSITIONS: Mapping[str, FrozenSet[str]] = {
    "pending": frozenset({"approved", "rejected", "published"}),
    "approved": frozenset({"pending", "published", "rejected"}),
    "rejected": frozenset({"pending", "published"}),
    "published": frozenset({"pending"}),
}

EDITABLE_FIELDS = frozenset({
    "title",
    "summary",
    "excerpt",
    "thumbnail_url",
    "original_url",
    "game_slug",
    "category",
    "region",
    "tags",
    "is_featured",
    "is_pinned",
    "status",
    "rejection_reason",
})


def can_transition(current: str, target: str) -> bool:
    """Whether an article may move from ``current`` to ``target``."""
    return current == target or target in TRANSITIONS.get(current, frozenset())


class ModerationGateway:
    """Queue queries and operator decisions over the article repository."""

    def __init__(
        self,
        articles: ArticleRepository,
        clock: Callable[[], datetime] = lambda: pendulum.now("UTC"),
    ) -> None:
        """
        Initialize moderation gateway.

        Args:
            articles: Article repository
            clock: Time source for moderation stamps
        """
        self.articles = articles
        self.clock = clock

    # Reads

    def list_articles(self, query: Optional[ArticleQuery] = None) -> ArticlePage:
        """Newest-first page of articles matching the query."""
        return self.articles.query(query or ArticleQuery())

    def get_article(self, article_id: int) -> Article:
        """Fetch one article or raise ArticleNotFoundError."""
        article = self.articles.get(article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    # Decisions

    def publish(self, article_id: int, moderator: str) -> Article:
        """
        Publish an article.

        ``published_at`` is stamped only the first time; publishing again only
        refreshes the moderator fields.
        """
        return self._transition(article_id, moderator, "published")

    def reject(self, article_id: int, moderator: str, reason: Optional[str] = None) -> Article:
        """Reject an article, keeping the reason."""
        extra = {"rejection_reason": reason.strip() if reason and reason.strip() else None}
        return self._transition(article_id, moderator, "rejected", extra)

    def approve(self, article_id: int, moderator: str) -> Article:
        """Approve an article for later publication."""
        return self._transition(article_id, moderator, "approved")

    def unpublish(self, article_id: int, moderator: str) -> Article:
        """Take a published article down and return it to the pending queue.

        The original ``published_at`` is kept, so republishing does not move it.
        """
        article = self.get_article(article_id)
        if article.status != "published":
            raise InvalidTransitionError(article.status, "pending")
        return self._transition(article_id, moderator, "pending")

    def update_article(self, article_id: int, moderator: str, changes: Dict[str, Any]) -> Article:
        """
        Apply an operator edit.

        Args:
            article_id: Article to edit
            moderator: Operator id
            changes: Field values; only EDITABLE_FIELDS are accepted

        Raises:
            ArticleNotFoundError: no such article
            InvalidUpdateError: unknown field or invalid value
            InvalidTransitionError: status change not allowed
        """
        self._require_moderator(moderator)
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise InvalidUpdateError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
        updates = self._validate_changes(changes)

        article = self.get_article(article_id)
        if "status" in updates:
            target = updates["status"]
            if not can_transition(article.status, target):
                raise InvalidTransitionError(article.status, target)
            self._stamp(article, target, moderator, updates)

        return self._save(article_id, updates)

    # Operator authoring

    def create_article(self, draft: ArticleDraft, moderator: str) -> Article:
        """Insert a manually authored article (no source)."""
        self._require_moderator(moderator)
        now = self.clock()
        article = Article(
            source_id=None,
            original_url=draft.original_url,
            original_title=draft.title,
            title=draft.title,
            summary=draft.summary,
            excerpt=draft.excerpt,
            thumbnail_url=draft.thumbnail_url,
            game_slug=draft.game_slug,
            category=draft.category,
            region=draft.region,
            tags=draft.tags,
            status=draft.status,
            is_featured=draft.is_featured,
            is_pinned=draft.is_pinned,
            published_at=now if draft.status == "published" else None,
            moderated_by=moderator,
            moderated_at=now,
            ai_processed=True,
            ai_relevance_score=1.0,
        )
        created = self.articles.insert(article)
        logger.info("Article %s created by %s", created.id, moderator)
        return created

    def delete_article(self, article_id: int, moderator: str) -> None:
        """Delete an article."""
        self._require_moderator(moderator)
        if not self.articles.delete(article_id):
            raise ArticleNotFoundError(article_id)
        logger.info("Article %s deleted by %s", article_id, moderator)

    # Helpers

    def _transition(
        self,
        article_id: int,
        moderator: str,
        target: str,
        extra: Optional[Dict[str, Any]] = None,
    ) -> Article:
        self._require_moderator(moderator)
        article = self.get_article(article_id)
        if not can_transition(article.status, target):
            raise InvalidTransitionError(article.status, target)

        updates: Dict[str, Any] = {"status": target, **(extra or {})}
        self._stamp(article, target, moderator, updates)
        saved = self._save(article_id, updates)
        logger.info("Article %s %s by %s", article_id, target, moderator)
        return saved

    def _stamp(self, article: Article, target: str, moderator: str, updates: Dict[str, Any]) -> None:
        if target not in MODERATED_STATUSES and target == article.status:
            return
        if article.status == "rejected" and target != "rejected":
            updates.setdefault("rejection_reason", None)
        now = self.clock()
        updates["moderated_by"] = moderator
        updates["moderated_at"] = now
        if target == "published" and article.published_at is None:
            updates["published_at"] = now

    def _save(self, article_id: int, updates: Dict[str, Any]) -> Article:
        saved = self.articles.update(article_id, updates)
        if saved is None:
            raise ArticleNotFoundError(article_id)
        return saved

    @staticmethod
    def _require_moderator(moderator: str) -> None:
        if not moderator or not moderator.strip():
            raise ModerationError("A moderator id is required")

    @staticmethod
    def _validate_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
        updates = dict(changes)

        if "title" in updates:
            title = (updates["title"] or "").strip()
            if not title:
                raise InvalidUpdateError("Title cannot be empty")
            updates["title"] = title

        checks = (
            ("status", ARTICLE_STATUSES),
            ("game_slug", SUPPORTED_GAMES),
            ("category", CATEGORIES),
            ("region", REGIONS),
        )
        for field, allowed in checks:
            if field in updates and updates[field] not in allowed:
                raise InvalidUpdateError(f"Invalid {field} '{updates[field]}'")

        if "tags" in updates:
            tags = updates["tags"]
            if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
                raise InvalidUpdateError("Tags must be a list of strings")
            updates["tags"] = list(dict.fromkeys(t.strip() for t in tags if t.strip()))

        for flag in ("is_featured", "is_pinned"):
            if flag in updates and not isinstance(updates[flag], bool):
                raise InvalidUpdateError(f"{flag} must be a boolean")

        return updates


def parse_draft(data: Dict[str, Any]) -> ArticleDraft:
    """Validate raw operator input into an ArticleDraft."""
    try:
        return ArticleDraft.model_validate(data)
    except ValidationError as e:
        raise InvalidUpdateError(str(e)) from e
