"""Exceptions raised by ggnews."""


class GGNewsError(Exception):
    """Base class for all ggnews errors."""


class StoreError(GGNewsError):
    """A content store operation failed."""


class RunInProgressError(GGNewsError):
    """Another ingestion run holds the run lock."""


class ModerationError(GGNewsError):
    """A moderation operation was rejected."""


class ArticleNotFoundError(ModerationError):
    """No article exists with the requested id."""

    def __init__(self, article_id: int) -> None:
        super().__init__(f"Article not found: {article_id}")
        self.article_id = article_id


class InvalidUpdateError(ModerationError):
    """An article update carried unknown fields or invalid values."""


class InvalidTransitionError(ModerationError):
    """A status change is not allowed from the article's current status."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Cannot move article from '{current}' to '{target}'")
        self.current = current
        self.target = target
