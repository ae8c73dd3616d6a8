"""Database management for ggnews."""

from .connection import get_connection, get_connection_pool, transaction
from .init import init_database, validate_connection
from .repositories import ArticleRepository, ContentStore, FetchLogRepository, SourceRepository
from .store import PostgresContentStore

__all__ = [
    "ArticleRepository",
    "ContentStore",
    "FetchLogRepository",
    "PostgresContentStore",
    "SourceRepository",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "transaction",
    "validate_connection",
]
