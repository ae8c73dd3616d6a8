"""Postgres-backed content store."""

import logging
from contextlib import contextmanager
from typing import Generator

from psycopg import Connection

from ..errors import RunInProgressError
from .articles import PostgresArticleRepository
from .connection import transaction
from .fetch_logs import PostgresFetchLogRepository
from .repositories import ContentStore
from .sources import PostgresSourceRepository

logger = logging.getLogger(__name__)

# Session-level advisory lock key shared by every ingestion run.
INGESTION_LOCK_KEY = 0x6767_6E77


class PostgresContentStore(ContentStore):
    """Content store over a single psycopg connection."""

    def __init__(self, conn: Connection) -> None:
        self.conn = conn
        self.sources = PostgresSourceRepository(conn)
        self.fetch_logs = PostgresFetchLogRepository(conn)
        self.articles = PostgresArticleRepository(conn)

    @contextmanager
    def run_lock(self) -> Generator[None, None, None]:
        with transaction(self.conn) as cur:
            cur.execute("SELECT pg_try_advisory_lock(%s) AS locked", (INGESTION_LOCK_KEY,))
            locked = cur.fetchone()["locked"]
        if not locked:
            raise RunInProgressError("Another ingestion run is in progress")

        try:
            yield
        finally:
            with transaction(self.conn) as cur:
                cur.execute("SELECT pg_advisory_unlock(%s)", (INGESTION_LOCK_KEY,))
            logger.debug("Released ingestion lock")
