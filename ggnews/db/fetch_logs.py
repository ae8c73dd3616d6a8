"""Fetch log storage in Postgres."""

from typing import List, Optional

from psycopg import Connection

from ..models import FetchLog
from .connection import transaction
from .repositories import FetchLogRepository


class PostgresFetchLogRepository(FetchLogRepository):
    """Manage fetch logs in database."""

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def start(self, source_id: int) -> FetchLog:
        with transaction(self.conn) as cur:
            cur.execute(
                """
                INSERT INTO news_fetch_logs (source_id, status)
                VALUES (%s, 'started')
                RETURNING *
                """,
                (source_id,),
            )
            return FetchLog.model_validate(cur.fetchone())

    def complete(self, log_id: int, found: int, new: int, processed: int) -> None:
        with transaction(self.conn) as cur:
            cur.execute(
                """
                UPDATE news_fetch_logs
                SET
                    status = 'completed',
                    articles_found = %s,
                    articles_new = %s,
                    articles_processed = %s,
                    completed_at = clock_timestamp()
                WHERE id = %s AND status = 'started'
                """,
                (found, new, processed, log_id),
            )

    def fail(self, log_id: int, error_message: str) -> None:
        with transaction(self.conn) as cur:
            cur.execute(
                """
                UPDATE news_fetch_logs
                SET
                    status = 'failed',
                    error_message = %s,
                    completed_at = clock_timestamp()
                WHERE id = %s AND status = 'started'
                """,
                (error_message, log_id),
            )

    def recent(self, limit: int = 20, source_id: Optional[int] = None) -> List[FetchLog]:
        with transaction(self.conn) as cur:
            if source_id is None:
                cur.execute(
                    "SELECT * FROM news_fetch_logs ORDER BY started_at DESC, id DESC LIMIT %s",
                    (limit,),
                )
            else:
                cur.execute(
                    """
                    SELECT * FROM news_fetch_logs
                    WHERE source_id = %s
                    ORDER BY started_at DESC, id DESC
                    LIMIT %s
                    """,
                    (source_id, limit),
                )
            return [FetchLog.model_validate(row) for row in cur.fetchall()]
