"""Source storage in Postgres."""

from datetime import datetime
from typing import Iterable, List

from psycopg import Connection

from ..config import SourceConfig
from ..models import Source
from .connection import transaction
from .repositories import SourceRepository


class PostgresSourceRepository(SourceRepository):
    """Manage sources in database."""

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def list_active(self) -> List[Source]:
        with transaction(self.conn) as cur:
            cur.execute("SELECT * FROM news_sources WHERE is_active ORDER BY id")
            return [Source.model_validate(row) for row in cur.fetchall()]

    def list_all(self) -> List[Source]:
        with transaction(self.conn) as cur:
            cur.execute("SELECT * FROM news_sources ORDER BY name")
            return [Source.model_validate(row) for row in cur.fetchall()]

    def upsert(self, source: SourceConfig) -> Source:
        with transaction(self.conn) as cur:
            cur.execute(
                """
                INSERT INTO news_sources (name, url, region, is_active)
                VALUES (%s, %s, %s, %s)
                ON CONFLICT (name) DO UPDATE SET
                    url = EXCLUDED.url,
                    region = EXCLUDED.region,
                    is_active = EXCLUDED.is_active
                RETURNING *
                """,
                (source.name, source.url, source.region, source.is_active),
            )
            return Source.model_validate(cur.fetchone())

    def deactivate_missing(self, names: Iterable[str]) -> int:
        with transaction(self.conn) as cur:
            cur.execute(
                """
                UPDATE news_sources
                SET is_active = FALSE
                WHERE is_active AND NOT (name = ANY(%s))
                """,
                (list(names),),
            )
            return cur.rowcount

    def mark_fetched(self, source_id: int, fetched_at: datetime) -> None:
        with transaction(self.conn) as cur:
            cur.execute(
                "UPDATE news_sources SET last_fetched_at = %s WHERE id = %s",
                (fetched_at, source_id),
            )
