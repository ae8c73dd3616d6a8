"""Tests for the SQL issued by the Postgres article repository."""

from typing import Any, List, Optional

import pytest

from ggnews.db.articles import PostgresArticleRepository, build_filters
from ggnews.models import ArticleQuery


def render(statement) -> str:
    text = statement if isinstance(statement, str) else statement.as_string(None)
    return " ".join(text.split())


class RecordingCursor:
    def __init__(self, conn: "RecordingConnection") -> None:
        self.conn = conn
        self.rowcount = conn.rowcount

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, statement, params=None) -> None:
        self.conn.executed.append((render(statement), list(params or [])))

    def fetchone(self) -> Optional[dict]:
        return self.conn.rows.pop(0) if self.conn.rows else None

    def fetchall(self) -> List[dict]:
        rows, self.conn.rows = self.conn.rows, []
        return rows


class RecordingConnection:
    """Stands in for a psycopg connection and records executed statements."""

    def __init__(self, rows: Optional[List[Any]] = None, rowcount: int = 0) -> None:
        self.rows = list(rows or [])
        self.rowcount = rowcount
        self.executed = []
        self.commits = 0

    def cursor(self) -> RecordingCursor:
        return RecordingCursor(self)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        pass


def where(query: ArticleQuery):
    clause, params = build_filters(query)
    return render(clause), params


def test_no_filters():
    assert where(ArticleQuery()) == ("", [])


@pytest.mark.parametrize(
    "field,column,value",
    [
        ("status", "status", "pending"),
        ("game", "game_slug", "valorant"),
        ("category", "category", "patch"),
        ("region", "region", "india"),
    ],
)
def test_exact_filters(field, column, value):
    assert where(ArticleQuery(**{field: value})) == (f'WHERE "{column}" = %s', [value])


def test_filters_are_combined_in_order():
    clause, params = where(ArticleQuery(status="pending", game="bgmi", category="tournament", region="india"))

    assert clause == 'WHERE "status" = %s AND "game_slug" = %s AND "category" = %s AND "region" = %s'
    assert params == ["pending", "bgmi", "tournament", "india"]


def test_manual_source_type():
    assert where(ArticleQuery(source_type="manual")) == (
        "WHERE (source_id IS NULL OR status IN ('published', 'approved'))",
        [],
    )


def test_fetched_source_type():
    assert where(ArticleQuery(source_type="fetched")) == (
        "WHERE (source_id IS NOT NULL AND status IN ('pending', 'rejected'))",
        [],
    )


def test_search_matches_both_titles():
    assert where(ArticleQuery(search="jett")) == (
        "WHERE (title ILIKE %s OR original_title ILIKE %s)",
        ["%jett%", "%jett%"],
    )


def test_search_after_exact_filters():
    clause, params = where(ArticleQuery(game="valorant", source_type="fetched", search="patch"))

    assert clause == (
        'WHERE "game_slug" = %s'
        " AND (source_id IS NOT NULL AND status IN ('pending', 'rejected'))"
        " AND (title ILIKE %s OR original_title ILIKE %s)"
    )
    assert params == ["valorant", "%patch%", "%patch%"]


def test_query_counts_then_pages_newest_first():
    conn = RecordingConnection(rows=[{"total": 0}])
    repository = PostgresArticleRepository(conn)

    page = repository.query(ArticleQuery(status="pending", limit=10, offset=20))

    assert page.total == 0
    assert page.articles == []
    (count_sql, count_params), (page_sql, page_params) = conn.executed
    assert count_sql == 'SELECT COUNT(*) AS total FROM news_articles WHERE "status" = %s'
    assert count_params == ["pending"]
    assert page_sql == (
        'SELECT * FROM news_articles WHERE "status" = %s'
        " ORDER BY created_at DESC, id DESC LIMIT %s OFFSET %s"
    )
    assert page_params == ["pending", 10, 20]
    assert conn.commits == 1


def test_prune_pending_keeps_newest_fetched_pending():
    conn = RecordingConnection(rowcount=3)
    repository = PostgresArticleRepository(conn)

    removed = repository.prune_pending("valorant", 5)

    assert removed == 3
    [(statement, params)] = conn.executed
    assert params == ["valorant", "valorant", 5]
    assert statement.startswith(
        "DELETE FROM news_articles WHERE game_slug = %s AND status = 'pending' AND source_id IS NOT NULL"
    )
    assert (
        "AND id NOT IN ( SELECT id FROM news_articles WHERE game_slug = %s"
        " AND status = 'pending' AND source_id IS NOT NULL"
        " ORDER BY created_at DESC, id DESC LIMIT %s )"
    ) in statement


def test_update_rejects_unknown_columns():
    conn = RecordingConnection()
    repository = PostgresArticleRepository(conn)

    with pytest.raises(ValueError):
        repository.update(1, {"views": 3})
    assert conn.executed == []
