"""Article storage in Postgres."""

from typing import Any, Dict, List, Optional, Tuple

from psycopg import Connection, sql

from ..models import Article, ArticlePage, ArticleQuery
from .connection import transaction
from .repositories import ArticleRepository

_GENERATED_COLUMNS = {"id", "created_at", "updated_at"}

# Columns that may be changed after insert.
UPDATABLE_COLUMNS = frozenset(Article.model_fields) - _GENERATED_COLUMNS


def build_filters(query: ArticleQuery) -> Tuple[sql.Composable, List[Any]]:
    """Translate an ArticleQuery into a WHERE clause and its parameters."""
    clauses: List[sql.Composable] = []
    params: List[Any] = []

    for column, value in (
        ("status", query.status),
        ("game_slug", query.game),
        ("category", query.category),
        ("region", query.region),
    ):
        if value:
            clauses.append(sql.SQL("{} = %s").format(sql.Identifier(column)))
            params.append(value)

    if query.source_type == "manual":
        clauses.append(sql.SQL("(source_id IS NULL OR status IN ('published', 'approved'))"))
    elif query.source_type == "fetched":
        clauses.append(sql.SQL("(source_id IS NOT NULL AND status IN ('pending', 'rejected'))"))

    if query.search:
        pattern = f"%{query.search}%"
        clauses.append(sql.SQL("(title ILIKE %s OR original_title ILIKE %s)"))
        params.extend([pattern, pattern])

    if not clauses:
        return sql.SQL(""), params
    return sql.SQL("WHERE ") + sql.SQL(" AND ").join(clauses), params


class PostgresArticleRepository(ArticleRepository):
    """Handle article storage, listing and retention."""

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def exists_by_url(self, original_url: str) -> bool:
        with transaction(self.conn) as cur:
            cur.execute(
                "SELECT 1 AS found FROM news_articles WHERE original_url = %s LIMIT 1",
                (original_url,),
            )
            return cur.fetchone() is not None

    def insert(self, article: Article) -> Article:
        values = article.model_dump(exclude=_GENERATED_COLUMNS)
        columns = list(values)
        statement = sql.SQL("INSERT INTO news_articles ({}) VALUES ({}) RETURNING *").format(
            sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            sql.SQL(", ").join(sql.Placeholder() for _ in columns),
        )
        with transaction(self.conn) as cur:
            cur.execute(statement, [values[c] for c in columns])
            return Article.model_validate(cur.fetchone())

    def get(self, article_id: int) -> Optional[Article]:
        with transaction(self.conn) as cur:
            cur.execute("SELECT * FROM news_articles WHERE id = %s", (article_id,))
            row = cur.fetchone()
            return Article.model_validate(row) if row else None

    def update(self, article_id: int, changes: Dict[str, Any]) -> Optional[Article]:
        unknown = set(changes) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Unknown article columns: {', '.join(sorted(unknown))}")
        if not changes:
            return self.get(article_id)

        columns = list(changes)
        statement = sql.SQL("UPDATE news_articles SET {} WHERE id = %s RETURNING *").format(
            sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(c)) for c in columns
            )
        )
        with transaction(self.conn) as cur:
            cur.execute(statement, [changes[c] for c in columns] + [article_id])
            row = cur.fetchone()
            return Article.model_validate(row) if row else None

    def delete(self, article_id: int) -> bool:
        with transaction(self.conn) as cur:
            cur.execute("DELETE FROM news_articles WHERE id = %s", (article_id,))
            return cur.rowcount > 0

    def query(self, query: ArticleQuery) -> ArticlePage:
        where, params = build_filters(query)
        count_statement = sql.SQL("SELECT COUNT(*) AS total FROM news_articles {}").format(where)
        page_statement = sql.SQL(
            "SELECT * FROM news_articles {} ORDER BY created_at DESC, id DESC LIMIT %s OFFSET %s"
        ).format(where)

        with transaction(self.conn) as cur:
            cur.execute(count_statement, params)
            total = cur.fetchone()["total"]
            cur.execute(page_statement, params + [query.limit, query.offset])
            articles = [Article.model_validate(row) for row in cur.fetchall()]

        return ArticlePage(
            articles=articles,
            total=total,
            limit=query.limit,
            offset=query.offset,
        )

    def prune_pending(self, game_slug: str, keep: int) -> int:
        with transaction(self.conn) as cur:
            cur.execute(
                """
                DELETE FROM news_articles
                WHERE game_slug = %s
                  AND status = 'pending'
                  AND source_id IS NOT NULL
                  AND id NOT IN (
                      SELECT id FROM news_articles
                      WHERE game_slug = %s
                        AND status = 'pending'
                        AND source_id IS NOT NULL
                      ORDER BY created_at DESC, id DESC
                      LIMIT %s
                  )
                """,
                (game_slug, game_slug, keep),
            )
            return cur.rowcount
