"""Database initialization and schema management."""

import logging
from typing import Any, Dict

from psycopg.errors import DatabaseError

from ..errors import StoreError
from .connection import get_connection

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
-- Sources table
CREATE TABLE IF NOT EXISTS news_sources (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,
    url TEXT NOT NULL,
    region TEXT CHECK (region IN ('india', 'asia', 'sea', 'global')),
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    last_fetched_at TIMESTAMPTZ,
    created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
);

-- Fetch logs table
CREATE TABLE IF NOT EXISTS news_fetch_logs (
    id SERIAL PRIMARY KEY,
    source_id INTEGER NOT NULL REFERENCES news_sources(id) ON DELETE CASCADE,
    status TEXT NOT NULL DEFAULT 'started' CHECK (status IN ('started', 'completed', 'failed')),
    articles_found INTEGER NOT NULL DEFAULT 0,
    articles_new INTEGER NOT NULL DEFAULT 0,
    articles_processed INTEGER NOT NULL DEFAULT 0,
    error_message TEXT,
    started_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp(),
    completed_at TIMESTAMPTZ,
    created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
);

-- Articles table
CREATE TABLE IF NOT EXISTS news_articles (
    id SERIAL PRIMARY KEY,
    external_id TEXT,
    original_url TEXT NOT NULL DEFAULT '',
    source_id INTEGER REFERENCES news_sources(id) ON DELETE SET NULL,
    original_title TEXT NOT NULL,
    original_content TEXT,
    original_published_at TIMESTAMPTZ,
    title TEXT NOT NULL,
    summary TEXT,
    excerpt TEXT,
    thumbnail_url TEXT,
    game_slug TEXT NOT NULL CHECK (game_slug IN ('valorant', 'bgmi', 'freefire')),
    category TEXT NOT NULL DEFAULT 'general'
        CHECK (category IN ('patch', 'tournament', 'event', 'roster', 'meta', 'update', 'general')),
    region TEXT NOT NULL DEFAULT 'global' CHECK (region IN ('india', 'asia', 'sea', 'global')),
    tags TEXT[] NOT NULL DEFAULT '{}',
    ai_relevance_score REAL NOT NULL DEFAULT 0 CHECK (ai_relevance_score >= 0 AND ai_relevance_score <= 1),
    ai_processed BOOLEAN NOT NULL DEFAULT FALSE,
    status TEXT NOT NULL DEFAULT 'pending'
        CHECK (status IN ('pending', 'approved', 'rejected', 'published')),
    rejection_reason TEXT,
    is_featured BOOLEAN NOT NULL DEFAULT FALSE,
    is_pinned BOOLEAN NOT NULL DEFAULT FALSE,
    moderated_by TEXT,
    moderated_at TIMESTAMPTZ,
    published_at TIMESTAMPTZ,
    views_count INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
);

-- Create indexes
CREATE UNIQUE INDEX IF NOT EXISTS idx_news_articles_fetched_url
    ON news_articles(original_url) WHERE source_id IS NOT NULL;
CREATE INDEX IF NOT EXISTS idx_news_articles_original_url ON news_articles(original_url);
CREATE INDEX IF NOT EXISTS idx_news_articles_queue
    ON news_articles(game_slug, status, created_at DESC);
CREATE INDEX IF NOT EXISTS idx_news_articles_created_at ON news_articles(created_at DESC);
CREATE INDEX IF NOT EXISTS idx_news_fetch_logs_source_id ON news_fetch_logs(source_id);

-- Update trigger function
CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = clock_timestamp();
    RETURN NEW;
END;
$$ language 'plpgsql';

-- Create update triggers
CREATE OR REPLACE TRIGGER update_news_sources_updated_at BEFORE UPDATE ON news_sources
    FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();

CREATE OR REPLACE TRIGGER update_news_fetch_logs_updated_at BEFORE UPDATE ON news_fetch_logs
    FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();

CREATE OR REPLACE TRIGGER update_news_articles_updated_at BEFORE UPDATE ON news_articles
    FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
"""


def validate_connection(config: Dict[str, Any]) -> bool:
    """Validate database connection."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 AS ok")
                result = cur.fetchone()
                return result is not None and result["ok"] == 1
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False


def init_database(config: Dict[str, Any]) -> None:
    """Initialize database schema."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
                conn.commit()
                logger.info("Database schema initialized successfully")
    except DatabaseError as e:
        logger.error("Failed to initialize database schema: %s", e)
        raise StoreError(str(e)) from e
