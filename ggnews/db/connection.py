"""Database connection management."""

import os
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from ..errors import StoreError


class DatabaseConfig:
    """Database configuration."""

    def __init__(self, config: Dict[str, Any]) -> None:
        """Initialize database config from dict."""
        self.host = config.get("host", "localhost")
        self.port = config.get("port", 5432)
        self.database = config.get("database", "ggnews")
        self.user = config.get("user", "ggnews")

        # Handle password from environment variable if specified
        password_env = config.get("password_env")
        if config.get("password"):
            self.password = config["password"]
        elif password_env:
            self.password = os.environ.get(password_env, "")
        else:
            self.password = ""

    @property
    def connection_string(self) -> str:
        """Get psycopg connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


_connection_pool: Optional[ConnectionPool] = None


def get_connection_pool(config: Dict[str, Any]) -> ConnectionPool:
    """Get or create connection pool."""
    global _connection_pool
    if _connection_pool is None:
        db_config = DatabaseConfig(config)
        _connection_pool = ConnectionPool(
            db_config.connection_string,
            min_size=1,
            max_size=5,
            kwargs={"row_factory": dict_row},
            open=True,
        )
    return _connection_pool


@contextmanager
def get_connection(config: Dict[str, Any]) -> Generator[psycopg.Connection, None, None]:
    """Get a database connection from the pool."""
    pool = get_connection_pool(config)
    with pool.connection() as conn:
        yield conn


@contextmanager
def transaction(conn: psycopg.Connection) -> Generator[psycopg.Cursor, None, None]:
    """Cursor whose work is committed on success and rolled back on error.

    Database errors are re-raised as StoreError.
    """
    try:
        with conn.cursor() as cur:
            yield cur
        conn.commit()
    except psycopg.Error as e:
        conn.rollback()
        raise StoreError(str(e)) from e
