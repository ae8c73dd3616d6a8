"""Helpers shared by CLI commands."""

from contextlib import contextmanager
from typing import Generator

import typer
from rich.console import Console

from ..config import Config
from ..db import PostgresContentStore, get_connection, validate_connection
from ..logger import configure_logging

console = Console()


def load_settings() -> Config:
    """Load configuration and set up logging, exiting when no config exists."""
    config = Config()
    try:
        settings = config.config
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'ggnews init' first.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    configure_logging(settings.logging.level, settings.logging.rich_tracebacks)
    return config


@contextmanager
def open_store(config: Config) -> Generator[PostgresContentStore, None, None]:
    """Content store over a pooled connection."""
    db_config = config.get_db_config()
    if not validate_connection(db_config):
        console.print("[red]❌ Database connection failed![/red]")
        console.print("Please check your database configuration and ensure Postgres is running.")
        raise typer.Exit(1)

    with get_connection(db_config) as conn:
        yield PostgresContentStore(conn)
