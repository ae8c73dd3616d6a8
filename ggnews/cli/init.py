"""Init command implementation."""

from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, SourceConfig, save_config, save_sources
from ..db import init_database, validate_connection
from ..errors import StoreError

console = Console()


def create_default_sources() -> List[SourceConfig]:
    """Create default gaming news sources."""
    return [
        SourceConfig(
            name="Dexerto",
            url="https://www.dexerto.com/feed/",
            is_active=True,
        ),
        SourceConfig(
            name="Dot Esports",
            url="https://dotesports.com/feed",
            is_active=True,
        ),
        SourceConfig(
            name="Sportskeeda Esports",
            url="https://www.sportskeeda.com/esports/feed",
            region="india",
            is_active=True,
        ),
        SourceConfig(
            name="AFK Gaming",
            url="https://afkgaming.com/feed",
            region="india",
            is_active=True,
        ),
        SourceConfig(
            name="VLR.gg",
            url="https://www.vlr.gg/rss",
            is_active=True,
        ),
    ]


def init_command(
    config_dir: Path = typer.Option(
        Path.home() / ".config" / "ggnews",
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("ggnews", "--db-name", help="Database name"),
    db_user: str = typer.Option("ggnews", "--db-user", help="Database user"),
    seed_sources: bool = typer.Option(
        True,
        "--seed-sources/--no-seed-sources",
        help="Seed default gaming news sources",
    ),
) -> None:
    """Initialize ggnews configuration and database."""
    console.print(Panel.fit("🎮 ggnews - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    sources_path = config_dir / "sources.yaml"

    config = ConfigModel(
        postgres={
            "host": db_host,
            "port": db_port,
            "database": db_name,
            "user": db_user,
            "password_env": "GGNEWS_DB_PASSWORD",
        },
    )

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if seed_sources:
        sources = create_default_sources()
        save_sources(sources, sources_path)
        console.print(f"✅ Created sources: {sources_path} (seeded with {len(sources)} sources)")
    else:
        save_sources([], sources_path)
        console.print(f"✅ Created sources: {sources_path} (empty)")

    console.print("\n[bold]Testing database connection...[/bold]")
    db_config = config.postgres.model_dump()

    if not validate_connection(db_config):
        console.print(
            "[red]❌ Database connection failed![/red]\n"
            "Please ensure Postgres is running and credentials are correct.\n"
            "Set the password via environment variable: [bold]export GGNEWS_DB_PASSWORD=your_password[/bold]"
        )
        raise typer.Exit(1)

    console.print("✅ Database connection successful")

    console.print("\n[bold]Initializing database schema...[/bold]")
    try:
        init_database(db_config)
        console.print("✅ Database schema initialized")
    except StoreError as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]✅ ggnews initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Sources: {sources_path}\n\n"
            f"Next steps:\n"
            f"1. Set database password: [bold]export GGNEWS_DB_PASSWORD=your_password[/bold]\n"
            f"2. Optional, for LLM labeling: [bold]export OPENAI_API_KEY=your_key[/bold]\n"
            f"3. Run: [bold]ggnews fetch[/bold]",
            style="green",
        )
    )
