"""Sources management commands."""

from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config, SourceConfig, load_sources, save_sources
from ..ingestion import RSSFetcher
from ..models import REGIONS, Source
from .common import load_settings, open_store

console = Console()
sources_app = typer.Typer(help="Manage RSS sources")


def _read_sources(config: Config) -> List[SourceConfig]:
    try:
        return load_sources(config.sources_path)
    except FileNotFoundError:
        console.print("[red]Sources file not found. Run 'ggnews init' first.[/red]")
        raise typer.Exit(1)


@sources_app.command("list")
def sources_list() -> None:
    """List all configured sources."""
    sources = _read_sources(Config())

    if not sources:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("Name", style="cyan")
    table.add_column("Region", style="magenta")
    table.add_column("Active", style="yellow")
    table.add_column("URL", style="blue")

    for source in sources:
        table.add_row(
            source.name,
            source.region or "auto",
            "✓" if source.is_active else "✗",
            source.url,
        )

    console.print(table)


@sources_app.command("add")
def sources_add(
    name: str = typer.Option(..., "--name", "-n", help="Source name"),
    url: str = typer.Option(..., "--url", "-u", help="RSS feed URL"),
    region: Optional[str] = typer.Option(
        None,
        "--region",
        "-r",
        help=f"Region override ({', '.join(REGIONS)})",
    ),
) -> None:
    """Add a new RSS source."""
    config = Config()

    try:
        sources = load_sources(config.sources_path)
    except FileNotFoundError:
        sources = []

    if any(s.name == name or s.url == url for s in sources):
        console.print(f"[red]Source '{name}' or URL already exists.[/red]")
        raise typer.Exit(1)

    try:
        new_source = SourceConfig(name=name, url=url, region=region, is_active=True)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    sources.append(new_source)
    save_sources(sources, config.sources_path)

    console.print(f"[green]✅ Added source: {name}[/green]")
    console.print("Run [bold]ggnews sources sync[/bold] to apply it to the database.")


@sources_app.command("remove")
def sources_remove(
    name: str = typer.Argument(..., help="Source name to remove"),
) -> None:
    """Remove a source."""
    config = Config()
    sources = _read_sources(config)

    original_count = len(sources)
    sources = [s for s in sources if s.name != name]

    if len(sources) == original_count:
        console.print(f"[red]Source '{name}' not found.[/red]")
        raise typer.Exit(1)

    save_sources(sources, config.sources_path)
    console.print(f"[green]✅ Removed source: {name}[/green]")


@sources_app.command("sync")
def sources_sync() -> None:
    """Write sources.yaml into the database and deactivate sources no longer listed."""
    config = load_settings()
    sources = _read_sources(config)

    with open_store(config) as store:
        deactivated = store.sources.sync(sources)
        stored = store.sources.list_all()

    console.print(f"[green]✅ Synced {len(sources)} sources ({deactivated} deactivated)[/green]")

    table = Table(title="Database Sources")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Active", style="yellow")
    table.add_column("Last fetched", style="dim")
    for source in stored:
        table.add_row(
            str(source.id),
            source.name,
            "✓" if source.is_active else "✗",
            source.last_fetched_at.strftime("%Y-%m-%d %H:%M") if source.last_fetched_at else "never",
        )
    console.print(table)


@sources_app.command("test")
def sources_test(
    name: Optional[str] = typer.Argument(None, help="Source name to test (or test all)"),
) -> None:
    """Fetch feeds and report how many items parse."""
    config = Config()
    sources = _read_sources(config)

    if name:
        sources = [s for s in sources if s.name == name]
        if not sources:
            console.print(f"[red]Source '{name}' not found.[/red]")
            raise typer.Exit(1)

    try:
        ingestion = config.config.ingestion
        fetcher = RSSFetcher(timeout=ingestion.request_timeout, user_agent=ingestion.user_agent)
    except FileNotFoundError:
        fetcher = RSSFetcher()

    for source in sources:
        if not source.is_active:
            console.print(f"[yellow]⚠️  {source.name}: Inactive[/yellow]")
            continue

        result = fetcher.fetch_feed(Source(name=source.name, url=source.url, region=source.region))
        if result.success:
            console.print(f"[green]✅ {source.name}: OK ({result.item_count} items)[/green]")
        else:
            console.print(f"[red]❌ {source.name}: Failed - {result.error}[/red]")
