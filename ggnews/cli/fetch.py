"""Fetch command implementation."""

import typer
from rich.console import Console

from ..config import load_sources
from ..errors import GGNewsError, RunInProgressError
from ..pipeline import build_coordinator, print_ingestion_summary
from .common import load_settings, open_store

console = Console()


def fetch_command(
    sync: bool = typer.Option(
        True,
        "--sync/--no-sync",
        help="Sync sources.yaml into the database before fetching",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the run summary as JSON",
    ),
) -> None:
    """Fetch every active source and queue relevant articles for review."""
    config = load_settings()

    try:
        with open_store(config) as store:
            if sync and config.sources_path.exists():
                store.sources.sync(load_sources(config.sources_path))

            coordinator = build_coordinator(config, store)
            summary = coordinator.run()
    except RunInProgressError:
        console.print("[yellow]Another fetch is already running, try again later.[/yellow]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Fetch interrupted by user[/yellow]")
        raise typer.Exit(1)
    except GGNewsError as e:
        console.print(f"[red]Fetch failed: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        console.print_json(data=summary.to_response())
    else:
        print_ingestion_summary(summary)
