"""Fetch log listing."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .common import load_settings, open_store

console = Console()

STATUS_STYLES = {"started": "yellow", "completed": "green", "failed": "red"}


def logs_command(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of log rows", min=1, max=200),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Only this source name"),
) -> None:
    """Show recent fetch logs."""
    config = load_settings()

    with open_store(config) as store:
        names = {s.id: s.name for s in store.sources.list_all()}
        source_id = None
        if source:
            source_id = next((sid for sid, name in names.items() if name == source), None)
            if source_id is None:
                console.print(f"[red]Source '{source}' not found.[/red]")
                raise typer.Exit(1)
        logs = store.fetch_logs.recent(limit=limit, source_id=source_id)

    if not logs:
        console.print("[yellow]No fetch logs yet.[/yellow]")
        return

    table = Table(title="Fetch Logs")
    table.add_column("Started", style="dim")
    table.add_column("Source", style="cyan")
    table.add_column("Status")
    table.add_column("Found", justify="right")
    table.add_column("Processed", justify="right")
    table.add_column("New", justify="right", style="green")
    table.add_column("Error", style="red")

    for log in logs:
        style = STATUS_STYLES.get(log.status, "white")
        table.add_row(
            log.started_at.strftime("%Y-%m-%d %H:%M") if log.started_at else "",
            names.get(log.source_id, str(log.source_id)),
            f"[{style}]{log.status}[/{style}]",
            str(log.articles_found),
            str(log.articles_processed),
            str(log.articles_new),
            log.error_message or "",
        )

    console.print(table)
