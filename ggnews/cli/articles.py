"""Article review and moderation commands."""

import getpass
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..classification.keywords import GAME_DISPLAY_NAMES
from ..errors import ModerationError
from ..models import Article, ArticleQuery
from ..moderation import ModerationGateway, parse_draft
from .common import load_settings, open_store

console = Console()
articles_app = typer.Typer(help="Review and moderate articles")

STATUS_STYLES = {
    "pending": "yellow",
    "approved": "blue",
    "rejected": "red",
    "published": "green",
}

ModeratorOption = typer.Option(
    None,
    "--moderator",
    "-m",
    envvar="GGNEWS_MODERATOR",
    help="Operator id recorded on the article (default: login name)",
)


def resolve_moderator(moderator: Optional[str]) -> str:
    """Operator id from the option, falling back to the login name."""
    if moderator and moderator.strip():
        return moderator.strip()
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        console.print("[red]Cannot determine operator id, pass --moderator.[/red]")
        raise typer.Exit(1)


def _run(action):
    """Open the store, run ``action(gateway)`` and report moderation errors."""
    config = load_settings()
    with open_store(config) as store:
        gateway = ModerationGateway(store.articles)
        try:
            return action(gateway)
        except ModerationError as e:
            console.print(f"[red]❌ {e}[/red]")
            raise typer.Exit(1)


def _moderate(action, moderator: Optional[str]):
    """Like _run, passing the resolved operator id as the second argument."""
    who = resolve_moderator(moderator)
    return _run(lambda gateway: action(gateway, who))


def _status(article: Article) -> str:
    style = STATUS_STYLES.get(article.status, "white")
    return f"[{style}]{article.status}[/{style}]"


def print_article(article: Article) -> None:
    """Print one article in full."""
    game = GAME_DISPLAY_NAMES.get(article.game_slug, article.game_slug)
    lines = [
        f"[bold]{article.title}[/bold]",
        "",
        f"Status: {_status(article)}   Game: {game}   Category: {article.category}   Region: {article.region}",
        f"Tags: {', '.join(article.tags) or '-'}",
        f"Relevance: {article.ai_relevance_score:.2f}   AI processed: {'yes' if article.ai_processed else 'no'}",
        f"Source: {'manual' if article.source_id is None else article.source_id}   URL: {article.original_url or '-'}",
    ]
    if article.summary:
        lines += ["", article.summary]
    if article.rejection_reason:
        lines += ["", f"[red]Rejected: {article.rejection_reason}[/red]"]
    if article.moderated_by:
        lines += ["", f"[dim]Moderated by {article.moderated_by} at {article.moderated_at}[/dim]"]
    if article.published_at:
        lines.append(f"[dim]Published at {article.published_at}[/dim]")

    console.print(Panel("\n".join(lines), title=f"Article #{article.id}"))


@articles_app.command("list")
def articles_list(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status"),
    game: Optional[str] = typer.Option(None, "--game", "-g", help="Filter by game slug"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Filter by category"),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="Filter by region"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Search titles"),
    source_type: Optional[str] = typer.Option(None, "--source-type", help="manual or fetched"),
    limit: int = typer.Option(20, "--limit", "-n", min=1, max=100),
    offset: int = typer.Option(0, "--offset", min=0),
) -> None:
    """List articles, newest first."""
    try:
        query = ArticleQuery(
            status=status,
            game=game,
            category=category,
            region=region,
            search=search,
            source_type=source_type,
            limit=limit,
            offset=offset,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    page = _run(lambda gateway: gateway.list_articles(query))

    if not page.articles:
        console.print("[yellow]No articles found.[/yellow]")
        return

    table = Table(title=f"Articles {page.offset + 1}-{page.offset + len(page.articles)} of {page.total}")
    table.add_column("ID", justify="right")
    table.add_column("Status")
    table.add_column("Game", style="magenta")
    table.add_column("Category")
    table.add_column("Region")
    table.add_column("Score", justify="right")
    table.add_column("Title", style="cyan")

    for article in page.articles:
        table.add_row(
            str(article.id),
            _status(article),
            article.game_slug,
            article.category,
            article.region,
            f"{article.ai_relevance_score:.1f}",
            article.title,
        )

    console.print(table)


@articles_app.command("show")
def articles_show(article_id: int = typer.Argument(..., help="Article id")) -> None:
    """Show one article."""
    print_article(_run(lambda gateway: gateway.get_article(article_id)))


@articles_app.command("publish")
def articles_publish(
    article_id: int = typer.Argument(..., help="Article id"),
    moderator: Optional[str] = ModeratorOption,
) -> None:
    """Publish an article."""
    article = _moderate(lambda gateway, who: gateway.publish(article_id, who), moderator)
    console.print(f"[green]✅ Published #{article.id}: {article.title}[/green]")


@articles_app.command("reject")
def articles_reject(
    article_id: int = typer.Argument(..., help="Article id"),
    reason: Optional[str] = typer.Option(None, "--reason", help="Rejection reason"),
    moderator: Optional[str] = ModeratorOption,
) -> None:
    """Reject an article."""
    article = _moderate(lambda gateway, who: gateway.reject(article_id, who, reason), moderator)
    console.print(f"[yellow]Rejected #{article.id}: {article.title}[/yellow]")


@articles_app.command("approve")
def articles_approve(
    article_id: int = typer.Argument(..., help="Article id"),
    moderator: Optional[str] = ModeratorOption,
) -> None:
    """Approve an article for later publication."""
    article = _moderate(lambda gateway, who: gateway.approve(article_id, who), moderator)
    console.print(f"[blue]Approved #{article.id}: {article.title}[/blue]")


@articles_app.command("unpublish")
def articles_unpublish(
    article_id: int = typer.Argument(..., help="Article id"),
    moderator: Optional[str] = ModeratorOption,
) -> None:
    """Take a published article down and return it to the pending queue."""
    article = _moderate(lambda gateway, who: gateway.unpublish(article_id, who), moderator)
    console.print(f"[yellow]Unpublished #{article.id}: {article.title}[/yellow]")


@articles_app.command("edit")
def articles_edit(
    article_id: int = typer.Argument(..., help="Article id"),
    title: Optional[str] = typer.Option(None, "--title"),
    summary: Optional[str] = typer.Option(None, "--summary"),
    excerpt: Optional[str] = typer.Option(None, "--excerpt"),
    thumbnail_url: Optional[str] = typer.Option(None, "--thumbnail-url"),
    game: Optional[str] = typer.Option(None, "--game"),
    category: Optional[str] = typer.Option(None, "--category"),
    region: Optional[str] = typer.Option(None, "--region"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Replace tags (repeatable)"),
    status: Optional[str] = typer.Option(None, "--status"),
    featured: Optional[bool] = typer.Option(None, "--featured/--not-featured"),
    pinned: Optional[bool] = typer.Option(None, "--pinned/--not-pinned"),
    moderator: Optional[str] = ModeratorOption,
) -> None:
    """Edit article fields."""
    changes: Dict[str, Any] = {
        "title": title,
        "summary": summary,
        "excerpt": excerpt,
        "thumbnail_url": thumbnail_url,
        "game_slug": game,
        "category": category,
        "region": region,
        "tags": list(tags) if tags else None,
        "status": status,
        "is_featured": featured,
        "is_pinned": pinned,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        console.print("[yellow]Nothing to change.[/yellow]")
        return

    article = _moderate(lambda gateway, who: gateway.update_article(article_id, who, changes), moderator)
    print_article(article)


@articles_app.command("post")
def articles_post(
    title: str = typer.Option(..., "--title", "-t", help="Article title"),
    game: str = typer.Option(..., "--game", "-g", help="Game slug"),
    summary: Optional[str] = typer.Option(None, "--summary"),
    excerpt: Optional[str] = typer.Option(None, "--excerpt"),
    url: str = typer.Option("", "--url", help="Original URL"),
    thumbnail_url: Optional[str] = typer.Option(None, "--thumbnail-url"),
    category: str = typer.Option("general", "--category", "-c"),
    region: str = typer.Option("india", "--region", "-r"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Tag (repeatable)"),
    status: str = typer.Option("published", "--status"),
    featured: bool = typer.Option(False, "--featured"),
    pinned: bool = typer.Option(False, "--pinned"),
    moderator: Optional[str] = ModeratorOption,
) -> None:
    """Create a manual article."""

    def create(gateway: ModerationGateway, who: str) -> Article:
        draft = parse_draft({
            "title": title,
            "game_slug": game,
            "summary": summary,
            "excerpt": excerpt,
            "original_url": url,
            "thumbnail_url": thumbnail_url,
            "category": category,
            "region": region,
            "tags": list(tags or []),
            "status": status,
            "is_featured": featured,
            "is_pinned": pinned,
        })
        return gateway.create_article(draft, who)

    print_article(_moderate(create, moderator))


@articles_app.command("delete")
def articles_delete(
    article_id: int = typer.Argument(..., help="Article id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    moderator: Optional[str] = ModeratorOption,
) -> None:
    """Delete an article."""
    if not yes:
        typer.confirm(f"Delete article #{article_id}?", abort=True)
    _moderate(lambda gateway, who: gateway.delete_article(article_id, who), moderator)
    console.print(f"[green]✅ Deleted article #{article_id}[/green]")
