"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .articles import articles_app
from .fetch import fetch_command
from .init import init_command
from .logs import logs_command
from .sources import sources_app

app = typer.Typer(
    name="ggnews",
    help="ggLobby news ingestion and moderation",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("fetch")(fetch_command)
app.command("logs")(logs_command)
app.add_typer(sources_app, name="sources", help="Manage RSS sources")
app.add_typer(articles_app, name="articles", help="Review and moderate articles")


if __name__ == "__main__":
    app()
