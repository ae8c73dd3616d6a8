"""Logging setup."""

import logging

from rich.logging import RichHandler

_configured = False


def configure_logging(level: str = "INFO", rich_tracebacks: bool = True) -> None:
    """Install a Rich console handler on the root logger once."""
    global _configured
    if _configured:
        return

    handler = RichHandler(
        rich_tracebacks=rich_tracebacks,
        markup=False,
        show_path=False,
        log_time_format="[%X]",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for noisy in ("httpx", "httpcore", "openai", "psycopg.pool"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _configured = True
