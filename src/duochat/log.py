"""Logging configuration."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Configure application logging.

    Routes all records through a single RichHandler on stderr. Calling it
    again replaces the previous handler instead of stacking a new one.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        console: Optional Rich console to render into
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    # The SDKs log every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
