"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..llm.catalog import PROVIDER_LABELS, PROVIDER_MODELS, default_model
from ..log import setup_logging
from ..ui.config import DEFAULT_SERVER_URL
from .providers import get_config, warn_missing_keys

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="duochat",
    help="Chat relay for Gemini and Cysic models, with a terminal client",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(
        None,
        "--host",
        help="Bind address (default: DUOCHAT_HOST or 127.0.0.1)"
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help="Bind port (default: DUOCHAT_PORT or 8000)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level: debug, info, warning or error"
    ),
    reload: bool = typer.Option(
        False,
        "--reload",
        help="Restart the server when source files change"
    ),
):
    """Run the HTTP API server."""
    import uvicorn

    from ..api import create_app

    config = get_config(console)
    level = (log_level or config.log_level).upper()
    setup_logging(level)
    warn_missing_keys(config, console)

    bind_host = host or config.host
    bind_port = port or config.port
    console.print(f"[dim]Serving on http://{bind_host}:{bind_port}[/dim]")

    if reload:
        # Reload needs an import string; the factory re-reads the environment
        uvicorn.run(
            "duochat.api.app:create_app",
            factory=True,
            host=bind_host,
            port=bind_port,
            reload=True,
            log_config=None,
            log_level=level.lower(),
        )
    else:
        uvicorn.run(
            create_app(config),
            host=bind_host,
            port=bind_port,
            log_config=None,
            log_level=level.lower(),
        )


@app.command()
def chat(
    url: str = typer.Option(
        DEFAULT_SERVER_URL,
        "--url",
        "-u",
        help="Base URL of a running duochat server"
    ),
):
    """Launch the interactive TUI chat client."""
    from ..ui import run_chat_tui

    try:
        asyncio.run(run_chat_tui(url))
    except KeyboardInterrupt:
        pass
    console.print("\n[dim]Goodbye![/dim]")


@app.command()
def models():
    """List the providers and the models each one serves."""
    table = Table(title="Available models")
    table.add_column("Provider", style="bold cyan")
    table.add_column("Model")
    table.add_column("Default", justify="center")

    for provider, model_ids in PROVIDER_MODELS.items():
        for model in model_ids:
            table.add_row(
                PROVIDER_LABELS[provider],
                model,
                "[green]+[/green]" if model == default_model(provider) else "",
            )

    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
