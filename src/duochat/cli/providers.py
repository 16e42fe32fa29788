"""Configuration helpers for CLI commands.

Centralizes reading AppConfig from the environment and reporting problems
with it, so command implementations only see a valid configuration.
"""

from rich.console import Console

from ..config import AppConfig

# Default console for output
_console = Console()


def get_config(console: Console | None = None) -> AppConfig:
    """Build the application configuration from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Application configuration

    Raises:
        SystemExit: If a variable has an invalid value
    """
    import typer

    con = console or _console
    try:
        return AppConfig.from_env()
    except ValueError as e:
        con.print(f"[red]Error: invalid configuration: {e}[/red]")
        raise typer.Exit(code=1)


def warn_missing_keys(config: AppConfig, console: Console | None = None) -> None:
    """Warn about provider keys that are not set.

    The server still starts: Gemini requests fail without a key, and Cysic
    requests can carry their own.
    """
    con = console or _console
    if not config.gemini_api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set, Gemini requests will fail[/yellow]")
    if not config.cysic_api_key:
        con.print(
            "[yellow]Warning: CYSIC_API_KEY not set, Cysic requests need a custom API key[/yellow]"
        )
