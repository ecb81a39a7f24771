"""Provider factory functions for CLI.

Centralizes creation of settings and completion client instances from
environment variables. Hides configuration details from command
implementations.
"""

import os
from typing import Any

from rich.console import Console

from ..llm import CompletionClient, create_completion_client
from ..llm.providers.deepseek import DEFAULT_BASE_URL
from ..settings import SettingsProvider, create_settings_provider

# Default console for output
_console = Console()


def get_settings(**overrides: Any) -> SettingsProvider:
    """Create the settings provider, applying command-line overrides.

    Args:
        **overrides: Setting values from CLI options; None values are skipped

    Returns:
        Environment-backed settings provider
    """
    settings = create_settings_provider("env")
    changes = {key: value for key, value in overrides.items() if value is not None}
    if changes:
        settings.update(**changes)
    return settings


def get_client() -> CompletionClient:
    """Create the completion client from environment variables.

    Environment variables:
        DEEPSEEK_API_KEY: Built-in default API key (used when no override is set)
        DEEPSEEK_BASE_URL: API base URL (default: https://api.deepseek.com/v1)
    """
    return create_completion_client(
        "deepseek",
        default_api_key=os.getenv("DEEPSEEK_API_KEY"),
        base_url=os.getenv("DEEPSEEK_BASE_URL", DEFAULT_BASE_URL),
        timeout=None,
    )


def has_credentials(settings: SettingsProvider) -> bool:
    """Check whether any API key is available."""
    return bool(settings.load().api_key or os.getenv("DEEPSEEK_API_KEY"))


def require_credentials(settings: SettingsProvider, console: Console | None = None) -> None:
    """Exit with an error if no API key is configured.

    Raises:
        SystemExit: If neither DEEKSEEP_API_KEY nor DEEPSEEK_API_KEY is set
    """
    import typer

    con = console or _console
    if not has_credentials(settings):
        con.print("[red]Error: API key is required. Set DEEKSEEP_API_KEY or DEEPSEEK_API_KEY.[/red]")
        raise typer.Exit(code=1)
