"""Factory for creating settings providers."""

from typing import Any

from .base import SettingsProvider


def create_settings_provider(
    backend: str = "env",
    **kwargs: Any
) -> SettingsProvider:
    """Create a settings provider.

    Args:
        backend: Backend type ("env" or "memory")
        **kwargs: Backend-specific configuration

    Returns:
        SettingsProvider instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "env":
        from .env import EnvSettingsProvider
        return EnvSettingsProvider(**kwargs)

    elif backend == "memory":
        from .in_memory import InMemorySettingsProvider
        return InMemorySettingsProvider(**kwargs)

    raise ValueError(
        f"Unsupported settings backend: {backend}. "
        f"Supported backends: env, memory"
    )
