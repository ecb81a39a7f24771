from typing import Any

from .base import CompletionClient
from .providers import DeepSeekCompletionClient


def create_completion_client(provider: str = "deepseek", **config: Any) -> CompletionClient:
    """Create a completion client instance.

    This factory function hides the instantiation logic for the provider.

    Args:
        provider: Provider type (only 'deepseek' is supported)
        **config: Provider-specific configuration
            For DeepSeek:
                - default_api_key: str | None
                - base_url: str (default: 'https://api.deepseek.com/v1')
                - timeout: float | None (default: 60.0)
                - http_client: httpx.AsyncClient | None

    Returns:
        Initialized completion client

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> client = create_completion_client(
        ...     "deepseek",
        ...     default_api_key="sk-..."
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "deepseek":
        return DeepSeekCompletionClient(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'deepseek'"
    )
