from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, CompletionResult, RequestConfig


class CompletionClient(ABC):
    """Abstract base class for chat-completion clients.

    This module hides the design decision of how a conversation reaches
    the provider. Implementations must handle:
    - Credential resolution and authentication
    - Request/response format conversion
    - Classifying every failure into an ErrorKind

    One call to complete() performs exactly one request and never retries.

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            result = await client.complete(messages, config)
    """

    def __init__(self) -> None:
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        """Send debug message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, "LLM", message)

    @abstractmethod
    async def complete(
        self,
        messages: list[ChatMessage],
        config: RequestConfig
    ) -> CompletionResult:
        """Send the conversation and return the first reply.

        Args:
            messages: Conversation history, oldest first
            config: Model parameters for this request

        Returns:
            CompletionResult with reply text or a classified failure.
            Never raises for MissingCredential, Transport, ApiError or
            MalformedResponse.
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "CompletionClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
