"""Pytest configuration and shared fixtures."""
import asyncio
import json
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from deekseep.llm import (
    ChatMessage,
    CompletionClient,
    CompletionResult,
    DeepSeekCompletionClient,
    RequestConfig,
)
from deekseep.settings import InMemorySettingsProvider


def completion_payload(*contents: str) -> dict[str, Any]:
    """Build a chat-completion response body with one choice per content."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "deepseek-chat",
        "choices": [
            {
                "index": index,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
            for index, content in enumerate(contents)
        ],
    }


class RecordingTransport:
    """httpx handler that records requests and replays a canned response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self._responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


class ScriptedClient(CompletionClient):
    """Completion client returning queued results.

    When a gate is set, complete() waits on it so tests can observe the
    controller while a request is in flight.
    """

    def __init__(self, *results: CompletionResult):
        super().__init__()
        self._results = list(results)
        self.calls: list[tuple[list[ChatMessage], RequestConfig]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def complete(self, messages: list[ChatMessage], config: RequestConfig) -> CompletionResult:
        self.calls.append((messages, config))
        if self.gate is not None:
            await self.gate.wait()
        return self._results.pop(0)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "deepseek": os.getenv("DEEPSEEK_API_KEY"),
    }


@pytest.fixture
def settings():
    """Settings with an API key and a fixed system prompt."""
    return InMemorySettingsProvider(api_key="sk-test", system_prompt="Be brief.")


@pytest.fixture
def make_client():
    """Factory for a DeepSeek client wired to a recording mock transport."""
    def _make(
        responder: Callable[[httpx.Request], httpx.Response],
        default_api_key: str | None = "sk-default",
    ) -> tuple[DeepSeekCompletionClient, RecordingTransport]:
        transport = RecordingTransport(responder)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        client = DeepSeekCompletionClient(
            default_api_key=default_api_key,
            http_client=http_client,
        )
        return client, transport

    return _make


@pytest.fixture
def sample_reply():
    """Return a reply mixing prose, inline and display math."""
    return (
        "The area of a circle is $$A=\\pi r^2$$\n\n"
        "where $r$ is the radius. It costs $5 to learn."
    )
