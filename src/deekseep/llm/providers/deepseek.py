from typing import Any

import httpx
from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    DefaultAsyncHttpxClient,
)

from ..base import CompletionClient
from ..models import (
    ChatMessage,
    CompletionError,
    CompletionResult,
    ErrorKind,
    RequestConfig,
    build_request_body,
    parse_response_body,
)

DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_TIMEOUT = 60.0


class DeepSeekCompletionClient(CompletionClient):
    """DeepSeek completion client using the OpenAI-compatible API.

    Hidden design decisions:
    - DeepSeek API client initialization (via OpenAI SDK)
    - Credential resolution (user override, then built-in default)
    - Reading the raw JSON body so error objects are decoded the same
      way for every HTTP status
    - Mapping SDK exceptions onto ErrorKind

    Retries are disabled: each complete() call issues exactly one request.
    """

    def __init__(
        self,
        default_api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize DeepSeek client.

        Args:
            default_api_key: Built-in credential used when no override is set
            base_url: DeepSeek API base URL (default: https://api.deepseek.com/v1)
            timeout: Per-request timeout in seconds, None to wait forever
            http_client: Shared httpx client (tests inject a MockTransport here)
        """
        super().__init__()
        self._default_api_key = default_api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_http_client = http_client is None
        self._http_client = http_client or DefaultAsyncHttpxClient()

    @property
    def endpoint(self) -> str:
        """Full URL of the completions endpoint."""
        return f"{self._base_url}/chat/completions"

    def resolve_api_key(self, config: RequestConfig) -> str | None:
        """Pick the credential for a request: override first, then default."""
        if config.api_key_override:
            return config.api_key_override
        return self._default_api_key or None

    def _make_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
            http_client=self._http_client,
        )

    async def complete(
        self,
        messages: list[ChatMessage],
        config: RequestConfig
    ) -> CompletionResult:
        """Send the conversation to DeepSeek and return the first reply.

        Args:
            messages: Conversation history
            config: Model, sampling parameters and system prompt

        Returns:
            CompletionResult with reply text or a classified failure
        """
        api_key = self.resolve_api_key(config)
        if not api_key:
            self._debug("error", "No API key configured, request not sent")
            return CompletionResult.fail(
                ErrorKind.MISSING_CREDENTIAL,
                "API key is required. Set DEEKSEEP_API_KEY or DEEPSEEK_API_KEY."
            )

        body = build_request_body(messages, config)
        self._debug(
            "debug",
            f"POST {self.endpoint} model={body['model']} messages={len(body['messages'])}"
        )

        try:
            content = await self._send(api_key, body)
        except CompletionError as e:
            self._debug("error", f"{e.kind.value}: {e.message}")
            return e.to_result()

        self._debug("info", f"Received reply ({len(content)} chars)")
        return CompletionResult.ok(content)

    async def _send(self, api_key: str, body: dict[str, Any]) -> str:
        """Issue one request and decode the reply text.

        Raises:
            CompletionError: For transport, API and decoding failures
        """
        client = self._make_client(api_key)

        try:
            raw = await client.chat.completions.with_raw_response.create(
                model=body["model"],
                messages=body["messages"],
                temperature=body["temperature"],
                max_tokens=body["max_tokens"],
            )
            response = raw.http_response
        except APIStatusError as e:
            if not isinstance(e.body, dict):
                self._debug("debug", f"Status Code: {e.status_code}")
                # Body was not JSON, nothing structured to report
                raise CompletionError(ErrorKind.TRANSPORT, e.message, e.status_code) from e
            # Error statuses are decoded by the same policy as successful ones
            response = e.response
        except APITimeoutError as e:
            raise CompletionError(ErrorKind.TRANSPORT, f"Request timed out: {e}") from e
        except APIConnectionError as e:
            detail = f"{e} ({e.__cause__})" if e.__cause__ else str(e)
            raise CompletionError(ErrorKind.TRANSPORT, detail) from e

        self._debug("debug", f"Status Code: {response.status_code}")
        self._debug("debug", f"Raw Response: {response.text}")

        try:
            payload = response.json()
        except ValueError as e:
            raise CompletionError(
                ErrorKind.TRANSPORT,
                f"Could not decode response body: {e}",
                response.status_code,
            ) from e

        return parse_response_body(payload, response.status_code)

    async def close(self) -> None:
        """Close the shared HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()
