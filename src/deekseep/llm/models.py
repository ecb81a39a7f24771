"""Data models for the chat-completion exchange.

Covers three layers:
- Request side: RequestConfig and ChatMessage
- Wire side: ResponseBody and friends, mirroring the provider's JSON
- Result side: CompletionResult and ErrorKind, what callers consume
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..settings.models import AppSettings

# UI-facing model labels mapped to provider model identifiers
MODEL_NAME_MAPPING: dict[str, str] = {
    "DeekSeep-V3": "deepseek-chat",
    "DeekSeep-R1": "deepseek-coder",
}
DEFAULT_MODEL_ID = "deepseek-chat"
AVAILABLE_MODELS: list[str] = list(MODEL_NAME_MAPPING)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4000


def resolve_model_id(label: str) -> str:
    """Translate a UI model label to the provider model id.

    Unknown labels fall back to DEFAULT_MODEL_ID.
    """
    return MODEL_NAME_MAPPING.get(label, DEFAULT_MODEL_ID)


class ErrorKind(str, Enum):
    """Terminal failure categories for one completion request."""

    MISSING_CREDENTIAL = "missing_credential"
    TRANSPORT = "transport"
    API_ERROR = "api_error"
    MALFORMED_RESPONSE = "malformed_response"


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")


class RequestConfig(BaseModel):
    """Per-request model parameters.

    Built fresh from settings every time a request is prepared,
    never cached across requests.
    """

    model_config = ConfigDict(frozen=True)

    api_model_id: str = Field(default=DEFAULT_MODEL_ID, description="Provider model identifier")
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=1.0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    system_prompt: str | None = Field(default=None, description="Prepended as a system message")
    api_key_override: str | None = Field(
        default=None,
        description="User-supplied credential, preferred over the client default"
    )

    @classmethod
    def from_settings(cls, settings: AppSettings, system_prompt: str | None = None) -> "RequestConfig":
        """Create a config from a settings snapshot.

        Non-positive temperature and max tokens fall back to the defaults
        (0.7 and 4000); temperatures above 1.0 are clamped.

        Args:
            settings: Current application settings
            system_prompt: Prompt to use when settings do not carry one
        """
        temperature = settings.temperature if settings.temperature > 0 else DEFAULT_TEMPERATURE
        max_tokens = settings.max_tokens if settings.max_tokens > 0 else DEFAULT_MAX_TOKENS
        prompt = settings.system_prompt if settings.system_prompt is not None else system_prompt

        return cls(
            api_model_id=resolve_model_id(settings.model_label),
            temperature=min(temperature, 1.0),
            max_tokens=max_tokens,
            system_prompt=prompt,
            api_key_override=settings.api_key or None,
        )


class APIErrorBody(BaseModel):
    """Structured error object returned by the provider."""

    message: str
    type: str | None = None
    code: str | int | None = None


class Choice(BaseModel):
    """One completion choice."""

    message: ChatMessage | None = None


class ResponseBody(BaseModel):
    """Top-level JSON body of a chat-completion response."""

    model_config = ConfigDict(extra="ignore")

    choices: list[Choice] | None = None
    error: APIErrorBody | None = None


class CompletionResult(BaseModel):
    """Outcome of one completion request: reply text or a classified failure."""

    model_config = ConfigDict(frozen=True)

    text: str | None = Field(default=None, description="Reply text on success")
    error_kind: ErrorKind | None = Field(default=None, description="Failure category")
    message: str | None = Field(default=None, description="Human-readable failure diagnostic")
    status_code: int | None = Field(default=None, description="HTTP status, when one was received")

    @classmethod
    def ok(cls, text: str) -> "CompletionResult":
        return cls(text=text)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str, status_code: int | None = None) -> "CompletionResult":
        return cls(error_kind=kind, message=message, status_code=status_code)

    @property
    def is_success(self) -> bool:
        return self.error_kind is None


class CompletionError(Exception):
    """Classified failure raised inside a completion client."""

    def __init__(self, kind: ErrorKind, message: str, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def to_result(self) -> CompletionResult:
        return CompletionResult.fail(self.kind, self.message, self.status_code)


def build_messages(
    messages: list[ChatMessage],
    system_prompt: str | None = None
) -> list[dict[str, str]]:
    """Convert messages to the wire format, prepending the system prompt.

    The system prompt is prepended whenever it is non-empty, even if the
    messages already start with a system message.
    """
    wire_messages = [{"role": msg.role, "content": msg.content} for msg in messages]
    if system_prompt:
        wire_messages.insert(0, {"role": "system", "content": system_prompt})
    return wire_messages


def build_request_body(messages: list[ChatMessage], config: RequestConfig) -> dict[str, Any]:
    """Build the JSON request body for one completion call."""
    return {
        "model": config.api_model_id,
        "messages": build_messages(messages, config.system_prompt),
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }


def parse_response_body(payload: Any, status_code: int | None = None) -> str:
    """Extract the reply text from a decoded response body.

    An error object wins over choices. Without an error, the first choice's
    message content is returned; later choices are ignored.

    Args:
        payload: Decoded JSON body
        status_code: HTTP status code attached to API errors

    Returns:
        Content of the first choice's message

    Raises:
        CompletionError: API_ERROR for an error object, MALFORMED_RESPONSE
            when no usable choice is present
    """
    if not isinstance(payload, dict):
        raise CompletionError(
            ErrorKind.MALFORMED_RESPONSE,
            f"Expected a JSON object, got {type(payload).__name__}",
            status_code,
        )

    try:
        body = ResponseBody.model_validate(payload)
    except ValueError as e:
        raise CompletionError(
            ErrorKind.MALFORMED_RESPONSE,
            f"Unexpected response structure: {e}",
            status_code,
        ) from e

    if body.error is not None:
        raise CompletionError(ErrorKind.API_ERROR, body.error.message, status_code)

    if not body.choices or body.choices[0].message is None:
        raise CompletionError(
            ErrorKind.MALFORMED_RESPONSE,
            "No valid choice or message found in response",
            status_code,
        )

    return body.choices[0].message.content
