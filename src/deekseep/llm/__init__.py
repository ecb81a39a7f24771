from .base import CompletionClient
from .factory import create_completion_client
from .models import (
    AVAILABLE_MODELS,
    DEFAULT_MODEL_ID,
    MODEL_NAME_MAPPING,
    ChatMessage,
    CompletionError,
    CompletionResult,
    ErrorKind,
    RequestConfig,
    build_messages,
    build_request_body,
    parse_response_body,
    resolve_model_id,
)
from .providers import DeepSeekCompletionClient

__all__ = [
    "AVAILABLE_MODELS",
    "DEFAULT_MODEL_ID",
    "MODEL_NAME_MAPPING",
    "ChatMessage",
    "CompletionClient",
    "CompletionError",
    "CompletionResult",
    "DeepSeekCompletionClient",
    "ErrorKind",
    "RequestConfig",
    "build_messages",
    "build_request_body",
    "create_completion_client",
    "parse_response_body",
    "resolve_model_id",
]
