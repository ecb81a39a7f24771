"""
Deekseep: a terminal chat client for the DeepSeek chat-completion API.

Replies are split into plain text and LaTeX math segments so each piece
can be routed to a suitable renderer.
"""

__version__ = "0.1.0"

from .chat import Role, Transcript, Turn, TurnController, TurnState
from .llm import (
    CompletionClient,
    CompletionResult,
    DeepSeekCompletionClient,
    ErrorKind,
    RequestConfig,
    create_completion_client,
)
from .rendering import MathStyle, Segment, SegmentKind, reconstruct, segment_math
from .settings import AppSettings, SettingsProvider, create_settings_provider

__all__ = [
    "AppSettings",
    "CompletionClient",
    "CompletionResult",
    "DeepSeekCompletionClient",
    "ErrorKind",
    "MathStyle",
    "RequestConfig",
    "Role",
    "Segment",
    "SegmentKind",
    "SettingsProvider",
    "Transcript",
    "Turn",
    "TurnController",
    "TurnState",
    "create_completion_client",
    "create_settings_provider",
    "reconstruct",
    "segment_math",
]
