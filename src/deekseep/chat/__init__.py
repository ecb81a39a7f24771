"""Conversation module for deekseep.

Holds the append-only transcript and the controller that turns a
user submission into a reply.
"""

from .controller import TurnController, TurnState, format_error
from .models import Role, Turn
from .transcript import DEFAULT_GREETING, Transcript

__all__ = [
    "DEFAULT_GREETING",
    "Role",
    "Transcript",
    "Turn",
    "TurnController",
    "TurnState",
    "format_error",
]
