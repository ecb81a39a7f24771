"""Data models for the conversation.

Hides the representation of a single turn in the transcript.
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..llm.models import ChatMessage


class Role(str, Enum):
    """Author of a turn."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Turn(BaseModel):
    """One message in the conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()), description="Opaque unique identifier")
    role: Role = Field(description="Author of the turn")
    content: str = Field(description="Message text")
    created_at: datetime = Field(default_factory=datetime.now)

    def to_message(self) -> ChatMessage:
        """Convert to the message format sent to the provider."""
        return ChatMessage(role=self.role.value, content=self.content)
