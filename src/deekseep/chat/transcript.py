"""Append-only conversation transcript.

Hides how turns are stored and how listeners learn about new turns.
"""

import threading
from collections.abc import Callable, Iterator
from typing import Any

from ..llm.models import ChatMessage
from .models import Role, Turn

TurnListener = Callable[[Turn], None]

DEFAULT_GREETING = "Hi, how can I help you today?"


class Transcript:
    """Ordered, append-only log of turns.

    Insertion order is conversation order. There is no edit or removal
    API. Listeners registered with subscribe() are called synchronously
    after every append, in registration order. A listener that raises does not
    stop the others or the append; the failure is reported through the
    debug callback.

    Example:
        transcript = Transcript()
        unsubscribe = transcript.subscribe(lambda turn: print(turn.content))
        transcript.add(Role.USER, "Hello")
        unsubscribe()
    """

    def __init__(self, turns: list[Turn] | None = None) -> None:
        self._turns: list[Turn] = list(turns or [])
        self._listeners: list[TurnListener] = []
        self._lock = threading.Lock()
        self._debug_callback: Any | None = None

    @classmethod
    def with_greeting(cls, greeting: str = DEFAULT_GREETING) -> "Transcript":
        """Create a transcript that opens with an assistant greeting."""
        return cls([Turn(role=Role.ASSISTANT, content=greeting)])

    def set_debug_callback(self, callback: Any) -> None:
        """Set the callback receiving listener failures.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "CORE", message)

    def append(self, turn: Turn) -> Turn:
        """Append a turn and notify listeners."""
        with self._lock:
            self._turns.append(turn)
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(turn)
            except Exception as e:
                self._debug("error", f"Transcript listener failed: {type(e).__name__}: {e}")
        return turn

    def add(self, role: Role, content: str) -> Turn:
        """Create and append a turn."""
        return self.append(Turn(role=role, content=content))

    def subscribe(self, listener: TurnListener) -> Callable[[], None]:
        """Register a listener for append events.

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def turns(self) -> tuple[Turn, ...]:
        """Snapshot of all turns."""
        with self._lock:
            return tuple(self._turns)

    def last(self) -> Turn | None:
        """Most recent turn, if any."""
        with self._lock:
            return self._turns[-1] if self._turns else None

    def last_assistant(self) -> Turn | None:
        """Most recent assistant turn, if any."""
        for turn in reversed(self.turns):
            if turn.role == Role.ASSISTANT:
                return turn
        return None

    def to_messages(self) -> list[ChatMessage]:
        """Convert all turns to provider messages, oldest first."""
        return [turn.to_message() for turn in self.turns]

    def __len__(self) -> int:
        with self._lock:
            return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self.turns)
