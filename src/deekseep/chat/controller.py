"""Turn controller: one user submission through to a visible reply.

Hides the sequencing of a submission (append user turn, call the
completion client, append the reply or an error turn) and the guard that
keeps a single request in flight.
"""

import asyncio
import threading
from enum import Enum
from typing import Any

from ..llm.base import CompletionClient
from ..llm.models import CompletionResult, ErrorKind, RequestConfig
from ..prompts import get_system_prompt
from ..settings.base import SettingsProvider
from .models import Role, Turn
from .transcript import Transcript


class TurnState(str, Enum):
    """Controller state. Idle -> Sending -> Idle."""

    IDLE = "idle"
    SENDING = "sending"


def format_error(result: CompletionResult) -> str:
    """Human-readable transcript text for a failed completion."""
    return f"Error: {result.message}"


class TurnController:
    """Sequences user submissions against a completion client.

    Only one submission may be in flight. The Idle -> Sending transition
    is a compare-and-swap under a lock, so concurrent submit() calls from
    any thread or task see exactly one winner; losers are ignored.

    Failures never escape submit(): every error becomes an assistant turn
    in the transcript.

    Example:
        controller = TurnController(client, settings)
        reply = await controller.submit("What is $$e^{i\\pi}$$?")
    """

    def __init__(
        self,
        client: CompletionClient,
        settings: SettingsProvider,
        transcript: Transcript | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            client: Completion client performing the HTTP exchange
            settings: Provider read fresh for every request
            transcript: Transcript to append to (new empty one if None)
            timeout: Deadline in seconds; None uses the request_timeout setting,
                zero or negative disables it
        """
        self._client = client
        self._settings = settings
        self._transcript = transcript if transcript is not None else Transcript()
        self._timeout = timeout
        self._state = TurnState.IDLE
        self._state_lock = threading.Lock()
        self._debug_callback: Any | None = None
        self._last_result: CompletionResult | None = None

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state == TurnState.SENDING

    @property
    def last_result(self) -> CompletionResult | None:
        """Outcome of the most recent completed submission."""
        return self._last_result

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)

        The callback is propagated to the transcript and the completion client.
        """
        self._debug_callback = callback
        self._transcript.set_debug_callback(callback)
        self._client.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "CORE", message)

    def _try_begin(self) -> bool:
        with self._state_lock:
            if self._state != TurnState.IDLE:
                return False
            self._state = TurnState.SENDING
            return True

    def _finish(self) -> None:
        with self._state_lock:
            self._state = TurnState.IDLE

    def build_config(self) -> RequestConfig:
        """Build a request config from the current settings."""
        settings = self._settings.load()
        system_prompt = None if settings.system_prompt is not None else get_system_prompt()
        return RequestConfig.from_settings(settings, system_prompt=system_prompt)

    def _resolve_timeout(self) -> float | None:
        """Deadline for the next request; zero or negative means none."""
        if self._timeout is not None:
            return self._timeout if self._timeout > 0 else None
        return self._settings.load().request_timeout

    async def submit(self, text: str) -> Turn | None:
        """Submit one user message and wait for the reply.

        Args:
            text: Raw user input

        Returns:
            The assistant turn appended for this submission (reply or error),
            or None if the input was blank or a request is already in flight
        """
        prompt = text.strip()
        if not prompt:
            self._debug("debug", "Ignoring blank submission")
            return None

        if not self._try_begin():
            self._debug("warning", "Submission rejected: request already in flight")
            return None

        try:
            self._transcript.add(Role.USER, prompt)
            result = await self._request()
            self._last_result = result
            if result.is_success:
                return self._transcript.add(Role.ASSISTANT, result.text or "")
            self._debug("error", f"{result.error_kind.value}: {result.message}")
            return self._transcript.add(Role.ASSISTANT, format_error(result))
        finally:
            self._finish()

    async def _request(self) -> CompletionResult:
        """Run one completion call, converting every failure into a result."""
        try:
            config = self.build_config()
            timeout = self._resolve_timeout()
        except Exception as e:
            return CompletionResult.fail(ErrorKind.TRANSPORT, f"Invalid settings: {e}")

        messages = self._transcript.to_messages()
        self._debug("info", f"Sending {len(messages)} messages to {config.api_model_id}")

        try:
            return await asyncio.wait_for(self._client.complete(messages, config), timeout)
        except asyncio.TimeoutError:
            return CompletionResult.fail(
                ErrorKind.TRANSPORT,
                f"Request timed out after {timeout:g}s"
            )
        except Exception as e:
            return CompletionResult.fail(ErrorKind.TRANSPORT, str(e) or type(e).__name__)
