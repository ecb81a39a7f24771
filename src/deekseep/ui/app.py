"""Main Textual TUI application.

Orchestrates the UI components and hands user submissions to the
TurnController. The transcript is the source of truth; the chat widget
re-renders from its append events.
"""

import asyncio
import threading
from typing import Any

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..chat import DEFAULT_GREETING, Transcript, Turn, TurnController
from ..llm import AVAILABLE_MODELS, CompletionClient
from ..settings import ColorScheme, SettingsProvider
from .config import LogLevel
from .styles import APP_CSS
from .themes import THEMES, theme_for
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class DeekseepApp(App):
    """Textual TUI for chatting with DeepSeek."""

    CSS = APP_CSS
    TITLE = "Deekseep"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "cycle_model", "Model"),
        Binding("ctrl+t", "toggle_theme", "Theme"),
        Binding("ctrl+u", "toggle_markdown", "Markdown"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        client: CompletionClient,
        settings: SettingsProvider,
        log_level: str | None = None,
        greeting: str | None = DEFAULT_GREETING,
        timeout: float | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings
        self._log_level = log_level
        transcript = Transcript.with_greeting(greeting) if greeting else Transcript()
        self._controller = TurnController(client, settings, transcript, timeout=timeout)
        self._unsubscribe: Any | None = None

    @property
    def controller(self) -> TurnController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        for theme in THEMES.values():
            self.register_theme(theme)

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.set_visible(True)
            log_panel.add_entry(
                LogLevel.INFO, "TUI", f"Log panel enabled with level: {log_panel.log_level.name}"
            )
        self._controller.set_debug_callback(self._debug_callback)

        settings = self._settings.load()
        self.theme = theme_for(settings.color_scheme).name

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.set_render_options(settings.use_markdown_renderer, settings.render_math_in_markdown)
        for turn in self._controller.transcript:
            chat.add_turn(turn)
        self._unsubscribe = self._controller.transcript.subscribe(self._on_turn_appended)

        self._update_subtitle()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach from the transcript and abandon any pending request."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.workers.cancel_group(self, "completion")

    def _call_thread_safe(self, func: Any, *args: Any) -> None:
        """Call a function in a thread-safe manner for UI updates."""
        if self._thread_id != threading.get_ident():
            self.call_from_thread(func, *args)
        else:
            func(*args)

    def _debug_callback(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        self._call_thread_safe(log_panel.add_entry, level, component, message)

    def _on_turn_appended(self, turn: Turn) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        self._call_thread_safe(chat.add_turn, turn)

    def _update_subtitle(self) -> None:
        settings = self._settings.load()
        renderer = "markdown" if settings.use_markdown_renderer else "latex"
        self.sub_title = f"{settings.model_label} | {renderer} | {settings.color_scheme.value}"

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._controller.is_busy:
            self.notify("Still waiting for the previous reply", severity="warning", timeout=2)
            return
        self._send(event.value)

    @work(exclusive=False, group="completion")
    async def _send(self, text: str) -> None:
        """Run one submission as a background async worker."""
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.set_busy(True)
        try:
            reply = await self._controller.submit(text)
            result = self._controller.last_result
            if reply is not None and result is not None and not result.is_success:
                self.notify(reply.content[:80], severity="error", timeout=5)
        finally:
            # The app may already be gone if the worker was abandoned on exit
            if input_bar.is_mounted:
                input_bar.set_busy(False)
                input_bar.focus_input()

    def action_cycle_model(self) -> None:
        """Switch to the next available model."""
        current = self._settings.load().model_label
        index = AVAILABLE_MODELS.index(current) if current in AVAILABLE_MODELS else -1
        next_model = AVAILABLE_MODELS[(index + 1) % len(AVAILABLE_MODELS)]
        self._settings.update(model_label=next_model)
        self._update_subtitle()
        self.notify(f"Model: {next_model}", timeout=2)

    def action_toggle_theme(self) -> None:
        """Switch between the light and dark color schemes."""
        current = self._settings.load().color_scheme
        scheme = ColorScheme.LIGHT if current == ColorScheme.DARK else ColorScheme.DARK
        self._settings.update(color_scheme=scheme)
        self.theme = theme_for(scheme).name
        self._update_subtitle()

    def action_toggle_markdown(self) -> None:
        """Switch between the Markdown and LaTeX renderers."""
        settings = self._settings.load()
        use_markdown = not settings.use_markdown_renderer
        self._settings.update(use_markdown_renderer=use_markdown)
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.set_render_options(use_markdown, settings.render_math_in_markdown)
        self._update_subtitle()
        self.notify(f"Markdown renderer {'on' if use_markdown else 'off'}", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    client: CompletionClient,
    settings: SettingsProvider,
    log_level: str | None = None,
    timeout: float | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        client: Completion client instance
        settings: Settings provider read before every request
        log_level: Log level for panel (debug/info/warning/error), None to hide
        timeout: Request deadline override in seconds
    """
    app = DeekseepApp(client=client, settings=settings, log_level=log_level, timeout=timeout)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
