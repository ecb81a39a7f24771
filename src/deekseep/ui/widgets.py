"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Log rendering and level filtering
- Chat message rendering (segment routing to renderers)
"""

from datetime import datetime

from rich.console import Group
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, RichLog, Static, TextArea

from ..chat import Role, Turn
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    LOG_COMPONENT_STYLES,
    LOG_LEVEL_STYLES,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    SEND_LABEL,
    SENDING_LABEL,
    LogLevel,
)
from .formatting import render_content, render_plain


def _copy_text(widget: Static | Vertical | RichLog, text: str, label: str) -> None:
    """Copy text to the system clipboard, falling back to OSC 52."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(f"{label} copied", timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{label} copied (terminal)", timeout=2)


class ClickableMessage(Vertical):
    """A chat message container that copies its raw content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        _copy_text(self, self._content, "Message")


class InputHistory:
    """Bounded list of past submissions with a browsing cursor.

    The cursor sits past the newest entry until previous() is called;
    next() past the newest entry returns an empty draft.
    """

    def __init__(self, max_size: int = INPUT_HISTORY_MAX_SIZE) -> None:
        self._entries: list[str] = []
        self._max_size = max_size
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, value: str) -> None:
        """Store a submission, skipping immediate repeats, and reset the cursor."""
        if not self._entries or self._entries[-1] != value:
            self._entries.append(value)
            del self._entries[:-self._max_size]
        self._cursor = len(self._entries)

    def previous(self) -> str | None:
        """Step back one entry; None when there is no history."""
        if not self._entries:
            return None
        self._cursor = max(self._cursor - 1, 0)
        return self._entries[self._cursor]

    def next(self) -> str | None:
        """Step forward one entry; "" past the newest, None when not browsing."""
        if self._cursor >= len(self._entries):
            return None
        self._cursor += 1
        if self._cursor == len(self._entries):
            return ""
        return self._entries[self._cursor]


class ChatInputBar(Horizontal):
    """Message input with a Send button that is locked while a reply is pending."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.input_history = InputHistory()
        self._busy = False

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button(SEND_LABEL, id="send-btn", variant="success").with_tooltip(
            "Submit message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_key(self, event) -> None:
        """Submit on ctrl+j, browse history with up/down at the text edges.

        Terminals do not report modifiers on Enter, so ctrl+enter is not usable.
        """
        text_area = self.query_one("#chat-input", TextArea)
        if event.key == "ctrl+j":
            self._submit()
        elif event.key == "up" and text_area.cursor_location == (0, 0):
            self._show(self.input_history.previous())
        elif event.key == "down" and text_area.cursor_location == text_area.document.end:
            self._show(self.input_history.next())
        else:
            return
        event.prevent_default()
        event.stop()

    def _show(self, value: str | None) -> None:
        if value is not None:
            self.query_one("#chat-input", TextArea).text = value

    def _submit(self) -> None:
        if self._busy:
            return
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text.strip()
        if not value:
            return
        self.input_history.record(value)
        text_area.text = ""
        self.post_message(self.Submitted(value))

    def set_busy(self, busy: bool) -> None:
        """Disable sending while a request is in flight."""
        self._busy = busy
        button = self.query_one("#send-btn", Button)
        button.disabled = busy
        button.label = SENDING_LABEL if busy else SEND_LABEL
        self.set_class(busy, "-busy")

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Trace log fed by the debug callbacks of the core and the client.

    Entries below the level threshold are dropped. Hidden until the app is
    started with --log-level or the panel is toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        self.border_subtitle = f"Level: {self._log_level.name}" if self.display else "Hidden"

    def on_mount(self) -> None:
        self.display = False
        self._update_subtitle()

    def add_entry(self, level: str | LogLevel, component: str, message: str) -> None:
        """Write one entry if it meets the threshold.

        Args:
            level: LogLevel or a callback level name ("debug", "info", ...)
            component: Emitting component (TUI, CORE, LLM)
            message: Free text; markup characters are escaped
        """
        if isinstance(level, str):
            level = LogLevel.from_string(level)
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
        # Provider payloads may contain square brackets
        message = message.replace("[", r"\[")

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_style = LOG_LEVEL_STYLES.get(level, "white")
        component_style = LOG_COMPONENT_STYLES.get(component, "white")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_style}]{level.name:<7}[/] "
            f"[{component_style}]\\[{component}][/] {message}"
        )

    def set_visible(self, visible: bool) -> None:
        self.display = visible
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        self.set_visible(not self.display)
        return self.display

    def get_plain_text(self) -> str:
        """Get plain text content of the log for copying."""
        return "\n".join(line.text for line in self.lines)

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = self.get_plain_text()
        if not text.strip():
            self.app.notify("Debug log is empty", timeout=2)
            return
        _copy_text(self, text, "Debug log")


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history that renders transcript turns."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._turns: list[Turn] = []
        self._use_markdown = False
        self._render_math = True

    def set_render_options(self, use_markdown: bool, render_math_in_markdown: bool) -> None:
        """Change renderer selection and redraw all messages."""
        changed = (use_markdown, render_math_in_markdown) != (self._use_markdown, self._render_math)
        self._use_markdown = use_markdown
        self._render_math = render_math_in_markdown
        if changed and self.is_mounted:
            self.remove_children()
            for turn in self._turns:
                self._render_turn(turn)

    def add_turn(self, turn: Turn) -> None:
        """Add a transcript turn to the display."""
        self._turns.append(turn)
        self._render_turn(turn)
        self.border_subtitle = f"{len(self._turns)} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for turn in reversed(self._turns):
            if turn.role == Role.ASSISTANT:
                return turn.content
        return None

    def _render_turn(self, turn: Turn) -> None:
        if turn.role == Role.USER:
            prefix, border_class, icon = "You", "user-message", ">"
            body = render_plain(turn.content)
        else:
            prefix, border_class, icon = "Assistant", "assistant-message", "<"
            body = Group(*render_content(
                turn.content,
                use_markdown=self._use_markdown,
                render_math_in_markdown=self._render_math,
            ))

        timestamp = turn.created_at.strftime(MESSAGE_TIMESTAMP_FORMAT)
        container = ClickableMessage(content=turn.content, classes=f"chat-message {border_class}")
        container.compose_add_child(
            Static(f"{icon} {prefix} \\[{timestamp}]", classes="message-header")
        )
        container.compose_add_child(Static(body, classes="message-content"))
        self.mount(container)
