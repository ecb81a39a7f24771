"""Terminal UI module for deekseep.

Provides a Textual-based TUI for chatting with the completion provider.

Module structure (Parnas principle - each module hides a design decision):
- formatting.py: Segment routing to Rich renderers (Markdown, math)
- widgets.py: Custom widgets (input bar, chat history, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes for the light and dark schemes
- app.py: Application orchestration (user interaction flow)
"""

from .app import DeekseepApp, run_textual_tui
from .config import LogLevel
from .formatting import clean_latex, render_content, render_segments
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "DeekseepApp",
    "LogLevel",
    "clean_latex",
    "render_content",
    "render_segments",
    "run_textual_tui",
]
