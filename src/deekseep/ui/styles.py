"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

/* ============================================
   Messages
   ============================================ */
.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $primary;
    margin-left: 8;

    & .message-header {
        color: $primary;
    }
}

.assistant-message {
    border-left: thick $secondary;
    margin-right: 8;

    & .message-header {
        color: $secondary;
    }
}

.message-header {
    text-style: bold;
    height: 1;
}

.message-content {
    height: auto;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 14;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

/* ============================================
   Bottom Bar - Input
   ============================================ */
#chat-input-bar {
    height: auto;
    max-height: 10;
    padding: 0 1;
}

#chat-input {
    height: auto;
    min-height: 3;
    max-height: 8;
    width: 1fr;
    border: round $border;

    &:focus {
        border: round $primary;
    }
}

#send-btn {
    min-width: 12;
    height: 3;
    margin-left: 1;
}

#chat-input-bar.-busy #chat-input {
    border: round $warning;
}
"""
