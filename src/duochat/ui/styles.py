"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Single column: selectors on top, chat in the middle, input at the bottom.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Provider and model selectors */
#provider-bar {
    height: auto;
    padding: 0 1;
    background: $surface;
    border-bottom: solid $border;

    & .selector-label {
        padding: 1 1 0 1;
        color: $text-muted;
    }

    & Select {
        width: 1fr;
        margin-right: 1;
    }
}

/* Cysic key settings */
#api-key-panel {
    height: auto;
    margin: 0 1;
    padding: 0 1;
    border: round $secondary;
    border-title-color: $secondary;
    border-title-style: bold;

    & #key-mode-buttons {
        height: auto;
    }

    & #key-mode-buttons Button {
        margin-right: 1;
    }

    & #api-key-hint {
        color: $text-muted;
        padding: 0 1;
    }
}

/* Chat history */
#chat-history {
    height: 1fr;
    margin: 0 1;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

#empty-state {
    width: 100%;
    height: auto;
    margin-top: 2;
    text-align: center;
    color: $text-muted;
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;

    &:hover {
        background: $boost;
    }
}

.user-message {
    border-left: thick $secondary;
    margin-left: 8;

    & .message-header {
        color: $secondary;
    }
}

.assistant-message {
    border-left: thick $primary;
    margin-right: 8;

    & .message-header {
        color: $primary;
    }
}

.message-header {
    text-style: bold;
    height: 1;
}

.message-content {
    height: auto;
}

.message-model {
    height: 1;
    color: $text-muted;
    text-style: italic;
}

/* Loading indicator */
#thinking {
    height: 1;
    margin: 0 1;
    display: none;

    &.-active {
        display: block;
    }

    & #thinking-dots {
        width: 8;
        height: 1;
        color: $primary;
    }

    & #thinking-text {
        color: $text-muted;
    }
}

/* Input bar */
#chat-input-bar {
    height: auto;
    max-height: 8;
    margin: 0 1 1 1;
}

#chat-input {
    width: 1fr;
    height: auto;
    min-height: 3;
    max-height: 8;
    border: tall $border;

    &:focus {
        border: tall $primary;
    }
}

#send-btn {
    width: 10;
    height: 3;
    margin-left: 1;
}

Footer {
    background: $background;
}
"""
