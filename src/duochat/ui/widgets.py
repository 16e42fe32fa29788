"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Provider/model selectors
- Custom API key panel
- Chat bubble rendering and scrolling
- Prompt editor and send shortcut
- Loading indicator
"""

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, Label, LoadingIndicator, Select, Static, TextArea

from ..llm.catalog import PROVIDER_LABELS, PROVIDER_MODELS
from .config import (
    API_KEY_MODE_CUSTOM,
    API_KEY_MODE_DEFAULT,
    API_KEY_PORTAL_URL,
    THINKING_TEXT,
    TIMESTAMP_FORMAT,
)
from .formatting import render_message
from .models import Message


class ProviderBar(Horizontal):
    """Provider and model selectors, always visible."""

    def __init__(self, provider: str, model: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._provider = provider
        self._model = model

    def compose(self):
        yield Label("Provider:", classes="selector-label")
        yield Select(
            [(label, provider) for provider, label in PROVIDER_LABELS.items()],
            value=self._provider,
            allow_blank=False,
            id="provider-select",
        )
        yield Label("Model:", classes="selector-label")
        yield Select(
            [(model, model) for model in PROVIDER_MODELS[self._provider]],
            value=self._model,
            allow_blank=False,
            id="model-select",
        )

    def show_selection(self, provider: str, model: str) -> None:
        """Point both selectors at the given provider and model."""
        provider_select = self.query_one("#provider-select", Select)
        model_select = self.query_one("#model-select", Select)
        if self._provider != provider:
            model_select.set_options([(m, m) for m in PROVIDER_MODELS[provider]])
        self._provider = provider
        self._model = model
        if provider_select.value != provider:
            provider_select.value = provider
        if model_select.value != model:
            model_select.value = model


class ApiKeyPanel(Vertical):
    """Choose between the server's Cysic key and one typed by the user."""

    BORDER_TITLE = "Cysic API Key Settings"

    class Changed(TextualMessage):
        """Posted when the key mode or the typed key changes."""

        def __init__(self, mode: str, api_key: str) -> None:
            super().__init__()
            self.mode = mode
            self.api_key = api_key

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._mode = API_KEY_MODE_DEFAULT

    def compose(self):
        with Horizontal(id="key-mode-buttons"):
            yield Button("Use default API key", id="key-mode-default", variant="primary")
            yield Button("Use my own API key", id="key-mode-custom", variant="default")
        yield Input(placeholder="Enter your Cysic API key...", password=True, id="api-key-input")
        yield Static(f"Get your API key from {API_KEY_PORTAL_URL}", id="api-key-hint")

    def on_mount(self) -> None:
        self._refresh()

    @property
    def mode(self) -> str:
        return self._mode

    def _refresh(self) -> None:
        custom = self._mode == API_KEY_MODE_CUSTOM
        self.query_one("#key-mode-default", Button).variant = "default" if custom else "primary"
        self.query_one("#key-mode-custom", Button).variant = "primary" if custom else "default"
        self.query_one("#api-key-input", Input).display = custom
        self.query_one("#api-key-hint", Static).display = custom

    def _notify(self) -> None:
        api_key = self.query_one("#api-key-input", Input).value
        self.post_message(self.Changed(self._mode, api_key))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "key-mode-default":
            self._mode = API_KEY_MODE_DEFAULT
        elif event.button.id == "key-mode-custom":
            self._mode = API_KEY_MODE_CUSTOM
        else:
            return
        event.stop()
        self._refresh()
        self._notify()

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self._notify()


class ChatBubble(Vertical):
    """A chat message container that copies its content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Start a conversation"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[Message] = []

    def compose(self):
        yield Static(
            "Start a conversation\n\nAsk me anything! Pick a provider above and type below.",
            id="empty-state",
        )

    def add_message(self, message: Message) -> None:
        """Add a message to the chat history."""
        if not self._messages:
            self.query_one("#empty-state", Static).display = False
        self._messages.append(message)
        self._render_message(message)
        self.border_subtitle = f"{len(self._messages)} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for message in reversed(self._messages):
            if message.role == "assistant":
                return message.content
        return None

    def clear_history(self) -> None:
        """Clear the chat history."""
        self._messages.clear()
        for bubble in self.query(ChatBubble):
            bubble.remove()
        self.query_one("#empty-state", Static).display = True
        self.border_subtitle = self.BORDER_SUBTITLE

    def _render_message(self, message: Message) -> None:
        """Render a single message to the display."""
        if message.role == "user":
            header = f"> You [{message.timestamp.strftime(TIMESTAMP_FORMAT)}]"
            css_class = "user-message"
        else:
            header = f"< Assistant [{message.timestamp.strftime(TIMESTAMP_FORMAT)}]"
            css_class = "assistant-message"

        bubble = ChatBubble(content=message.content, classes=f"chat-message {css_class}")
        bubble.compose_add_child(Static(header, classes="message-header"))
        bubble.compose_add_child(Static(render_message(message.content), classes="message-content"))
        if message.role == "assistant" and message.model:
            bubble.compose_add_child(Static(message.model, classes="message-model"))
        self.mount(bubble)


class ThinkingIndicator(Horizontal):
    """Shown while a request is in flight."""

    def compose(self):
        yield LoadingIndicator(id="thinking-dots")
        yield Static(THINKING_TEXT, id="thinking-text")


class ChatInputBar(Horizontal):
    """Prompt editor plus Send button; Ctrl+J also sends."""

    class Submitted(TextualMessage):
        """Posted with the text when the user sends a prompt."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        prompt = TextArea(id="chat-input", show_line_numbers=False)
        prompt.cursor_blink = False
        yield prompt
        yield Button("Send", id="send-btn", variant="success").with_tooltip("Send (Ctrl+J)")

    @property
    def _prompt(self) -> TextArea:
        return self.query_one("#chat-input", TextArea)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        # Terminals do not report modifiers on Enter, so Ctrl+J is the send key
        if event.key == "ctrl+j":
            event.prevent_default()
            event.stop()
            self._submit()

    def _submit(self) -> None:
        value = self._prompt.text
        if self._prompt.disabled or not value.strip():
            return
        self._prompt.text = ""
        self.post_message(self.Submitted(value))

    def restore(self, value: str) -> None:
        """Put a rejected prompt back into the editor."""
        self._prompt.text = value

    def set_enabled(self, enabled: bool) -> None:
        self._prompt.disabled = not enabled
        self.query_one("#send-btn", Button).disabled = not enabled

    def focus_input(self) -> None:
        self._prompt.focus()
