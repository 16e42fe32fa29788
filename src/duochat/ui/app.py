"""Main Textual TUI application.

Wires the widgets to a ChatSession and talks to a running DuoChat server.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Select

from ..llm.catalog import PROVIDER_LABELS, SECONDARY_PROVIDER
from .client import RelayClient
from .config import DEFAULT_SERVER_URL
from .models import Message
from .screens import ProviderNoticeScreen
from .session import ChatSession, MissingApiKeyError
from .styles import APP_CSS
from .themes import DUOCHAT_DARK
from .widgets import ApiKeyPanel, ChatHistoryWidget, ChatInputBar, ProviderBar, ThinkingIndicator


class DuoChatApp(App):
    """Textual chat client for the Gemini/Cysic relay."""

    CSS = APP_CSS
    TITLE = "AI Chat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
    ]

    def __init__(self, server_url: str = DEFAULT_SERVER_URL, client: RelayClient | None = None) -> None:
        super().__init__()
        self._client = client or RelayClient(server_url)
        self.session = ChatSession(
            self._client,
            on_message=self._show_message,
            on_loading=self._show_loading,
        )

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ProviderBar(self.session.provider, self.session.model, id="provider-bar")
        yield ApiKeyPanel(id="api-key-panel")
        yield ChatHistoryWidget(id="chat-history")
        yield ThinkingIndicator(id="thinking")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(DUOCHAT_DARK)
        self.theme = "duochat-dark"
        self._sync_selection()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    async def on_unmount(self) -> None:
        await self._client.close()

    def _sync_selection(self) -> None:
        """Make the selectors and key panel reflect the session."""
        session = self.session
        self.query_one("#provider-bar", ProviderBar).show_selection(session.provider, session.model)
        self.query_one("#api-key-panel", ApiKeyPanel).display = session.provider == SECONDARY_PROVIDER
        self.sub_title = f"Powered by {PROVIDER_LABELS[session.provider]}"

    # Session observers

    def _show_message(self, message: Message) -> None:
        self.query_one("#chat-history", ChatHistoryWidget).add_message(message)

    def _show_loading(self, loading: bool) -> None:
        self.query_one("#thinking", ThinkingIndicator).set_class(loading, "-active")
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.set_enabled(not loading)
        if not loading:
            input_bar.focus_input()

    # Selection

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        if event.select.id == "provider-select":
            self._on_provider_selected(str(event.value))
        elif event.select.id == "model-select":
            if event.value != self.session.model and event.value in self.session.models:
                self.session.select_model(str(event.value))

    def _on_provider_selected(self, provider: str) -> None:
        if provider == self.session.provider:
            return
        if self.session.request_provider_change(provider):
            self.push_screen(ProviderNoticeScreen(), self._on_provider_notice_closed)
        else:
            self._sync_selection()

    def _on_provider_notice_closed(self, confirmed: bool | None) -> None:
        if confirmed:
            self.session.confirm_provider_change()
        else:
            self.session.cancel_provider_change()
        self._sync_selection()

    def on_api_key_panel_changed(self, event: ApiKeyPanel.Changed) -> None:
        self.session.set_api_key_mode(event.mode, event.api_key)

    # Chat

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        if self.session.loading:
            self.notify("Wait for the current reply", severity="warning", timeout=2)
            self.query_one("#chat-input-bar", ChatInputBar).restore(event.value)
            return
        self._send(event.value)

    @work(group="chat")
    async def _send(self, prompt: str) -> None:
        try:
            await self.session.submit(prompt)
        except MissingApiKeyError as e:
            self.notify(str(e), severity="warning", timeout=4)
            self.query_one("#chat-input-bar", ChatInputBar).restore(prompt)

    def action_clear_chat(self) -> None:
        """Clear the chat history."""
        if self.session.loading:
            self.notify("Wait for the current reply", severity="warning", timeout=2)
            return
        self.session.clear()
        self.query_one("#chat-history", ChatHistoryWidget).clear_history()
        self.notify("Chat cleared", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = self.query_one("#chat-history", ChatHistoryWidget).get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_chat_tui(server_url: str = DEFAULT_SERVER_URL) -> None:
    """Run the Textual chat client.

    Args:
        server_url: Base URL of a running DuoChat server
    """
    app = DuoChatApp(server_url=server_url)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
