"""Modal screens for the TUI.

This module hides the design decisions about:
- Provider warning dialog appearance (CSS, layout)
- Button styling and variants
- Keyboard shortcuts for dialogs

To change how the warning looks, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from .config import PROVIDER_NOTICE_CONFIRM, PROVIDER_NOTICE_TEXT, PROVIDER_NOTICE_TITLE


class ProviderNoticeScreen(ModalScreen[bool]):
    """Warning shown before switching to the less stable provider.

    Dismisses with True when the user continues, False otherwise.
    """

    CSS = """
    ProviderNoticeScreen {
        align: center middle;
        background: $background 70%;
    }

    #notice-dialog {
        width: 64;
        height: auto;
        max-height: 22;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #notice-title {
        width: 100%;
        height: auto;
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 0 0 1 0;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    #notice-text {
        width: 100%;
        height: auto;
        padding: 1 2;
        background: $panel;
        border: round $border;
        color: $foreground;
        margin-bottom: 1;
    }

    #notice-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #notice-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="notice-dialog"):
            yield Static(PROVIDER_NOTICE_TITLE, id="notice-title")
            yield Static(PROVIDER_NOTICE_TEXT, id="notice-text")
            with Horizontal(id="notice-buttons"):
                yield Button("Cancel", id="btn-cancel", variant="default")
                yield Button(PROVIDER_NOTICE_CONFIRM, id="btn-continue", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-continue")

    def action_cancel(self) -> None:
        self.dismiss(False)
