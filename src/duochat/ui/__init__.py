"""Terminal chat client for the DuoChat server."""

from .app import DuoChatApp, run_chat_tui
from .client import RelayClient
from .models import Message
from .session import ChatSession, MissingApiKeyError

__all__ = [
    "ChatSession",
    "DuoChatApp",
    "Message",
    "MissingApiKeyError",
    "RelayClient",
    "run_chat_tui",
]
