"""Data models for the TUI.

Hides the internal representation of chat messages.
"""

from dataclasses import dataclass, field
from datetime import datetime
from itertools import count

_ids = count(1)


def _next_id() -> str:
    return str(next(_ids))


@dataclass(frozen=True)
class Message:
    """A chat bubble in the conversation. Never modified once created."""

    role: str  # "user" or "assistant"
    content: str
    model: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=_next_id)

    def to_history(self) -> dict[str, str]:
        """Wire shape sent to the server as conversation history."""
        return {
            "role": "user" if self.role == "user" else "assistant",
            "content": self.content,
        }
