"""Text formatting utilities for the TUI.

Hides the details of the markdown-lite rendering used for chat bubbles:
bold, italic and inline-code spans found by splitting on a pattern. This is
a heuristic, not a markdown parser.
"""

import re

from rich.text import Text

INLINE_PATTERN = re.compile(r"(\*\*.*?\*\*|\*.*?\*|`.*?`)")

SPAN_STYLES = {
    "bold": "bold",
    "italic": "italic",
    "code": "bold #00ffcd on #374151",
}


def split_inline(line: str) -> list[tuple[str, str]]:
    """Split one line into (kind, text) spans.

    Kinds are 'bold', 'italic', 'code' and 'text'. Delimiters are removed
    from styled spans; empty plain-text pieces are dropped.
    """
    spans = []
    for part in INLINE_PATTERN.split(line):
        if not part:
            continue
        if len(part) >= 4 and part.startswith("**") and part.endswith("**"):
            spans.append(("bold", part[2:-2]))
        elif len(part) >= 2 and part.startswith("*") and part.endswith("*") and not part.startswith("**"):
            spans.append(("italic", part[1:-1]))
        elif len(part) >= 2 and part.startswith("`") and part.endswith("`"):
            spans.append(("code", part[1:-1]))
        else:
            spans.append(("text", part))
    return spans


def render_message(content: str) -> Text:
    """Render message content line by line with inline spans styled."""
    result = Text(overflow="fold")
    lines = content.split("\n")
    for index, line in enumerate(lines):
        for kind, text in split_inline(line):
            result.append(text, style=SPAN_STYLES.get(kind, ""))
        if index < len(lines) - 1:
            result.append("\n")
    return result
