"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Near-black background with teal and violet accents
DUOCHAT_DARK = Theme(
    name="duochat-dark",
    primary="#00FFCD",
    secondary="#6B2CE1",
    accent="#00FFCD",
    foreground="#E6E6E6",
    background="#090A09",
    success="#00FFCD",
    warning="#F5A623",
    error="#FF5C7A",
    surface="#111311",
    panel="#0D0F0D",
    dark=True,
    variables={
        "block-cursor-foreground": "#090A09",
        "block-cursor-background": "#00FFCD",
        "block-cursor-text-style": "bold",
        "input-cursor-background": "#E6E6E6",
        "input-cursor-foreground": "#090A09",
        "input-selection-background": "#6B2CE1 40%",
        "border": "#2A2D2A",
        "border-blurred": "#1C1F1C",
        "scrollbar": "#1C1F1C",
        "scrollbar-hover": "#2A2D2A",
        "scrollbar-active": "#00FFCD",
        "scrollbar-background": "#0D0F0D",
        "footer-background": "#090A09",
        "footer-key-foreground": "#00FFCD",
        "text-muted": "#7A7F7A",
        "link-color": "#00FFCD",
        "link-style": "underline",
        "button-foreground": "#E6E6E6",
        "button-color-foreground": "#090A09",
    },
)
