"""UI configuration constants.

Centralizes user-facing strings and defaults for the UI module.
"""

# Server the client talks to
DEFAULT_SERVER_URL = "http://127.0.0.1:8000"
CHAT_ENDPOINT = "/api/ai"

# Replies shown instead of a model answer
FALLBACK_REPLY = "Sorry, I encountered an error while processing your request."
EMPTY_REPLY = "No response received"

# Custom key handling for the secondary provider
API_KEY_MODE_DEFAULT = "default"
API_KEY_MODE_CUSTOM = "custom"
MISSING_CUSTOM_KEY = "Please enter your Cysic API key or use default key"
API_KEY_PORTAL_URL = "https://ai.cysic.xyz/models"

# Provider switch warning
PROVIDER_NOTICE_TITLE = "Cysic Provider Notice"
PROVIDER_NOTICE_TEXT = (
    "There are currently some technical issues on Cysic.ai's side that may "
    "affect performance and response time. We recommend using Gemini for a "
    "more stable experience.\n\n"
    "Do you still want to continue with Cysic?"
)
PROVIDER_NOTICE_CONFIRM = "Continue with Cysic"

# Chat display
TIMESTAMP_FORMAT = "%H:%M:%S"
THINKING_TEXT = "AI is thinking..."
