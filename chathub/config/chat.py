"""Chat behavior configuration values.

Limits:
    CHAT_MESSAGE_MAX_CHARS: Maximum message length, measured after the text
        has been trimmed and HTML-escaped. Longer messages are dropped.

History:
    CHAT_HISTORY_LIMIT: Default number of recent messages returned for a
        page load.
    CHAT_HISTORY_MAX_LIMIT: Upper bound for caller-supplied limits.

Identity:
    CHAT_STRICT_DISPLAY_NAMES: When enabled, join requests must carry a
        name matching the account username shape (3-20 characters of
        letters, digits, underscore or hyphen).
"""

from __future__ import annotations

import os

CHAT_MESSAGE_MAX_CHARS = int(os.getenv("CHAT_MESSAGE_MAX_CHARS", "1000"))
CHAT_DEFAULT_ROOM = os.getenv("CHAT_DEFAULT_ROOM", "general")

CHAT_HISTORY_LIMIT = int(os.getenv("CHAT_HISTORY_LIMIT", "100"))
CHAT_HISTORY_MAX_LIMIT = int(os.getenv("CHAT_HISTORY_MAX_LIMIT", "500"))

CHAT_STRICT_DISPLAY_NAMES = os.getenv("CHAT_STRICT_DISPLAY_NAMES", "0").lower() in {"1", "true", "yes"}

# Client-visible text for a failed durable write
CHAT_SEND_FAILED_MESSAGE = "Failed to send message"

__all__ = [
    "CHAT_MESSAGE_MAX_CHARS",
    "CHAT_DEFAULT_ROOM",
    "CHAT_HISTORY_LIMIT",
    "CHAT_HISTORY_MAX_LIMIT",
    "CHAT_STRICT_DISPLAY_NAMES",
    "CHAT_SEND_FAILED_MESSAGE",
]
