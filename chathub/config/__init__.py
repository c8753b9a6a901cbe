"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- chat: message limits, history bounds and identity rules
- database: document store connection
- websocket: outbound delivery
- server: HTTP listener
- logging: log level and format

Validation lives in chathub/helpers/validation.py.
"""

from .chat import (
    CHAT_MESSAGE_MAX_CHARS,
    CHAT_DEFAULT_ROOM,
    CHAT_HISTORY_LIMIT,
    CHAT_HISTORY_MAX_LIMIT,
    CHAT_STRICT_DISPLAY_NAMES,
    CHAT_SEND_FAILED_MESSAGE,
)
from .database import (
    MONGO_URI,
    MONGO_DB,
    MONGO_MESSAGES_COLLECTION,
    MONGO_SERVER_SELECTION_TIMEOUT_MS,
)
from .websocket import (
    WS_OUTBOUND_QUEUE_SIZE,
    WS_SEND_TIMEOUT_S,
)
from .server import CHATHUB_HOST, CHATHUB_PORT


__all__ = [
    "CHAT_MESSAGE_MAX_CHARS",
    "CHAT_DEFAULT_ROOM",
    "CHAT_HISTORY_LIMIT",
    "CHAT_HISTORY_MAX_LIMIT",
    "CHAT_STRICT_DISPLAY_NAMES",
    "CHAT_SEND_FAILED_MESSAGE",
    "MONGO_URI",
    "MONGO_DB",
    "MONGO_MESSAGES_COLLECTION",
    "MONGO_SERVER_SELECTION_TIMEOUT_MS",
    "WS_OUTBOUND_QUEUE_SIZE",
    "WS_SEND_TIMEOUT_S",
    "CHATHUB_HOST",
    "CHATHUB_PORT",
]
