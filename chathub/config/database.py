"""Document store connection settings."""

from __future__ import annotations

import os

MONGO_URI = os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017")
MONGO_DB = os.getenv("MONGO_DB", "chatApp")
MONGO_MESSAGES_COLLECTION = os.getenv("MONGO_MESSAGES_COLLECTION", "messages")
MONGO_SERVER_SELECTION_TIMEOUT_MS = int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))

__all__ = [
    "MONGO_URI",
    "MONGO_DB",
    "MONGO_MESSAGES_COLLECTION",
    "MONGO_SERVER_SELECTION_TIMEOUT_MS",
]
