"""Environment validation helpers."""

from __future__ import annotations

from chathub.config.chat import (
    CHAT_DEFAULT_ROOM,
    CHAT_HISTORY_LIMIT,
    CHAT_HISTORY_MAX_LIMIT,
    CHAT_MESSAGE_MAX_CHARS,
)
from chathub.config.database import MONGO_DB, MONGO_URI
from chathub.config.websocket import WS_OUTBOUND_QUEUE_SIZE, WS_SEND_TIMEOUT_S


def collect_env_errors(
    *,
    mongo_uri: str | None = MONGO_URI,
    mongo_db: str | None = MONGO_DB,
    message_max_chars: int = CHAT_MESSAGE_MAX_CHARS,
    history_limit: int = CHAT_HISTORY_LIMIT,
    history_max_limit: int = CHAT_HISTORY_MAX_LIMIT,
    default_room: str = CHAT_DEFAULT_ROOM,
    outbound_queue_size: int = WS_OUTBOUND_QUEUE_SIZE,
    send_timeout_s: float = WS_SEND_TIMEOUT_S,
) -> list[str]:
    """Return a human-readable problem for each invalid setting."""
    errors: list[str] = []

    if not mongo_uri:
        errors.append("MONGO_URI environment variable is required")
    elif not mongo_uri.startswith(("mongodb://", "mongodb+srv://")):
        errors.append(f"MONGO_URI must start with mongodb:// or mongodb+srv://, got: {mongo_uri}")
    if not mongo_db:
        errors.append("MONGO_DB must not be empty")

    if message_max_chars <= 0:
        errors.append(f"CHAT_MESSAGE_MAX_CHARS must be positive, got: {message_max_chars}")
    if history_limit <= 0:
        errors.append(f"CHAT_HISTORY_LIMIT must be positive, got: {history_limit}")
    if history_max_limit < history_limit:
        errors.append(
            f"CHAT_HISTORY_MAX_LIMIT ({history_max_limit}) must be >= CHAT_HISTORY_LIMIT ({history_limit})"
        )
    if not default_room:
        errors.append("CHAT_DEFAULT_ROOM must not be empty")

    if outbound_queue_size <= 0:
        errors.append(f"WS_OUTBOUND_QUEUE_SIZE must be positive, got: {outbound_queue_size}")
    if send_timeout_s <= 0:
        errors.append(f"WS_SEND_TIMEOUT_S must be positive, got: {send_timeout_s}")

    return errors


def validate_env() -> None:
    """Validate required configuration once during startup."""
    errors = collect_env_errors()
    if errors:
        raise ValueError("; ".join(errors))


__all__ = ["collect_env_errors", "validate_env"]
