"""Helpers for consistent outbound event payload shapes.

Server -> client frames are JSON objects tagged by ``type``:

    {"type": "presence-update", "names": ["alice", "bob"]}
    {"type": "user-joined", "name": "alice"}
    {"type": "user-left", "name": "alice"}
    {"type": "chat-message", "sender": "...", "text": "...",
     "createdAt": "2024-05-01T12:00:00.000Z", "recipient": "..."}
    {"type": "typing-update", "names": ["alice"]}
    {"type": "error", "message": "Failed to send message"}

``recipient`` is present only on direct messages.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

PRESENCE_UPDATE = "presence-update"
USER_JOINED = "user-joined"
USER_LEFT = "user-left"
CHAT_MESSAGE = "chat-message"
TYPING_UPDATE = "typing-update"
ERROR = "error"


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def presence_update(names: Iterable[str]) -> dict[str, Any]:
    return {"type": PRESENCE_UPDATE, "names": list(names)}


def user_joined(name: str) -> dict[str, Any]:
    return {"type": USER_JOINED, "name": name}


def user_left(name: str) -> dict[str, Any]:
    return {"type": USER_LEFT, "name": name}


def chat_message(
    sender: str,
    text: str,
    created_at: datetime,
    recipient: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "type": CHAT_MESSAGE,
        "sender": sender,
        "text": text,
        "createdAt": format_timestamp(created_at),
    }
    if recipient is not None:
        payload["recipient"] = recipient
    return payload


def typing_update(names: Iterable[str]) -> dict[str, Any]:
    return {"type": TYPING_UPDATE, "names": list(names)}


def error_notice(message: str) -> dict[str, Any]:
    return {"type": ERROR, "message": message}


__all__ = [
    "PRESENCE_UPDATE",
    "USER_JOINED",
    "USER_LEFT",
    "CHAT_MESSAGE",
    "TYPING_UPDATE",
    "ERROR",
    "format_timestamp",
    "presence_update",
    "user_joined",
    "user_left",
    "chat_message",
    "typing_update",
    "error_notice",
]
