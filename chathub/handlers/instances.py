"""Singleton instances for the chat engine.

This module is the assembly point for the process-wide message store and
hub. Both are built on first use so importing the package never touches
MongoDB, and tests can install their own with ``set_chat_hub``.

Instances:
    message store: MessageStore on the configured Mongo collection.
    chat hub: ChatHub owning all presence, typing and registry state.
"""

from __future__ import annotations

from ..storage import MessageStore, create_message_store
from .hub import ChatHub

_message_store: MessageStore | None = None
_chat_hub: ChatHub | None = None


def get_message_store() -> MessageStore:
    global _message_store
    if _message_store is None:
        _message_store = create_message_store()
    return _message_store


def get_chat_hub() -> ChatHub:
    global _chat_hub
    if _chat_hub is None:
        _chat_hub = ChatHub(get_message_store())
    return _chat_hub


def set_chat_hub(hub: ChatHub | None, store: MessageStore | None = None) -> None:
    """Replace the process-wide hub (and optionally its store)."""
    global _chat_hub, _message_store
    _chat_hub = hub
    if store is not None:
        _message_store = store


__all__ = [
    "get_chat_hub",
    "get_message_store",
    "set_chat_hub",
]
