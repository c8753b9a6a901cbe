"""Durable message storage backed by MongoDB."""

from .messages import MessageStore, StoredMessage, create_message_store

__all__ = [
    "MessageStore",
    "StoredMessage",
    "create_message_store",
]
