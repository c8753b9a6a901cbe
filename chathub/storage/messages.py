"""Message persistence on a MongoDB collection via motor.

Document shape (one per chat message, append-only):

    {
        "sender": "alice",               # HTML-escaped display name
        "text": "&lt;b&gt;hi&lt;/b&gt;",  # HTML-escaped, at most 1000 chars
        "room": "general",
        "createdAt": datetime (UTC),
        "updatedAt": datetime (UTC),
    }

Indexes:
    (createdAt desc)            - global most-recent reads
    (room asc, createdAt desc)  - per-room most-recent reads

The store never escapes anything itself; callers hand it sanitized fields.
Every driver failure is re-raised as ``PersistenceError`` so the hub only has
one exception type to react to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from ..config import (
    CHAT_DEFAULT_ROOM,
    CHAT_HISTORY_LIMIT,
    CHAT_MESSAGE_MAX_CHARS,
    MONGO_DB,
    MONGO_MESSAGES_COLLECTION,
    MONGO_SERVER_SELECTION_TIMEOUT_MS,
    MONGO_URI,
)
from ..errors import PersistenceError
from ..messages.events import format_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredMessage:
    """A persisted chat message. Immutable once written."""

    sender: str
    text: str
    room: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> StoredMessage:
        created_at = doc["createdAt"]
        return cls(
            sender=doc["sender"],
            text=doc["text"],
            room=doc.get("room", CHAT_DEFAULT_ROOM),
            created_at=created_at,
            updated_at=doc.get("updatedAt", created_at),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "sender": self.sender,
            "text": self.text,
            "room": self.room,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_payload(self) -> dict[str, Any]:
        """Render the JSON shape served to page-load history readers."""
        return {
            "sender": self.sender,
            "text": self.text,
            "room": self.room,
            "createdAt": format_timestamp(self.created_at),
        }


def _utcnow() -> datetime:
    # BSON dates carry millisecond precision; truncate so the returned
    # record matches what a later read would produce.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class MessageStore:
    """Append-only message store over one collection."""

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        *,
        client: AsyncIOMotorClient | None = None,
        max_chars: int = CHAT_MESSAGE_MAX_CHARS,
    ) -> None:
        self._collection = collection
        self._client = client
        self._max_chars = max_chars

    async def ensure_indexes(self) -> None:
        try:
            await self._collection.create_index([("createdAt", DESCENDING)])
            await self._collection.create_index([("room", ASCENDING), ("createdAt", DESCENDING)])
        except PyMongoError as exc:
            raise PersistenceError(f"failed to create message indexes: {exc}") from exc

    async def save(self, sender: str, text: str, room: str = CHAT_DEFAULT_ROOM) -> StoredMessage:
        """Insert one message with a server-assigned timestamp.

        Raises:
            PersistenceError: Required fields are empty, the text exceeds the
                schema maximum, or the write failed.
        """
        if not sender or not text:
            raise PersistenceError("sender and text are required")
        if len(text) > self._max_chars:
            raise PersistenceError(f"text exceeds {self._max_chars} characters")

        now = _utcnow()
        message = StoredMessage(
            sender=sender,
            text=text,
            room=room or CHAT_DEFAULT_ROOM,
            created_at=now,
            updated_at=now,
        )
        try:
            await self._collection.insert_one(message.to_document())
        except PyMongoError as exc:
            logger.error("message store: insert failed: %s", exc)
            raise PersistenceError(str(exc)) from exc
        return message

    async def recent(
        self,
        limit: int = CHAT_HISTORY_LIMIT,
        room: str = CHAT_DEFAULT_ROOM,
    ) -> list[StoredMessage]:
        """Return up to ``limit`` most recent messages, oldest first."""
        if limit <= 0:
            return []
        try:
            cursor = self._collection.find({"room": room}).sort("createdAt", DESCENDING).limit(limit)
            docs = [doc async for doc in cursor]
        except PyMongoError as exc:
            logger.error("message store: history read failed: %s", exc)
            raise PersistenceError(str(exc)) from exc
        docs.reverse()
        return [StoredMessage.from_document(doc) for doc in docs]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()


def create_message_store(
    uri: str = MONGO_URI,
    database: str = MONGO_DB,
    collection: str = MONGO_MESSAGES_COLLECTION,
) -> MessageStore:
    """Build a store on a fresh motor client.

    The client connects lazily, so this never blocks or fails on an
    unreachable server; the first operation does.
    """
    client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=MONGO_SERVER_SELECTION_TIMEOUT_MS, tz_aware=True)
    return MessageStore(client[database][collection], client=client)


__all__ = [
    "MessageStore",
    "StoredMessage",
    "create_message_store",
]
