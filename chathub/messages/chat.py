"""Chat message pipeline: validate, sanitize, persist, fan out.

A submission goes through four stages:

1. Validation
   - sender and text must be present strings
   - text must be 1..CHAT_MESSAGE_MAX_CHARS characters after trimming and
     escaping; anything else is dropped without telling the sender

2. Sanitization
   - sender, text and recipient are escaped exactly once, here

3. Persistence (outside the hub lock)
   - a failed write sends ``error`` to the sender and nothing else happens;
     the sender's typing indicator is left as it was

4. Fan-out (inside the hub lock)
   - public message: every attached connection, sender included
   - direct message: the first connection joined under the recipient name
     (if any) plus an echo to the sender
   - the sender's typing indicator is cleared
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from ..config import CHAT_DEFAULT_ROOM, CHAT_MESSAGE_MAX_CHARS, CHAT_SEND_FAILED_MESSAGE
from ..errors import PersistenceError, ValidationError
from ..handlers.broadcast import BroadcastChannel
from ..state.registry import ConnectionRegistry
from ..state.typing_indicator import TypingCoordinator
from . import events
from .sanitize import sanitize_input

logger = logging.getLogger(__name__)


class MessageSink(Protocol):
    """Anything that can durably record a message."""

    async def save(self, sender: str, text: str, room: str = ...) -> Any: ...


@dataclass(frozen=True)
class ChatSubmission:
    """A validated, sanitized message ready to persist."""

    sender: str
    text: str
    recipient: str | None = None
    room: str = CHAT_DEFAULT_ROOM


def prepare_submission(
    sender: Any,
    text: Any,
    recipient: Any = None,
    *,
    max_chars: int = CHAT_MESSAGE_MAX_CHARS,
) -> ChatSubmission:
    """Validate raw client fields and return their sanitized form.

    Raises:
        ValidationError: A field is missing, or the sanitized text is empty
            or longer than ``max_chars``.
    """
    if not isinstance(sender, str) or not sender:
        raise ValidationError("missing_sender", "chat message requires a sender")
    if not isinstance(text, str) or not text:
        raise ValidationError("missing_text", "chat message requires text")

    clean_sender = sanitize_input(sender)
    clean_text = sanitize_input(text)
    if not clean_sender:
        raise ValidationError("missing_sender", "chat message requires a sender")
    if not clean_text:
        raise ValidationError("empty_text", "chat message text is empty")
    if len(clean_text) > max_chars:
        raise ValidationError(
            "text_too_long",
            f"chat message text exceeds {max_chars} characters",
        )

    clean_recipient = None
    if isinstance(recipient, str):
        clean_recipient = sanitize_input(recipient) or None
    return ChatSubmission(sender=clean_sender, text=clean_text, recipient=clean_recipient)


class MessagePipeline:
    """Persist and deliver chat messages for the hub.

    The pipeline shares the hub's lock: it holds it only while touching the
    registry, typing state and outbound queues, never across the store write.
    """

    def __init__(
        self,
        store: MessageSink,
        registry: ConnectionRegistry,
        typing: TypingCoordinator,
        broadcast: BroadcastChannel,
        lock: asyncio.Lock,
        *,
        max_chars: int = CHAT_MESSAGE_MAX_CHARS,
    ) -> None:
        self._store = store
        self._registry = registry
        self._typing = typing
        self._broadcast = broadcast
        self._lock = lock
        self._max_chars = max_chars

    async def submit(
        self,
        connection_id: str,
        sender: Any,
        text: Any,
        recipient: Any = None,
    ) -> bool:
        """Run one submission end to end; True if it was delivered.

        Raises:
            ValidationError: The submission was rejected before persistence.
        """
        submission = prepare_submission(sender, text, recipient, max_chars=self._max_chars)

        try:
            stored = await self._store.save(submission.sender, submission.text, submission.room)
        except PersistenceError as exc:
            logger.error("chat message from %s not persisted: %s", submission.sender, exc.message)
            await self._notify_send_failed(connection_id)
            return False
        except Exception:  # noqa: BLE001
            logger.exception("chat message from %s not persisted", submission.sender)
            await self._notify_send_failed(connection_id)
            return False

        async with self._lock:
            self._fan_out(connection_id, submission, stored.created_at)
            self._typing.clear(connection_id)
        return True

    async def _notify_send_failed(self, connection_id: str) -> None:
        async with self._lock:
            self._broadcast.to_one(connection_id, events.error_notice(CHAT_SEND_FAILED_MESSAGE))

    def _fan_out(self, connection_id: str, submission: ChatSubmission, created_at: Any) -> None:
        if submission.recipient is None:
            self._broadcast.to_all(
                events.chat_message(submission.sender, submission.text, created_at)
            )
            return

        payload = events.chat_message(
            submission.sender,
            submission.text,
            created_at,
            recipient=submission.recipient,
        )
        target = self._registry.find_by_name(submission.recipient)
        if target is not None:
            self._broadcast.to_one(target.connection_id, payload)
        else:
            logger.info("direct message recipient %s is offline", submission.recipient)
        self._broadcast.to_one(connection_id, payload)


__all__ = [
    "ChatSubmission",
    "MessagePipeline",
    "MessageSink",
    "prepare_submission",
]
