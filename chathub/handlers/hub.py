"""The chat hub: single coordination point for shared chat state.

ChatHub owns the connection registry, presence tracker, typing coordinator,
broadcast channel and message pipeline. All reads and writes of registry and
typing state happen while holding ``self._lock``, so the invariants hold no
matter how connection handlers are scheduled:

- the presence list always equals the identified registry entries
- a typing entry never outlives its connection
- disconnect cleanup (removal, typing clear, leave broadcasts) is one step

Message persistence is the only awaited I/O and runs outside the lock, so a
slow store write never delays joins, typing or disconnects on other
connections.

Validation failures are dropped here with a debug log; clients get no
signal for them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ..errors import ValidationError
from ..messages.chat import MessagePipeline, MessageSink
from ..state.presence import PresenceTracker
from ..state.registry import ConnectionRegistry
from ..state.typing_indicator import TypingCoordinator
from .broadcast import BroadcastChannel

if TYPE_CHECKING:
    from .websocket.connection import ClientConnection

logger = logging.getLogger(__name__)


class ChatHub:
    """Serialize every chat-state mutation behind one lock.

    Attributes:
        registry: Attached connections and their display names.
        presence: Online-name derivation and join/leave announcements.
        typing: Typing indicator state.
        broadcast: Outbound event addressing.
        messages: Chat message pipeline.
    """

    def __init__(
        self,
        store: MessageSink,
        *,
        registry: ConnectionRegistry | None = None,
    ) -> None:
        self._lock = asyncio.Lock()
        self.registry = registry or ConnectionRegistry()
        self.broadcast = BroadcastChannel(self.registry)
        self.presence = PresenceTracker(self.registry, self.broadcast)
        self.typing = TypingCoordinator(self.broadcast)
        self.messages = MessagePipeline(
            store,
            self.registry,
            self.typing,
            self.broadcast,
            self._lock,
        )

    # ============================================================================
    # Connection lifecycle
    # ============================================================================
    async def attach(self, connection: ClientConnection) -> None:
        async with self._lock:
            self.registry.register(connection)
            count = len(self.registry)
        logger.info("connection attached id=%s active=%s", connection.connection_id, count)

    async def detach(self, connection_id: str) -> str | None:
        """Remove a connection and announce the departure; return its name."""
        async with self._lock:
            if connection_id not in self.registry:
                return None
            name = self.registry.remove(connection_id)
            self.typing.clear(connection_id)
            if name:
                self.presence.announce_leave(connection_id, name)
            count = len(self.registry)
        logger.info("connection detached id=%s name=%s active=%s", connection_id, name, count)
        return name

    # ============================================================================
    # Client events
    # ============================================================================
    async def join(self, connection_id: str, raw_name: Any) -> str | None:
        async with self._lock:
            try:
                name = self.registry.identify(connection_id, raw_name)
            except ValidationError as exc:
                logger.debug("join dropped: %s", exc.message)
                return None
            self.presence.announce_join(connection_id, name)
        logger.info("user joined name=%s", name)
        return name

    async def start_typing(self, connection_id: str, raw_name: Any) -> None:
        async with self._lock:
            try:
                self.typing.start(connection_id, raw_name)
            except ValidationError as exc:
                logger.debug("typing dropped: %s", exc.message)

    async def stop_typing(self, connection_id: str) -> None:
        async with self._lock:
            self.typing.stop(connection_id)

    async def submit_message(
        self,
        connection_id: str,
        sender: Any,
        text: Any,
        recipient: Any = None,
    ) -> bool:
        try:
            return await self.messages.submit(connection_id, sender, text, recipient)
        except ValidationError as exc:
            logger.debug("chat message dropped: %s (%s)", exc.message, exc.error_code)
            return False

    # ============================================================================
    # Introspection
    # ============================================================================
    async def online_names(self) -> list[str]:
        async with self._lock:
            return self.presence.current_names()

    async def typing_names(self) -> list[str]:
        async with self._lock:
            return self.typing.current_names()

    def connection_count(self) -> int:
        return len(self.registry)


__all__ = ["ChatHub"]
