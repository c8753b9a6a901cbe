"""Per-connection outbound channel.

Every accepted WebSocket is wrapped in a ClientConnection that owns:

1. An opaque server-generated ``connection_id``
2. A bounded outbound queue of event payloads
3. A writer task that drains the queue onto the socket in order

``deliver`` is synchronous and never blocks: it enqueues or refuses. That
keeps broadcasts cheap enough to run inside the hub's critical section and
isolates every client from every other client's socket problems.

Usage:
    connection = ClientConnection(websocket)
    connection.start()
    connection.deliver({"type": "presence-update", "names": []})
    ...
    await connection.close()  # flushes what is queued, then stops
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import uuid
from typing import Any

from fastapi import WebSocket

from ...config.websocket import WS_OUTBOUND_QUEUE_SIZE
from .helpers import safe_send_json

logger = logging.getLogger(__name__)

# Queue marker telling the writer to exit once earlier events are flushed
_CLOSE = object()


class ClientConnection:
    """Outbound side of one client's event channel.

    Attributes:
        connection_id: Opaque unique handle for this channel.
    """

    def __init__(
        self,
        websocket: WebSocket,
        *,
        connection_id: str | None = None,
        queue_size: int = WS_OUTBOUND_QUEUE_SIZE,
    ) -> None:
        self.connection_id = connection_id or uuid.uuid4().hex
        self._ws = websocket
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=max(1, queue_size))
        self._task: asyncio.Task | None = None
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> asyncio.Task:
        """Start the writer task (idempotent)."""
        if self._task is None:
            self._task = asyncio.create_task(self._writer_loop())
        return self._task

    def deliver(self, event: dict[str, Any]) -> bool:
        """Queue an event for this client; False if it was refused."""
        if self._closed:
            return False
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                "outbound queue full for connection %s; dropped %s",
                self.connection_id,
                event.get("type"),
            )
            return False
        return True

    async def close(self) -> None:
        """Stop accepting events, flush the queue and stop the writer."""
        self._closed = True
        if self._task is None:
            return
        try:
            self._queue.put_nowait(_CLOSE)
        except asyncio.QueueFull:
            self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await self._task
        self._task = None

    async def _writer_loop(self) -> None:
        while True:
            event = await self._queue.get()
            if event is _CLOSE:
                return
            try:
                sent = await safe_send_json(self._ws, event)
            except Exception:  # noqa: BLE001
                logger.exception("outbound send failed for connection %s", self.connection_id)
                sent = False
            if not sent:
                # The socket is gone; everything still queued is undeliverable.
                self._closed = True
                return


__all__ = ["ClientConnection"]
