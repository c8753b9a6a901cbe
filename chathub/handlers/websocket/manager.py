"""Primary WebSocket connection handler orchestration.

This module contains the handler behind ``/ws``. For each connection it:

1. Connection Setup:
   - Accepts the socket and wraps it in a ClientConnection
   - Registers it with the hub (no display name yet)

2. Message Routing (strictly in arrival order for this connection):
   - join          {"name": str}
   - chat-message  {"sender": str, "text": str, "recipient": str?}
   - typing        {"name": str}
   - stop-typing   {}
   - ping          -> {"type": "pong"}

3. Cleanup:
   - Detaches from the hub (typing cleared, leave announced)
   - Flushes and stops the outbound writer

Text and binary frames are both accepted. Unparseable frames and unknown
event types are logged and ignored. An unexpected error while handling one
event is logged and the loop moves on to the next frame. The loop ends when
the client disconnects or the outbound writer finds the socket dead.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from ...errors import ProtocolError
from ...logging import log_context
from ..hub import ChatHub
from .connection import ClientConnection
from .disconnects import is_expected_disconnect
from .parser import parse_client_message

logger = logging.getLogger(__name__)

EventHandlerFn = Callable[[ChatHub, ClientConnection, dict[str, Any]], Awaitable[Any]]


async def _handle_join(hub: ChatHub, connection: ClientConnection, msg: dict[str, Any]) -> None:
    await hub.join(connection.connection_id, msg.get("name"))


async def _handle_chat_message(hub: ChatHub, connection: ClientConnection, msg: dict[str, Any]) -> None:
    await hub.submit_message(
        connection.connection_id,
        msg.get("sender"),
        msg.get("text"),
        msg.get("recipient"),
    )


async def _handle_typing(hub: ChatHub, connection: ClientConnection, msg: dict[str, Any]) -> None:
    await hub.start_typing(connection.connection_id, msg.get("name"))


async def _handle_stop_typing(hub: ChatHub, connection: ClientConnection, msg: dict[str, Any]) -> None:
    await hub.stop_typing(connection.connection_id)


async def _handle_ping(hub: ChatHub, connection: ClientConnection, msg: dict[str, Any]) -> None:
    connection.deliver({"type": "pong"})


_EVENT_HANDLERS: dict[str, EventHandlerFn] = {
    "join": _handle_join,
    "chat-message": _handle_chat_message,
    "typing": _handle_typing,
    "stop-typing": _handle_stop_typing,
    "ping": _handle_ping,
}


async def dispatch_client_event(
    hub: ChatHub,
    connection: ClientConnection,
    raw: str | bytes | None,
) -> None:
    """Parse one frame and route it; protocol problems are logged and dropped."""
    try:
        msg = parse_client_message(raw)
    except ProtocolError as exc:
        logger.warning("WS recv: ignoring malformed frame: %s", exc)
        return

    msg_type = msg["type"]
    handler = _EVENT_HANDLERS.get(msg_type)
    if handler is None:
        logger.warning("WS recv: ignoring unknown event type %r", msg_type)
        return

    logger.debug("WS recv: %s", msg_type)
    await handler(hub, connection, msg)


async def _receive_frame(ws: WebSocket) -> str | bytes | None:
    """Next client frame, text or binary; raises WebSocketDisconnect on close."""
    message = await ws.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    text = message.get("text")
    return text if text is not None else message.get("bytes")


async def handle_websocket_connection(ws: WebSocket, hub: ChatHub | None = None) -> None:
    """Serve one client's event channel until it closes.

    Args:
        ws: The incoming WebSocket connection from FastAPI.
        hub: Hub to attach to. Defaults to the process-wide instance.
    """
    if hub is None:
        from ..instances import get_chat_hub  # noqa: PLC0415

        hub = get_chat_hub()

    await ws.accept()
    connection = ClientConnection(ws)
    connection.start()

    with log_context(connection_id=connection.connection_id):
        await hub.attach(connection)
        try:
            while not connection.closed:
                raw_msg = await _receive_frame(ws)
                try:
                    await dispatch_client_event(hub, connection, raw_msg)
                except Exception as exc:  # noqa: BLE001
                    if is_expected_disconnect(exc):
                        raise
                    logger.exception("WS event handling failed")
        except Exception as exc:  # noqa: BLE001
            if not is_expected_disconnect(exc):
                logger.exception("WebSocket error")
        finally:
            try:
                await hub.detach(connection.connection_id)
            except Exception:  # noqa: BLE001
                logger.exception("WebSocket detach failed")
            await connection.close()
            logger.info(
                "WebSocket connection closed. Active: %s Dropped events: %s",
                hub.connection_count(),
                connection.dropped,
            )


__all__ = [
    "dispatch_client_event",
    "handle_websocket_connection",
]
