"""WebSocket send helpers.

Sends report success as a boolean instead of raising, so the outbound
writer can stop quietly when the client has gone away.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import orjson
from fastapi import WebSocket

from ...config.websocket import WS_SEND_TIMEOUT_S
from .disconnects import is_expected_disconnect

logger = logging.getLogger(__name__)


async def safe_send_text(
    ws: WebSocket,
    text: str,
    *,
    timeout_s: float = WS_SEND_TIMEOUT_S,
) -> bool:
    """Send text to the client, returning False if the socket is gone.

    Args:
        ws: The WebSocket connection.
        text: Raw text to send.
        timeout_s: Seconds to wait for the write before giving up.

    Returns:
        True if sent successfully, False if the client disconnected or
        stopped reading.
    """
    try:
        await asyncio.wait_for(ws.send_text(text), timeout=timeout_s)
    except asyncio.TimeoutError:
        logger.info("WebSocket send timed out after %.1fs", timeout_s)
        return False
    except Exception as exc:  # noqa: BLE001
        if not is_expected_disconnect(exc):
            raise
        logger.info("WebSocket disconnected while sending %s bytes", len(text))
        return False
    return True


async def safe_send_json(ws: WebSocket, payload: dict[str, Any], **kwargs: Any) -> bool:
    """Send a JSON payload, swallowing client disconnects."""
    return await safe_send_text(ws, orjson.dumps(payload).decode(), **kwargs)


__all__ = [
    "safe_send_text",
    "safe_send_json",
]
