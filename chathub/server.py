"""Main FastAPI server for the chat hub.

This module wires the chat engine into an ASGI application. It provides:

- REST endpoints for health checks (/healthz, /)
- REST endpoint for recent message history (/messages)
- WebSocket endpoint for realtime chat (/ws)
- Message index creation on startup
- Mongo client shutdown on exit

Server Lifecycle:
    1. On startup: validate configuration, ensure message indexes
    2. Accept WebSocket connections on /ws
    3. Route join/chat-message/typing/stop-typing events through the hub
    4. On shutdown: close the Mongo client

Example:
    Run directly with uvicorn:
        $ uvicorn chathub.server:app --host 0.0.0.0 --port 9200

    Or through the console script:
        $ chathub
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query, WebSocket
from fastapi.responses import ORJSONResponse

from .config import CHAT_HISTORY_LIMIT, CHAT_HISTORY_MAX_LIMIT, CHATHUB_HOST, CHATHUB_PORT
from .errors import PersistenceError
from .handlers.instances import get_chat_hub, get_message_store
from .handlers.websocket import handle_websocket_connection
from .helpers.validation import validate_env
from .logging import configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(default_response_class=ORJSONResponse)

configure_logging()
validate_env()


@app.on_event("startup")
async def prepare_store() -> None:
    """Create message indexes before serving traffic.

    An unreachable store is logged rather than fatal: presence and typing
    keep working, and each failed write reaches its sender as an error.
    """
    try:
        await get_message_store().ensure_indexes()
    except PersistenceError as exc:
        logger.error("message store unavailable at startup: %s", exc.message)
    else:
        logger.info("message store ready")


@app.on_event("shutdown")
async def close_store() -> None:
    """Release the Mongo client when the server exits."""
    get_message_store().close()


@app.get("/")
async def root():
    """Root endpoint for load balancer health checks."""
    return {"status": "ok"}


@app.get("/healthz")
async def healthz():
    """Health check endpoint with the current connection count."""
    return {"status": "ok", "connections": get_chat_hub().connection_count()}


@app.get("/messages")
async def recent_messages(
    limit: int = Query(CHAT_HISTORY_LIMIT, ge=1),
):
    """Most recent messages, oldest first, for rendering the chat page."""
    limit = min(limit, CHAT_HISTORY_MAX_LIMIT)
    try:
        messages = await get_message_store().recent(limit)
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail="Message history unavailable") from exc
    return {"messages": [message.to_payload() for message in messages]}


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Main WebSocket endpoint for chat events."""
    await handle_websocket_connection(websocket, get_chat_hub())


def main() -> None:
    import uvicorn  # noqa: PLC0415

    uvicorn.run(app, host=CHATHUB_HOST, port=CHATHUB_PORT)


if __name__ == "__main__":
    main()
