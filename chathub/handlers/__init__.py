"""WebSocket and chat coordination handlers.

This package provides the engine that sits between client connections and
shared chat state:

broadcast.py:
    Addresses outbound events to all, all-but-one, or one connection.

hub.py:
    ChatHub, the single owner of registry, presence and typing state.
    Every mutation is serialized by one asyncio.Lock.

instances.py:
    Process-wide hub and message store singletons.

websocket/:
    WebSocket message routing and delivery:
    - Per-connection outbound queue and writer (connection.py)
    - Message parsing (parser.py)
    - Safe send helpers (helpers.py)
    - Disconnect classification (disconnects.py)
    - Main connection handler (manager.py)
"""
