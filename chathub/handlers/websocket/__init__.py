"""WebSocket handler exports."""

from .connection import ClientConnection
from .manager import dispatch_client_event, handle_websocket_connection
from .parser import parse_client_message

__all__ = [
    "ClientConnection",
    "dispatch_client_event",
    "handle_websocket_connection",
    "parse_client_message",
]
