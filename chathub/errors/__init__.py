"""Centralized exception classes for the chat hub.

Organization:
    - validation.py: Malformed, empty or oversized client payloads
    - persistence.py: Durable write/read failures against the message store
    - protocol.py: Unparseable frames and unknown event types
    - state.py: Engine logic errors (duplicate or unknown connection ids)

Only PersistenceError is ever surfaced to a client; validation and protocol
failures are dropped after logging.
"""

from .state import ConnectionStateError
from .protocol import ProtocolError
from .validation import ValidationError
from .persistence import PersistenceError

__all__ = [
    "ConnectionStateError",
    "PersistenceError",
    "ProtocolError",
    "ValidationError",
]
