"""Shared in-memory chat state.

registry.py:
    Connection id -> display name; the authoritative record of who is
    attached right now.

presence.py:
    Online-name derivation and join/leave announcements.

typing_indicator.py:
    Connection id -> display name for connections mid-typing.

None of these classes lock on their own. They are owned and serialized by
``chathub.handlers.hub.ChatHub``.
"""

from .registry import ConnectionEntry, ConnectionRegistry
from .presence import PresenceTracker
from .typing_indicator import TypingCoordinator

__all__ = [
    "ConnectionEntry",
    "ConnectionRegistry",
    "PresenceTracker",
    "TypingCoordinator",
]
