"""Typing indicator state.

Each connection is either idle or typing. The transitions are:

    idle   -> typing : ``typing`` event with a non-empty name
    typing -> idle   : ``stop-typing`` event (others are told)
    typing -> idle   : successful message send or disconnect (everyone is told)

Typing state is independent of presence: a connection may signal typing
under a name it never joined with.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import ValidationError
from ..messages import events
from ..messages.sanitize import sanitize_input

if TYPE_CHECKING:
    from ..handlers.broadcast import BroadcastChannel


class TypingCoordinator:
    """Track connections mid-typing and broadcast the typing list."""

    def __init__(self, broadcast: BroadcastChannel) -> None:
        self._typing: dict[str, str] = {}
        self._broadcast = broadcast

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._typing

    def current_names(self) -> list[str]:
        return list(self._typing.values())

    def start(self, connection_id: str, raw_name: object) -> str:
        clean_name = sanitize_input(raw_name) if isinstance(raw_name, str) else ""
        if not clean_name:
            raise ValidationError("missing_display_name", "typing requires a display name")
        self._typing[connection_id] = clean_name
        self._broadcast.to_all_except(connection_id, events.typing_update(self.current_names()))
        return clean_name

    def stop(self, connection_id: str) -> bool:
        """Handle an explicit stop signal; only the other connections hear it."""
        if self._typing.pop(connection_id, None) is None:
            return False
        self._broadcast.to_all_except(connection_id, events.typing_update(self.current_names()))
        return True

    def clear(self, connection_id: str) -> bool:
        """Drop typing state after a send or disconnect and tell everyone."""
        if self._typing.pop(connection_id, None) is None:
            return False
        self._broadcast.to_all(events.typing_update(self.current_names()))
        return True


__all__ = ["TypingCoordinator"]
