"""Presence derivation and join/leave announcements."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..messages import events
from .registry import ConnectionRegistry

if TYPE_CHECKING:
    from ..handlers.broadcast import BroadcastChannel


class PresenceTracker:
    """Derive the online-name list from the registry and announce changes.

    Both announcements emit their notice and the refreshed presence list in
    the same call, so no client can observe a join or leave without the
    matching list following it.
    """

    def __init__(self, registry: ConnectionRegistry, broadcast: BroadcastChannel) -> None:
        self._registry = registry
        self._broadcast = broadcast

    def current_names(self) -> list[str]:
        return list(self._registry.identified().values())

    def announce_join(self, connection_id: str, name: str) -> None:
        self._broadcast.to_all_except(connection_id, events.user_joined(name))
        self._broadcast.to_all(events.presence_update(self.current_names()))

    def announce_leave(self, connection_id: str, name: str) -> None:
        # The leaving connection is already out of the registry here.
        self._broadcast.to_all(events.presence_update(self.current_names()))
        self._broadcast.to_all_except(connection_id, events.user_left(name))


__all__ = ["PresenceTracker"]
