"""Event addressing over the set of currently attached connections.

The broadcast channel never awaits a client. ``ClientConnection.deliver``
only enqueues onto the connection's outbound queue, so fan-out can run while
the hub lock is held without a slow or dead client stalling anyone else.
A refused delivery is counted and logged, never raised.
"""

from __future__ import annotations

import logging
from typing import Any

from ..state.registry import ConnectionRegistry

logger = logging.getLogger(__name__)


class BroadcastChannel:
    """Deliver events to all, all-but-one, or exactly one connection."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    def to_all(self, event: dict[str, Any]) -> int:
        return self._fan_out(event, exclude=None)

    def to_all_except(self, connection_id: str, event: dict[str, Any]) -> int:
        return self._fan_out(event, exclude=connection_id)

    def to_one(self, connection_id: str, event: dict[str, Any]) -> bool:
        entry = self._registry.get(connection_id)
        if entry is None:
            logger.debug("broadcast: %s target %s not attached", event.get("type"), connection_id)
            return False
        return entry.connection.deliver(event)

    def _fan_out(self, event: dict[str, Any], *, exclude: str | None) -> int:
        delivered = 0
        skipped = 0
        for entry in self._registry.entries():
            if entry.connection_id == exclude:
                continue
            if entry.connection.deliver(event):
                delivered += 1
            else:
                skipped += 1
        if skipped:
            logger.debug(
                "broadcast: %s delivered=%s skipped=%s",
                event.get("type"),
                delivered,
                skipped,
            )
        return delivered


__all__ = ["BroadcastChannel"]
