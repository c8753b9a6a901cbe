"""Connection registry: which connections are attached and under what name.

Each WebSocket gets an entry as soon as it is accepted. The entry carries no
display name until the client announces one with a ``join`` event; only
identified entries count as online.

Entries are kept in a plain dict, so iteration follows registration order.
Presence lists and recipient lookup both rely on that ordering.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..config import CHAT_STRICT_DISPLAY_NAMES
from ..errors import ConnectionStateError, ValidationError
from ..messages.sanitize import is_valid_username, sanitize_input

if TYPE_CHECKING:
    from ..handlers.websocket.connection import ClientConnection


@dataclass
class ConnectionEntry:
    """One attached connection.

    Attributes:
        connection: Outbound side of the client's channel.
        display_name: Sanitized name, or None until the client joins.
        connected_at: Wall-clock time the channel was registered.
    """

    connection: ClientConnection
    display_name: str | None = None
    connected_at: float = field(default_factory=time.time)

    @property
    def connection_id(self) -> str:
        return self.connection.connection_id


class ConnectionRegistry:
    """Maps connection ids to entries for every open channel."""

    def __init__(self, *, strict_names: bool = CHAT_STRICT_DISPLAY_NAMES) -> None:
        self._entries: dict[str, ConnectionEntry] = {}
        self._strict_names = strict_names

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, connection: ClientConnection) -> ConnectionEntry:
        connection_id = connection.connection_id
        if connection_id in self._entries:
            raise ConnectionStateError(f"connection {connection_id} is already registered")
        entry = ConnectionEntry(connection=connection)
        self._entries[connection_id] = entry
        return entry

    def identify(self, connection_id: str, raw_name: object) -> str:
        """Attach a sanitized display name to a registered connection.

        Raises:
            ValidationError: The name is missing, blank, or (in strict mode)
                not shaped like a username. The entry is left untouched.
            ConnectionStateError: The connection id is not registered.
        """
        clean_name = sanitize_input(raw_name) if isinstance(raw_name, str) else ""
        if not clean_name:
            raise ValidationError("missing_display_name", "display name is required")
        if self._strict_names and not is_valid_username(clean_name):
            raise ValidationError(
                "invalid_display_name",
                "display name must be 3-20 letters, digits, '_' or '-'",
            )
        entry = self._entries.get(connection_id)
        if entry is None:
            raise ConnectionStateError(f"connection {connection_id} is not registered")
        entry.display_name = clean_name
        return clean_name

    def remove(self, connection_id: str) -> str | None:
        """Drop the entry and return the display name it carried, if any."""
        entry = self._entries.pop(connection_id, None)
        if entry is None:
            return None
        return entry.display_name

    def get(self, connection_id: str) -> ConnectionEntry | None:
        return self._entries.get(connection_id)

    def entries(self) -> list[ConnectionEntry]:
        return list(self._entries.values())

    def identified(self) -> dict[str, str]:
        """Return connection id -> display name for identified entries."""
        return {
            connection_id: entry.display_name
            for connection_id, entry in self._entries.items()
            if entry.display_name
        }

    def find_by_name(self, name: str) -> ConnectionEntry | None:
        """Return the first identified entry whose display name equals ``name``.

        This is a linear scan over every attached connection. Two connections
        may share a name; the earliest registered one wins.
        """
        for entry in self._entries.values():
            if entry.display_name and entry.display_name == name:
                return entry
        return None


__all__ = ["ConnectionEntry", "ConnectionRegistry"]
