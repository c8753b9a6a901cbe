"""Client payload parsing for the WebSocket handler."""

from __future__ import annotations

from typing import Any

import orjson

from ...errors import ProtocolError


def parse_client_message(raw: str | bytes | None) -> dict[str, Any]:
    """Decode one client frame into a dict with a normalized ``type``.

    Event names are lowercased and underscores are accepted in place of
    hyphens, so ``"Stop_Typing"`` routes the same as ``"stop-typing"``.

    Raises:
        ProtocolError: The frame is empty, not JSON, not an object, or has
            no ``type``.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    text = (raw or "").strip()
    if not text:
        raise ProtocolError("Empty message.")

    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise ProtocolError("Message must be valid JSON.") from exc

    if not isinstance(data, dict):
        raise ProtocolError("Message must be a JSON object.")

    msg_type = data.get("type")
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise ProtocolError("Missing 'type' in message.")

    data["type"] = msg_type.strip().lower().replace("_", "-")
    return data


__all__ = ["parse_client_message"]
