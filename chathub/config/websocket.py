"""WebSocket-specific runtime configuration values.

Outbound delivery:
    WS_OUTBOUND_QUEUE_SIZE: Events buffered per connection before new
        events for that connection are dropped. Broadcasts never wait on
        a slow client.

    WS_SEND_TIMEOUT_S: Upper bound for a single frame write. A client
        that cannot accept a frame in time is treated as gone.
"""

from __future__ import annotations

import os

# ============================================================================
# Outbound Delivery
# ============================================================================

WS_OUTBOUND_QUEUE_SIZE = int(os.getenv("WS_OUTBOUND_QUEUE_SIZE", "256"))
WS_SEND_TIMEOUT_S = float(os.getenv("WS_SEND_TIMEOUT_S", "10"))

__all__ = [
    "WS_OUTBOUND_QUEUE_SIZE",
    "WS_SEND_TIMEOUT_S",
]
