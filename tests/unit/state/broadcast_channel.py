"""Unit tests for event addressing."""

from __future__ import annotations

from chathub.handlers.broadcast import BroadcastChannel
from chathub.state.registry import ConnectionRegistry
from tests.helpers.fakes import RecordingConnection


def _setup(*connections: RecordingConnection) -> BroadcastChannel:
    registry = ConnectionRegistry(strict_names=False)
    for connection in connections:
        registry.register(connection)
    return BroadcastChannel(registry)


def test_to_all_reaches_every_connection() -> None:
    a, b = RecordingConnection("a"), RecordingConnection("b")
    channel = _setup(a, b)
    assert channel.to_all({"type": "x"}) == 2
    assert a.events == b.events == [{"type": "x"}]


def test_to_all_except_skips_one() -> None:
    a, b = RecordingConnection("a"), RecordingConnection("b")
    channel = _setup(a, b)
    assert channel.to_all_except("a", {"type": "x"}) == 1
    assert a.events == []
    assert b.events == [{"type": "x"}]


def test_to_one_targets_single_connection() -> None:
    a, b = RecordingConnection("a"), RecordingConnection("b")
    channel = _setup(a, b)
    assert channel.to_one("b", {"type": "x"}) is True
    assert a.events == []
    assert channel.to_one("missing", {"type": "x"}) is False


def test_refused_delivery_does_not_stop_fan_out() -> None:
    dead = RecordingConnection("dead", accept=False)
    a, b = RecordingConnection("a"), RecordingConnection("b")
    channel = _setup(a, dead, b)
    assert channel.to_all({"type": "x"}) == 2
    assert a.events == b.events == [{"type": "x"}]
