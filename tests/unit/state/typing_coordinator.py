"""Unit tests for typing indicator transitions."""

from __future__ import annotations

import pytest

from chathub.errors import ValidationError
from chathub.handlers.broadcast import BroadcastChannel
from chathub.state.registry import ConnectionRegistry
from chathub.state.typing_indicator import TypingCoordinator
from tests.helpers.fakes import RecordingConnection


def _setup(*ids: str):
    registry = ConnectionRegistry(strict_names=False)
    connections = {cid: RecordingConnection(cid) for cid in ids}
    for connection in connections.values():
        registry.register(connection)
    return TypingCoordinator(BroadcastChannel(registry)), connections


def test_start_broadcasts_to_everyone_but_the_typist() -> None:
    typing, conns = _setup("a", "b", "c")
    assert typing.start("a", " alice ") == "alice"

    assert conns["a"].events == []
    assert conns["b"].events == [{"type": "typing-update", "names": ["alice"]}]
    assert conns["c"].events == [{"type": "typing-update", "names": ["alice"]}]
    assert "a" in typing


@pytest.mark.parametrize("raw", ["", "  ", None])
def test_start_without_name_changes_nothing(raw: object) -> None:
    typing, conns = _setup("a", "b")
    with pytest.raises(ValidationError):
        typing.start("a", raw)
    assert typing.current_names() == []
    assert conns["b"].events == []


def test_repeated_start_keeps_one_entry() -> None:
    typing, _ = _setup("a", "b")
    typing.start("a", "alice")
    typing.start("a", "alice")
    assert typing.current_names() == ["alice"]


def test_stop_tells_only_the_others() -> None:
    typing, conns = _setup("a", "b")
    typing.start("a", "alice")
    conns["b"].clear()

    assert typing.stop("a") is True
    assert conns["a"].events == []
    assert conns["b"].events == [{"type": "typing-update", "names": []}]


def test_stop_when_idle_is_silent() -> None:
    typing, conns = _setup("a", "b")
    assert typing.stop("a") is False
    assert conns["b"].events == []


def test_clear_tells_everyone() -> None:
    typing, conns = _setup("a", "b")
    typing.start("a", "alice")
    typing.start("b", "bob")
    conns["a"].clear()
    conns["b"].clear()

    assert typing.clear("a") is True
    assert conns["a"].events == [{"type": "typing-update", "names": ["bob"]}]
    assert conns["b"].events == [{"type": "typing-update", "names": ["bob"]}]
    assert typing.clear("a") is False
