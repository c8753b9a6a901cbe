"""Unit tests for chat message validation, persistence and fan-out."""

from __future__ import annotations

import asyncio

import pytest

from chathub.errors import ValidationError
from chathub.handlers.hub import ChatHub
from chathub.messages.chat import prepare_submission
from chathub.state.registry import ConnectionRegistry
from tests.helpers.fakes import FakeMessageStore, RecordingConnection


# --- prepare_submission ---


def test_prepare_submission_escapes_fields_once() -> None:
    submission = prepare_submission(" alice ", "<b>hi</b>", " <bob> ")
    assert submission.sender == "alice"
    assert submission.text == "&lt;b&gt;hi&lt;/b&gt;"
    assert submission.recipient == "&lt;bob&gt;"
    assert submission.room == "general"


@pytest.mark.parametrize(
    "sender,text,code",
    [
        (None, "hi", "missing_sender"),
        ("", "hi", "missing_sender"),
        ("   ", "hi", "missing_sender"),
        ("alice", None, "missing_text"),
        ("alice", 12, "missing_text"),
        ("alice", "    ", "empty_text"),
    ],
)
def test_prepare_submission_rejects_missing_fields(sender: object, text: object, code: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        prepare_submission(sender, text)
    assert excinfo.value.error_code == code


def test_prepare_submission_accepts_exactly_max_chars() -> None:
    assert len(prepare_submission("alice", "x" * 1000).text) == 1000


def test_prepare_submission_rejects_1001_chars() -> None:
    with pytest.raises(ValidationError):
        prepare_submission("alice", "x" * 1001)


def test_length_limit_applies_after_escaping() -> None:
    # '<' escapes to four characters.
    assert len(prepare_submission("alice", "<" * 250).text) == 1000
    with pytest.raises(ValidationError):
        prepare_submission("alice", "<" * 251)


def test_surrounding_whitespace_does_not_count() -> None:
    assert prepare_submission("alice", "   " + "x" * 1000 + "   ").text == "x" * 1000


def test_blank_recipient_means_public() -> None:
    assert prepare_submission("alice", "hi", "  ").recipient is None
    assert prepare_submission("alice", "hi", 5).recipient is None


# --- submit through the hub ---


def _hub(store: FakeMessageStore, *ids: str) -> tuple[ChatHub, dict[str, RecordingConnection]]:
    hub = ChatHub(store, registry=ConnectionRegistry(strict_names=False))
    connections = {cid: RecordingConnection(cid) for cid in ids}
    for connection in connections.values():
        hub.registry.register(connection)
    return hub, connections


def test_public_message_is_persisted_then_sent_to_everyone() -> None:
    async def _run() -> None:
        store = FakeMessageStore()
        hub, conns = _hub(store, "a", "b")
        assert await hub.submit_message("a", "alice", "<b>hi</b>") is True

        assert [m.text for m in store.saved] == ["&lt;b&gt;hi&lt;/b&gt;"]
        for connection in conns.values():
            messages = connection.of_type("chat-message")
            assert len(messages) == 1
            assert messages[0]["sender"] == "alice"
            assert messages[0]["text"] == "&lt;b&gt;hi&lt;/b&gt;"
            assert messages[0]["createdAt"] == "2024-05-01T12:00:01.000Z"
            assert "recipient" not in messages[0]

    asyncio.run(_run())


def test_oversized_message_is_neither_stored_nor_sent() -> None:
    async def _run() -> None:
        store = FakeMessageStore()
        hub, conns = _hub(store, "a", "b")
        assert await hub.submit_message("a", "alice", "y" * 1001) is False
        assert store.saved == []
        assert conns["a"].events == conns["b"].events == []

    asyncio.run(_run())


def test_persistence_failure_reports_only_to_sender() -> None:
    async def _run() -> None:
        store = FakeMessageStore(fail=True)
        hub, conns = _hub(store, "a", "b")
        hub.typing.start("a", "alice")
        conns["b"].clear()

        assert await hub.submit_message("a", "alice", "hello") is False
        assert conns["a"].events == [{"type": "error", "message": "Failed to send message"}]
        assert conns["b"].events == []
        # The failed send never happened, so alice is still typing.
        assert hub.typing.current_names() == ["alice"]

    asyncio.run(_run())


@pytest.mark.parametrize(
    "error",
    [TimeoutError("write stalled"), RuntimeError("driver bug"), ValueError("bad document")],
)
def test_unexpected_store_error_reports_only_to_sender(error: Exception) -> None:
    class _BrokenStore(FakeMessageStore):
        async def save(self, sender: str, text: str, room: str = "general"):
            raise error

    async def _run() -> None:
        hub, conns = _hub(_BrokenStore(), "a", "b")

        assert await hub.submit_message("a", "alice", "hi") is False
        assert conns["a"].events == [{"type": "error", "message": "Failed to send message"}]
        assert conns["b"].events == []

    asyncio.run(_run())


def test_successful_send_clears_typing_for_everyone() -> None:
    async def _run() -> None:
        store = FakeMessageStore()
        hub, conns = _hub(store, "a", "b")
        hub.typing.start("a", "alice")
        conns["b"].clear()

        await hub.submit_message("a", "alice", "done typing")
        assert conns["a"].types() == ["chat-message", "typing-update"]
        assert conns["b"].types() == ["chat-message", "typing-update"]
        assert conns["b"].of_type("typing-update")[0]["names"] == []

    asyncio.run(_run())


def test_direct_message_reaches_recipient_and_echoes_to_sender() -> None:
    async def _run() -> None:
        store = FakeMessageStore()
        hub, conns = _hub(store, "a", "b", "c")
        hub.registry.identify("a", "alice")
        hub.registry.identify("b", "bob")

        assert await hub.submit_message("a", "alice", "psst", recipient="bob") is True
        assert conns["a"].of_type("chat-message")[0]["recipient"] == "bob"
        assert conns["b"].of_type("chat-message")[0]["recipient"] == "bob"
        assert conns["c"].events == []
        assert len(store.saved) == 1

    asyncio.run(_run())


def test_direct_message_to_offline_user_still_persists_and_echoes() -> None:
    async def _run() -> None:
        store = FakeMessageStore()
        hub, conns = _hub(store, "a", "b")
        hub.registry.identify("a", "alice")

        assert await hub.submit_message("a", "alice", "anyone?", recipient="zed") is True
        assert len(store.saved) == 1
        assert conns["a"].types() == ["chat-message"]
        assert conns["b"].events == []

    asyncio.run(_run())


def test_direct_message_picks_first_connection_with_the_name() -> None:
    async def _run() -> None:
        store = FakeMessageStore()
        hub, conns = _hub(store, "a", "b1", "b2")
        hub.registry.identify("b1", "bob")
        hub.registry.identify("b2", "bob")

        await hub.submit_message("a", "alice", "hi bob", recipient="bob")
        assert conns["b1"].types() == ["chat-message"]
        assert conns["b2"].events == []

    asyncio.run(_run())


def test_direct_message_to_self_arrives_as_delivery_and_echo() -> None:
    async def _run() -> None:
        store = FakeMessageStore()
        hub, conns = _hub(store, "a")
        hub.registry.identify("a", "alice")

        await hub.submit_message("a", "alice", "note to self", recipient="alice")
        assert conns["a"].types() == ["chat-message", "chat-message"]
        assert len(store.saved) == 1

    asyncio.run(_run())


def test_sender_gone_during_persistence_still_stores_message() -> None:
    async def _run() -> None:
        store = FakeMessageStore()
        store.gate = asyncio.Event()
        hub, conns = _hub(store, "a", "b")

        pending = asyncio.create_task(hub.submit_message("a", "alice", "bye"))
        await asyncio.sleep(0)
        await hub.detach("a")
        store.gate.set()

        assert await pending is True
        assert len(store.saved) == 1
        assert conns["a"].events == []
        assert conns["b"].types() == ["chat-message"]

    asyncio.run(_run())
