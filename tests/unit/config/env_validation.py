"""Unit tests for startup configuration validation."""

from __future__ import annotations

import pytest

from chathub.helpers import validation
from chathub.helpers.validation import collect_env_errors


def test_defaults_are_valid() -> None:
    assert collect_env_errors() == []


def test_missing_mongo_uri_is_reported() -> None:
    errors = collect_env_errors(mongo_uri="")
    assert errors == ["MONGO_URI environment variable is required"]


def test_non_mongo_scheme_is_reported() -> None:
    errors = collect_env_errors(mongo_uri="postgres://db")
    assert len(errors) == 1 and "mongodb://" in errors[0]


def test_history_bounds_are_checked() -> None:
    errors = collect_env_errors(history_limit=200, history_max_limit=100)
    assert any("CHAT_HISTORY_MAX_LIMIT" in error for error in errors)


def test_non_positive_limits_are_reported() -> None:
    errors = collect_env_errors(message_max_chars=0, outbound_queue_size=0, send_timeout_s=0)
    assert len(errors) == 3


def test_validate_env_raises_with_all_problems(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(validation, "collect_env_errors", lambda: ["first", "second"])
    with pytest.raises(ValueError, match="first; second"):
        validation.validate_env()
