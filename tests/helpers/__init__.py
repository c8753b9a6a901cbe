"""Shared fakes for chat hub unit tests."""

__all__ = ["fakes"]
