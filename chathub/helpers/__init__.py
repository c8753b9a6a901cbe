"""Startup helpers."""

from .validation import collect_env_errors, validate_env

__all__ = ["collect_env_errors", "validate_env"]
