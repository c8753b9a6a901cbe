"""Input sanitization helpers for user-supplied chat fields.

Every display name and message body that enters the hub passes through
``sanitize_input`` exactly once, before it is stored or relayed. Downstream
code treats the result as already safe for HTML rendering and must not
escape it again.
"""

from __future__ import annotations

import re
from typing import Any

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}
_HTML_ESCAPE_RE = re.compile(r"[&<>\"']")
_USERNAME_RE = re.compile(r"[a-zA-Z0-9_-]{3,20}")


def escape_html(text: Any) -> Any:
    """Escape the five HTML-significant characters in ``text``.

    Non-string values are returned unchanged so callers can validate
    type separately.
    """
    if not isinstance(text, str):
        return text
    return _HTML_ESCAPE_RE.sub(lambda match: _HTML_ESCAPES[match.group(0)], text)


def sanitize_input(text: Any) -> Any:
    """Trim surrounding whitespace and HTML-escape the result."""
    if not isinstance(text, str):
        return text
    return escape_html(text.strip())


def is_valid_username(username: Any) -> bool:
    """Return True for 3-20 characters of letters, digits, ``_`` or ``-``."""
    if not username or not isinstance(username, str):
        return False
    return bool(_USERNAME_RE.fullmatch(username))


__all__ = [
    "escape_html",
    "sanitize_input",
    "is_valid_username",
]
