"""Client-facing message handling.

sanitize.py:
    HTML escaping and identity-name shape checks.

events.py:
    Outbound event payload builders.

chat.py:
    Validation, persistence and fan-out of chat messages.
"""
