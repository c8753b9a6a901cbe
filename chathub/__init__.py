"""chathub: single-room realtime chat over WebSockets."""

__version__ = "1.0.0"
