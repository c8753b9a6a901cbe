"""HTTP listener settings."""

import os


CHATHUB_HOST = os.getenv("CHATHUB_HOST", "0.0.0.0")
CHATHUB_PORT = int(os.getenv("CHATHUB_PORT", os.getenv("PORT", "9200")))


__all__ = ["CHATHUB_HOST", "CHATHUB_PORT"]
