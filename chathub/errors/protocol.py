"""Client frame protocol exceptions."""


class ProtocolError(ValueError):
    """Raised for frames that cannot be parsed or routed."""


__all__ = ["ProtocolError"]
