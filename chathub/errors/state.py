"""Engine state consistency exceptions."""


class ConnectionStateError(RuntimeError):
    """Raised when the connection registry is asked to do something impossible.

    Connection ids are generated by the server, so registering the same id
    twice or identifying an id that was never registered is a programming
    error rather than bad client input.
    """


__all__ = ["ConnectionStateError"]
