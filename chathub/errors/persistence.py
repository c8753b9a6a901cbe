"""Message store failure exceptions."""


class PersistenceError(Exception):
    """Raised when a message cannot be durably written or read.

    The message pipeline reports this to the originating connection only
    and suppresses every other effect of the submission.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


__all__ = ["PersistenceError"]
