"""Error taxonomy shared by services and routers."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a request is missing required fields or carries malformed values."""


class PersistenceError(RuntimeError):
    """Raised when the database is unavailable or a read/write fails."""


class TransportError(RuntimeError):
    """Raised by an SMS transport when a single message cannot be sent.

    The fan-out records it on the recipient's outcome; it never fails a request.
    """

    def __init__(self, message: str, code: int | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
