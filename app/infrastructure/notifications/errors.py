"""Errors for the notification dispatch core."""

from typing import Optional

from infrastructure.operations import OperationResult


class DirectoryError(Exception):
    """Raised when the recipient directory or message store reports a failure.

    Attributes:
        message: human-friendly message
        response: the failed OperationResult returned by the storage client
        deleted: items already removed before the failure (bulk deletes only)
    """

    def __init__(
        self,
        message: str,
        response: Optional[OperationResult] = None,
        deleted: int = 0,
    ):
        super().__init__(message)
        self.response = response
        self.deleted = deleted


class TransportError(Exception):
    """Raised by a delivery transport for transport-level failures.

    Per-target failures are reported as DeliveryOutcome values instead.
    """


class DispatchError(Exception):
    """Typed failure surfaced to broadcast callers.

    Attributes:
        code: wire error code ("unauthenticated", "invalid-argument", "internal")
        message: human-friendly message
    """

    code = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class Unauthenticated(DispatchError):
    """Caller is not authenticated."""

    code = "unauthenticated"


class InvalidArgument(DispatchError):
    """Request is missing a required field."""

    code = "invalid-argument"


class InternalError(DispatchError):
    """Directory or transport failure while carrying out a broadcast."""

    code = "internal"
