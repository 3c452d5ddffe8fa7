"""Cancellation error type.

Defines the public ``OperationAborted`` error raised whenever a cancellation
token is observed in the cancelled state. Kept isolated to satisfy the
one-class-per-file policy.
"""

from __future__ import annotations

ABORT_ERROR_CODE = "ABORT_ERR"


class OperationAborted(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    The error carries no payload beyond its kind. Two instances compare equal
    regardless of identity, so callers and collaborators may raise fresh
    instances and still be recognised as the same outcome.
    """

    code = ABORT_ERROR_CODE

    def __init__(self, message: str = "The operation was aborted") -> None:
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OperationAborted)

    def __hash__(self) -> int:
        return hash(OperationAborted)


__all__ = ["OperationAborted", "ABORT_ERROR_CODE"]
