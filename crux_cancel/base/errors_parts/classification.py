"""
Error classification helpers mapping exceptions to normalized ErrorCode values.
"""
from __future__ import annotations

import asyncio

from pydantic import ValidationError

from .error_code import ErrorCode
from .operation_aborted import ABORT_ERROR_CODE, OperationAborted
from .operation_timeout import TIMEOUT_ERROR_CODE


def is_operation_aborted(exc: BaseException | None) -> bool:
    """Return True when ``exc`` signals cancellation.

    Matching is by kind: any exception exposing ``code == "ABORT_ERR"`` is
    treated as an abort, so collaborators need not share the class.
    """
    if exc is None:
        return False
    if isinstance(exc, OperationAborted):
        return True
    return getattr(exc, "code", None) == ABORT_ERROR_CODE


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. Abort kind (``OperationAborted`` or ``code == "ABORT_ERR"``).
        2. ``asyncio.CancelledError`` (task-level cancellation).
        3. Timeout exceptions or ``code == "timeout"``.
        4. Pydantic validation failures.
        5. ``UNKNOWN`` fallback.
    """
    if is_operation_aborted(exc):
        return ErrorCode.CANCELLED
    if isinstance(exc, asyncio.CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, TimeoutError) or getattr(exc, "code", None) == TIMEOUT_ERROR_CODE:
        return ErrorCode.TIMEOUT
    if isinstance(exc, ValidationError):
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception", "is_operation_aborted"]
