"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``crux_cancel.base.errors_parts`` to maintain a stable import path while
enforcing the one-class-per-file governance rule.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.operation_aborted import OperationAborted
from .errors_parts.operation_timeout import OperationTimeout
from .errors_parts.classification import classify_exception, is_operation_aborted

__all__ = [
    "ErrorCode",
    "OperationAborted",
    "OperationTimeout",
    "classify_exception",
    "is_operation_aborted",
]
