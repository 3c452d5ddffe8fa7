"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_cancel.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .operation_aborted import OperationAborted
from .operation_timeout import OperationTimeout
from .classification import classify_exception, is_operation_aborted

__all__ = [
    "ErrorCode",
    "OperationAborted",
    "OperationTimeout",
    "classify_exception",
    "is_operation_aborted",
]
