"""crux_cancel package

Composable cancellation and timeout primitives for asyncio code.

Purpose:
    Let callers derive child cancellation tokens from a parent, race a set of
    cancellable operations against an external cancellation and a resettable
    deadline, and wrap callback-driven work so its cleanup action runs exactly
    once before the caller resumes.

Public API (re-exported):
    - Version: ``__version__``
    - Cancellation: :class:`CancellationController`,
      :class:`CancellationToken`, :func:`compose`, :func:`bubble_abort`,
      :func:`checkpoint`
    - Engine: :func:`race_with_cancellation`, :func:`wrap_timeout`,
      :func:`cleanup_promise`
    - Exceptions: :class:`OperationAborted`, :class:`OperationTimeout`,
      :class:`ErrorCode`
    - Options: :class:`TimeoutOptions`
"""

from .base.abort import cleanup_promise, race_with_cancellation, wrap_timeout
from .base.cancellation import (
    CancellationController,
    CancellationToken,
    Subscription,
    bubble_abort,
    checkpoint,
    compose,
)
from .base.dto import AbortOptions, TimeoutOptions
from .base.errors import ErrorCode, OperationAborted, OperationTimeout, is_operation_aborted
from .base.logging import configure_logger

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Cancellation
    "CancellationController",
    "CancellationToken",
    "Subscription",
    "bubble_abort",
    "checkpoint",
    "compose",
    # Engine
    "cleanup_promise",
    "race_with_cancellation",
    "wrap_timeout",
    # Exceptions
    "ErrorCode",
    "OperationAborted",
    "OperationTimeout",
    "is_operation_aborted",
    # Options / logging
    "AbortOptions",
    "TimeoutOptions",
    "configure_logger",
]
