"""
Cancellation Base Package

Exports the cancellation primitives and the race / timeout / cleanup engine:
- Cancellation: tokens, controllers, composition and synchronous checks
- Abort engine: race_with_cancellation, wrap_timeout, cleanup_promise
- Errors: OperationAborted, OperationTimeout and the ErrorCode taxonomy
- Options and configuration: TimeoutOptions, TimeoutConfig
"""

from .abort import (
    FinishRecord,
    RunPhase,
    cleanup_promise,
    race_with_cancellation,
    wrap_timeout,
)
from .cancellation import (
    CancellationController,
    CancellationToken,
    ComposedCancellationController,
    Subscription,
    bubble_abort,
    checkpoint,
    compose,
)
from .dto import AbortOptions, TimeoutOptions
from .errors import (
    ErrorCode,
    OperationAborted,
    OperationTimeout,
    classify_exception,
    is_operation_aborted,
)
from .timeouts import TimeoutConfig, get_timeout_config, reset_timeout_config_cache
from .utils import ExtFuture, ext_future, to_future

__all__ = [
    # Cancellation
    "CancellationController",
    "CancellationToken",
    "ComposedCancellationController",
    "Subscription",
    "bubble_abort",
    "checkpoint",
    "compose",
    # Engine
    "FinishRecord",
    "RunPhase",
    "cleanup_promise",
    "race_with_cancellation",
    "wrap_timeout",
    # Errors
    "ErrorCode",
    "OperationAborted",
    "OperationTimeout",
    "classify_exception",
    "is_operation_aborted",
    # Options / config
    "AbortOptions",
    "TimeoutOptions",
    "TimeoutConfig",
    "get_timeout_config",
    "reset_timeout_config_cache",
    # Futures
    "ExtFuture",
    "ext_future",
    "to_future",
]
