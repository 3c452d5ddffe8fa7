"""Race, timeout and cleanup engine (public API facade).

Purpose
-------
Expose the composition engine via the canonical ``crux_cancel.base.abort``
import path while the implementations live under ``abort_parts``.

Each layer builds on the previous one:

- ``race_with_cancellation`` races caller-built operations and cancels the
  token they share once the race is decided.
- ``wrap_timeout`` adds a resettable deadline as a second contender.
- ``cleanup_promise`` runs callback-style commands under ``wrap_timeout`` and
  guarantees their cleanup action completes before the caller resumes.
"""

from .abort_parts.cleanup_promise import cleanup_promise
from .abort_parts.cleanup_run import Cleanup, CleanupCommand
from .abort_parts.finish_record import FinishRecord
from .abort_parts.race import race_with_cancellation
from .abort_parts.run_phase import RunPhase
from .abort_parts.wrap_timeout import ResetTimeout, TimeoutCommand, wrap_timeout
from .errors_parts.operation_timeout import OperationTimeout

__all__ = [
    "Cleanup",
    "CleanupCommand",
    "FinishRecord",
    "OperationTimeout",
    "ResetTimeout",
    "RunPhase",
    "TimeoutCommand",
    "cleanup_promise",
    "race_with_cancellation",
    "wrap_timeout",
]
