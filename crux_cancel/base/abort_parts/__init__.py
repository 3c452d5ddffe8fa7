"""One-class-per-file parts for the race / timeout / cleanup engine."""

from .cleanup_promise import cleanup_promise
from .cleanup_run import Cleanup, CleanupCommand, CleanupRun
from .countdown import Countdown
from .finish_record import FinishRecord
from .race import race_with_cancellation
from .run_phase import RunPhase
from .wrap_timeout import ResetTimeout, TimeoutCommand, wrap_timeout

__all__ = [
    "Cleanup",
    "CleanupCommand",
    "CleanupRun",
    "Countdown",
    "FinishRecord",
    "ResetTimeout",
    "RunPhase",
    "TimeoutCommand",
    "cleanup_promise",
    "race_with_cancellation",
    "wrap_timeout",
]
