"""Cleanup-guaranteeing wrapper for callback-driven asynchronous work.

The command reports its outcome through callbacks instead of returning it and
hands back a cleanup action. The cleanup runs exactly once, after the outcome
is known, and completes before ``cleanup_promise`` returns or raises::

    def listen(resolve, reject, token, reset):
        server.on("message", resolve)
        server.on("error", reject)
        return lambda: server.remove_all_listeners()

    message = await cleanup_promise(listen, timeout=5.0)
"""

from __future__ import annotations

from typing import Awaitable, List, Optional, TypeVar

from ..cancellation_parts.cancellation_token import CancellationToken
from ..dto.options import TimeoutOptions
from ..log_support import LogContext
from .cleanup_run import CleanupCommand, CleanupRun
from .wrap_timeout import ResetTimeout, wrap_timeout

T = TypeVar("T")


async def cleanup_promise(
    command: CleanupCommand[T],
    options: Optional[TimeoutOptions] = None,
    *,
    timeout: Optional[float] = None,
    signal: Optional[CancellationToken] = None,
) -> T:
    """Run ``command(resolve, reject, token, reset)`` with a guaranteed cleanup.

    Args:
        command: Reports through ``resolve(result)`` / ``reject(error)`` (first
            call wins) and returns a cleanup callable, or an awaitable of one.
            The cleanup may itself return an awaitable.
        options: Pre-built :class:`TimeoutOptions`; keyword arguments win.
        timeout: Deadline in seconds, as for ``wrap_timeout``.
        signal: Optional external cancellation token.

    Raises:
        OperationAborted: ``signal`` was cancelled before the call (the command
            is never invoked) or before the command finished.
        OperationTimeout: The deadline elapsed first.
        Exception: The command's own error, or the cleanup's error when the
            command had succeeded.
    """
    opts = TimeoutOptions.resolve(options, timeout=timeout, signal=signal)
    ctx = LogContext.for_call("cleanup_promise", timeout=opts.timeout or None)
    runs: List[CleanupRun[T]] = []

    def guarded(token: Optional[CancellationToken], reset: ResetTimeout) -> Awaitable[T]:
        run: CleanupRun[T] = CleanupRun(command, token, reset, ctx)
        runs.append(run)
        return run.start()

    try:
        return await wrap_timeout(guarded, opts)
    finally:
        # the deadline or signal may win the race while an async cleanup is
        # still running; never hand control back before it completes
        for run in runs:
            await run.wait_cleaned()


__all__ = ["cleanup_promise"]
