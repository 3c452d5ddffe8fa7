"""State machine behind ``cleanup_promise``.

A ``CleanupRun`` invokes the user command with ``resolve``/``reject``
callbacks, the call token and the reset function. The command hands back a
cleanup action (directly or through an awaitable). The first
``resolve``/``reject`` (or a cancellation of the token) latches a
:class:`FinishRecord`; as soon as both the record and the cleanup are known,
the cleanup runs exactly once and the outcome settles:

- a primary error always wins, even over a failing cleanup;
- otherwise a cleanup error fails the call;
- otherwise the latched result is returned.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

from ..cancellation_parts.cancellation_token import CancellationToken
from ..cancellation_parts.subscription import Subscription
from ..errors import OperationAborted
from ..log_support import LogContext
from ..logging import get_logger, normalized_log_event
from ..utils.futures import ext_future, to_future
from .finish_record import FinishRecord
from .run_phase import RunPhase
from .wrap_timeout import ResetTimeout

T = TypeVar("T")

Cleanup = Callable[[], Union[None, Awaitable[None]]]
Resolve = Callable[[T], None]
Reject = Callable[[BaseException], None]
CleanupCommand = Callable[
    [Resolve[T], Reject, Optional[CancellationToken], ResetTimeout],
    Union[Cleanup, Awaitable[Cleanup]],
]

_LOGGER = get_logger("crux_cancel.cleanup")


class CleanupRun(Generic[T]):
    """One invocation of a cleanup-guarded command."""

    def __init__(
        self,
        command: CleanupCommand[T],
        token: Optional[CancellationToken],
        reset: ResetTimeout,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._command = command
        self._token = token
        self._reset = reset
        self._ctx = ctx
        self._loop = asyncio.get_running_loop()
        self._outcome = ext_future(loop=self._loop)
        self._cleaned: "asyncio.Future[None]" = self._loop.create_future()
        self._phase = RunPhase.RUNNING
        self._finish: Optional[FinishRecord] = None
        self._cleanup: Optional[Cleanup] = None
        self._abort_subscription: Optional[Subscription] = None
        self.cleanup_error: Optional[BaseException] = None

    @property
    def phase(self) -> RunPhase:
        return self._phase

    @property
    def finish(self) -> Optional[FinishRecord]:
        return self._finish

    # -------------------------- command callbacks -------------------------- #
    def resolve(self, result: Any = None) -> None:
        self._latch(FinishRecord.of_result(result))

    def reject(self, error: BaseException) -> None:
        if not isinstance(error, BaseException):
            raise TypeError(f"reject() expects an exception instance, got {type(error).__name__}")
        self._latch(FinishRecord.of_error(error))

    # -------------------------- lifecycle -------------------------- #
    def start(self) -> Awaitable[T]:
        """Invoke the command now and return the awaitable outcome.

        A synchronous raise from the command propagates to the caller
        immediately; no cleanup is attempted since none was handed over.
        """
        produced = self._command(self.resolve, self.reject, self._token, self._reset)
        if not inspect.isawaitable(produced):
            self._arm(produced)
        return self._complete(produced)

    async def _complete(self, produced: Union[Cleanup, Awaitable[Cleanup]]) -> T:
        if inspect.isawaitable(produced):
            self._arm(await produced)
        try:
            return await self._outcome
        except asyncio.CancelledError:
            # the awaiting task itself was cancelled: treat as an abort so
            # the cleanup still runs
            self._latch(FinishRecord.of_error(OperationAborted()))
            raise

    async def wait_cleaned(self) -> None:
        """Wait for an in-flight cleanup to finish; returns at once otherwise."""
        if self._phase is RunPhase.CLEANING:
            await asyncio.shield(self._cleaned)

    def _arm(self, cleanup: Cleanup) -> None:
        if not callable(cleanup):
            raise TypeError(
                f"cleanup_promise command must return a cleanup callable, got {type(cleanup).__name__}"
            )
        self._cleanup = cleanup
        if self._token is not None and self._token.cancelled and self._finish is None:
            self._finish = FinishRecord.of_error(OperationAborted())
        if self._finish is not None:
            self._run_cleanup()
            return
        if self._token is not None:
            self._abort_subscription = self._token.add_listener(self._on_abort)

    def _on_abort(self) -> None:
        self._latch(FinishRecord.of_error(OperationAborted()))

    def _latch(self, record: FinishRecord) -> None:
        if self._finish is not None:
            return
        self._finish = record
        if self._cleanup is None:
            self._phase = RunPhase.LATCHED
            return
        self._run_cleanup()

    def _run_cleanup(self) -> None:
        if self._phase in (RunPhase.CLEANING, RunPhase.SETTLED):
            return
        self._phase = RunPhase.CLEANING
        if self._abort_subscription is not None:
            self._abort_subscription.close()
            self._abort_subscription = None
        try:
            pending = self._cleanup()
        except (Exception, asyncio.CancelledError) as exc:
            self._settle(exc)
            return
        if inspect.isawaitable(pending):
            to_future(pending, loop=self._loop).add_done_callback(self._cleanup_done)
            return
        self._settle(None)

    def _cleanup_done(self, fut: "asyncio.Future[None]") -> None:
        self._settle(asyncio.CancelledError() if fut.cancelled() else fut.exception())

    def _settle(self, cleanup_error: Optional[BaseException]) -> None:
        self._phase = RunPhase.SETTLED
        self.cleanup_error = cleanup_error
        finish = self._finish
        if finish.failed:
            self._outcome.reject(finish.error)
        elif cleanup_error is not None:
            self._outcome.reject(cleanup_error)
        else:
            self._outcome.resolve(finish.result)
        if not self._cleaned.done():
            self._cleaned.set_result(None)
        normalized_log_event(
            _LOGGER,
            "cleanup.settled",
            self._ctx,
            phase="cleanup",
            outcome="rejected" if finish.failed or cleanup_error is not None else "resolved",
            error=finish.error or cleanup_error,
            cleanup_failed=cleanup_error is not None,
        )


__all__ = [
    "Cleanup",
    "CleanupCommand",
    "CleanupRun",
    "Reject",
    "Resolve",
]
