"""Timeout wrapper built on ``race_with_cancellation``.

The wrapped command receives a token that is cancelled when the deadline
passes (or the input signal cancels) and a ``reset`` callable that restarts
the deadline, letting long operations prove liveness::

    async def download(token, reset):
        async for chunk in stream(token):
            reset()
            ...

    await wrap_timeout(download, timeout=5.0, signal=parent_token)

Without a deadline the command runs directly with the input signal (which
may be ``None``) and a no-op reset; no token is composed.
"""

from __future__ import annotations

from typing import Awaitable, Callable, List, Optional, TypeVar

from ..cancellation_parts.cancellation_token import CancellationToken
from ..cancellation_parts.checkpoint import bubble_abort
from ..dto.options import TimeoutOptions
from .countdown import Countdown
from .race import race_with_cancellation

T = TypeVar("T")

ResetTimeout = Callable[[], None]
TimeoutCommand = Callable[[Optional[CancellationToken], ResetTimeout], Awaitable[T]]


def _noop() -> None:
    return None


async def wrap_timeout(
    command: TimeoutCommand[T],
    options: Optional[TimeoutOptions] = None,
    *,
    timeout: Optional[float] = None,
    signal: Optional[CancellationToken] = None,
) -> T:
    """Run ``command`` under an optional resettable deadline and input signal.

    Args:
        command: ``command(token, reset)`` returning an awaitable.
        options: Pre-built :class:`TimeoutOptions`; keyword arguments win.
        timeout: Deadline in seconds; ``0`` disables it, ``None`` defers to
            the configured default.
        signal: Optional external cancellation token.

    Raises:
        OperationTimeout: The deadline elapsed first (``.timeout`` holds it).
        OperationAborted: ``signal`` was cancelled before or during the call.
    """
    opts = TimeoutOptions.resolve(options, timeout=timeout, signal=signal)
    if not opts.has_deadline:
        bubble_abort(opts.signal)
        return await command(opts.signal, _noop)

    deadline = opts.timeout

    def build(token: CancellationToken) -> List[Awaitable[T]]:
        countdown = Countdown(deadline, token)
        return [command(token, countdown.reset), countdown.expired]

    return await race_with_cancellation(build, opts.signal)


__all__ = ["ResetTimeout", "TimeoutCommand", "wrap_timeout"]
