"""Race a caller-built set of operations against an optional input token.

Similar to ``asyncio.wait(..., return_when=FIRST_COMPLETED)`` but every
operation receives a composed token that is cancelled as soon as the race is
over, so losing operations learn they may stop::

    result = await race_with_cancellation(
        lambda token: [fetch(url, token), fallback(token)],
        signal,
    )

Losing operations are never force-cancelled; their late outcomes are
consumed and logged at DEBUG.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

from ..cancellation_parts.cancellation_token import CancellationToken
from ..cancellation_parts.composed_controller import compose
from ..errors import OperationAborted
from ..log_support import LogContext
from ..logging import get_logger, normalized_log_event
from ..utils.futures import ExtFuture, ext_future, to_future

T = TypeVar("T")

Build = Callable[[CancellationToken], Iterable[Awaitable[T]]]

_LOGGER = get_logger("crux_cancel.race")


def _abort_contender(input_token: CancellationToken, composed: CancellationToken) -> ExtFuture:
    """Future failing with ``OperationAborted`` once ``input_token`` cancels.

    Both subscriptions are released when the composed token cancels, so a
    race that ends for another reason leaves no listener on ``input_token``.
    """
    fut = ext_future()

    def on_abort() -> None:
        release()
        fut.reject(OperationAborted())

    def release() -> None:
        input_subscription.close()
        composed_subscription.close()

    input_subscription = input_token.add_listener(on_abort)
    composed_subscription = composed.add_listener(release)
    return fut


def _consume_late_outcome(fut: "asyncio.Future[object]") -> None:
    if fut.cancelled():
        return
    exc = fut.exception()
    if exc is not None:
        normalized_log_event(
            _LOGGER, "race.loser_failed", phase="race", outcome="ignored", error=exc
        )


def _release_losers(contenders: List["asyncio.Future[T]"], winner: Optional["asyncio.Future[T]"]) -> None:
    for fut in contenders:
        if fut is not winner:
            fut.add_done_callback(_consume_late_outcome)


async def race_with_cancellation(build: Build[T], token: Optional[CancellationToken] = None) -> T:
    """Return the outcome of the first operation built by ``build`` to settle.

    Args:
        build: Receives the composed token and returns the operations to race
            (coroutines, tasks, futures or other awaitables).
        token: Optional input token; its cancellation fails the race with
            ``OperationAborted`` and cancels the composed token.

    Raises:
        OperationAborted: ``token`` is already cancelled (``build`` is not
            called) or is cancelled before any operation settles.
        ValueError: ``build`` returned no operations and no ``token`` was given,
            so the race could never settle.
    """
    controller = compose(token)
    ctx = LogContext.for_call("race")
    contenders: List["asyncio.Future[T]"] = []
    winner: Optional["asyncio.Future[T]"] = None
    try:
        contenders.extend(to_future(op) for op in build(controller.token))
        if token is not None:
            contenders.append(_abort_contender(token, controller.token))
        if not contenders:
            raise ValueError("race_with_cancellation: build returned no operations")
        done, _ = await asyncio.wait(contenders, return_when=asyncio.FIRST_COMPLETED)
        # ties go to the earliest contender in build order
        winner = next(fut for fut in contenders if fut in done)
    finally:
        controller.cancel()
        _release_losers(contenders, winner)

    if winner.cancelled():
        normalized_log_event(_LOGGER, "race.settled", ctx, phase="race", outcome="cancelled")
    else:
        exc = winner.exception()
        normalized_log_event(
            _LOGGER,
            "race.settled",
            ctx,
            phase="race",
            outcome="rejected" if exc is not None else "resolved",
            error=exc,
            contenders=len(contenders),
        )
    return winner.result()


__all__ = ["Build", "race_with_cancellation"]
