"""Small asyncio future helpers used by the race and cleanup engines.

``to_future`` normalises anything a caller may hand to a race (coroutines,
tasks, futures, other awaitables or plain values) into an ``asyncio.Future``.
``ExtFuture`` is a future settled from the outside through ``resolve`` /
``reject`` or a node-style ``cb(error, data)`` callback; settling a future
that is already done is a no-op, so callers need not guard double settlement.
"""
from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

T = TypeVar("T")


def to_future(
    value: Union[Awaitable[T], T], *, loop: Optional[asyncio.AbstractEventLoop] = None
) -> "asyncio.Future[T]":
    """Return ``value`` as a future bound to the running (or given) loop.

    Futures and tasks pass through unchanged, other awaitables are scheduled
    with :func:`asyncio.ensure_future`, and plain values become an already
    completed future.
    """
    if asyncio.isfuture(value):
        return value  # type: ignore[return-value]
    if inspect.isawaitable(value):
        return asyncio.ensure_future(value, loop=loop)
    loop = loop or asyncio.get_running_loop()
    fut: "asyncio.Future[T]" = loop.create_future()
    fut.set_result(value)  # type: ignore[arg-type]
    return fut


class ExtFuture(asyncio.Future):
    """Future with ``resolve``/``reject`` methods on the instance.

    Usage::

        fut = ext_future()
        loop.call_later(0.5, fut.resolve, "result")
        await fut

        fut = ext_future()
        legacy_api(callback=fut.cb)  # cb(error, data)
        await fut
    """

    def resolve(self, value: Any = None) -> None:
        """Complete with ``value`` unless already done."""
        if not self.done():
            self.set_result(value)

    def reject(self, error: BaseException) -> None:
        """Fail with ``error`` unless already done."""
        if not self.done():
            self.set_exception(error)

    @property
    def cb(self) -> Callable[..., None]:
        """Node-style callback: ``cb(error)`` rejects, ``cb(None, data)`` resolves."""

        def callback(error: Optional[BaseException], data: Any = None) -> None:
            if error is None:
                self.resolve(data)
            else:
                self.reject(error)

        return callback


def ext_future(*, loop: Optional[asyncio.AbstractEventLoop] = None) -> ExtFuture:
    """Create an :class:`ExtFuture` on the running (or given) loop."""
    return ExtFuture(loop=loop or asyncio.get_running_loop())


__all__ = ["ExtFuture", "ext_future", "to_future"]
