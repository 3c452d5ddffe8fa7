"""Synchronous cancellation checks.

``bubble_abort(token)`` raises when a token is already cancelled.
``checkpoint(token)`` returns a passthrough callable that raises once the token
is cancelled; the callable is memoised per token so creating it inside loops
is cheap::

    async def long_running(token):
        cp = checkpoint(token)
        async for chunk in source():
            result += cp(chunk)  # raises OperationAborted once cancelled
"""

from __future__ import annotations

import weakref
from typing import Optional, Protocol, TypeVar, overload

from ..errors import OperationAborted
from .cancellation_token import CancellationToken

T = TypeVar("T")


class Checkpoint(Protocol):  # pragma: no cover - structural protocol
    @overload
    def __call__(self) -> None: ...

    @overload
    def __call__(self, value: T) -> T: ...


# Entries drop with their token; checkpoints reference the token weakly so
# the cached value never keeps its own key alive.
_CHECKPOINTS: "weakref.WeakKeyDictionary[CancellationToken, Checkpoint]" = weakref.WeakKeyDictionary()


def bubble_abort(token: Optional[CancellationToken] = None) -> None:
    """Raise ``OperationAborted`` if ``token`` is given and cancelled."""
    if token is not None and token.cancelled:
        raise OperationAborted()


def _passthrough(value=None):
    return value


def checkpoint(token: Optional[CancellationToken] = None) -> Checkpoint:
    """Return the memoised checkpoint callable for ``token``.

    Without a token a shared passthrough is returned.
    """
    if token is None:
        return _passthrough
    cp = _CHECKPOINTS.get(token)
    if cp is None:
        token_ref = weakref.ref(token)

        def cp(value=None):
            observed = token_ref()
            if observed is not None and observed.cancelled:
                raise OperationAborted()
            return value

        _CHECKPOINTS[token] = cp
    return cp


__all__ = ["Checkpoint", "bubble_abort", "checkpoint"]
