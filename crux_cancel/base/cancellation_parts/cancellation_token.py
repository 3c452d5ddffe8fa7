"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class: an observable flag that flips from
not-cancelled to cancelled exactly once and notifies its listeners at that
moment. Tokens are cancelled through the ``CancellationController`` that owns
them; the token itself only offers observation.
"""

from __future__ import annotations

from typing import Optional

from ..errors import OperationAborted
from ..logging import get_logger
from .state import Listener, State
from .subscription import Subscription

_LOGGER = get_logger("crux_cancel.cancellation")


class CancellationToken:
    """Observable cancellation flag shared between a controller and observers.

    Not thread-safe: all mutation is expected to happen on the event loop
    thread, where handler code runs to completion between awaits.
    """

    def __init__(self) -> None:
        self._state = State()

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    @property
    def listener_count(self) -> int:
        """Number of currently registered listeners."""
        return len(self._state.listeners)

    def add_listener(self, listener: Listener) -> Subscription:
        """Register ``listener`` to be called once on cancellation.

        Registering on an already-cancelled token is ignored and yields an
        inactive subscription; check ``cancelled`` first when an early
        cancellation matters.
        """
        if self._state.cancelled:
            return Subscription(None, listener)
        self._state.listeners[listener] = None
        return Subscription(self, listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister ``listener``; unknown listeners are ignored."""
        self._state.listeners.pop(listener, None)

    def has_listener(self, listener: Listener) -> bool:
        return listener in self._state.listeners

    def raise_if_cancelled(self) -> None:
        """Raise ``OperationAborted`` if the token is cancelled."""
        if self._state.cancelled:
            raise OperationAborted()

    def _cancel(self, reason: Optional[str] = None) -> bool:
        """Flip the flag and notify listeners; returns False if already cancelled.

        Listeners are snapshotted and the set cleared before any runs, so a
        listener may freely add or remove registrations on this token.
        """
        if self._state.cancelled:
            return False
        self._state.cancelled = True
        self._state.reason = reason
        listeners = list(self._state.listeners)
        self._state.listeners.clear()
        for listener in listeners:
            try:
                listener()
            except Exception:
                _LOGGER.exception("cancellation listener %r failed", listener)
        return True

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, listeners={len(self._state.listeners)})"
        )


__all__ = ["CancellationToken"]
