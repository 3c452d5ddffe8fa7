"""Resettable deadline bound to one composed token."""

from __future__ import annotations

import asyncio
from typing import Optional

from ..cancellation_parts.cancellation_token import CancellationToken
from ..errors import OperationTimeout
from ..logging import get_logger, normalized_log_event
from ..utils.futures import ExtFuture, ext_future

_LOGGER = get_logger("crux_cancel.timeout")


class Countdown:
    """Single live timer whose expiry fails ``expired`` with ``OperationTimeout``.

    ``reset()`` replaces the pending timer with a fresh one of the configured
    duration. Once ``token`` is cancelled, or the timer fired, the countdown is
    inert: the pending timer is dropped and ``reset()`` does nothing.
    """

    def __init__(self, timeout: float, token: CancellationToken) -> None:
        self._timeout = timeout
        self._loop = asyncio.get_running_loop()
        self._handle: Optional[asyncio.TimerHandle] = None
        self._active = True
        self.expired: ExtFuture = ext_future(loop=self._loop)
        self._subscription = token.add_listener(self._clear)
        self.reset()

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def active(self) -> bool:
        return self._active

    def reset(self) -> None:
        """Restart the deadline; a no-op once the countdown is inert."""
        if not self._active:
            return
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self._loop.call_later(self._timeout, self._expire)

    def _expire(self) -> None:
        self._handle = None
        normalized_log_event(
            _LOGGER, "timeout.expired", phase="timeout", outcome="expired", timeout=self._timeout
        )
        self.expired.reject(OperationTimeout(self._timeout))
        self._clear()

    def _clear(self) -> None:
        self._active = False
        self._subscription.close()
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


__all__ = ["Countdown"]
