"""Unsubscribe handle returned by ``CancellationToken.add_listener``."""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Optional

from .state import Listener

if TYPE_CHECKING:
    from .cancellation_token import CancellationToken


class Subscription:
    """Registration of one listener on one token.

    The handle keeps only a weak reference to the token, so holding a
    subscription never keeps a token alive. ``close()`` is idempotent and the
    handle doubles as a context manager that closes on exit.
    """

    def __init__(self, token: Optional["CancellationToken"], listener: Listener) -> None:
        self._token_ref = weakref.ref(token) if token is not None else None
        self._listener = listener

    @property
    def token(self) -> Optional["CancellationToken"]:
        """The subscribed token, or ``None`` once closed or collected."""
        return self._token_ref() if self._token_ref is not None else None

    @property
    def active(self) -> bool:
        """Whether the listener is still registered on the token."""
        token = self.token
        return token is not None and token.has_listener(self._listener)

    def close(self) -> None:
        """Remove the listener from the token (safe to call repeatedly)."""
        token = self.token
        self._token_ref = None
        if token is not None:
            token.remove_listener(self._listener)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"Subscription(active={self.active}, listener={self._listener!r})"


__all__ = ["Subscription"]
