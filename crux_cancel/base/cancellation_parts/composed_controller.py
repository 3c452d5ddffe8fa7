"""Controller whose token also follows an optional parent token.

``compose(parent)`` is the entry point. The composed token is cancelled when
its own ``cancel()`` runs or when the parent is cancelled; cancelling the
composed controller never reaches the parent. The parent subscription is
dropped at the first cancellation of either side, so long-lived parents do
not accumulate listeners from many short-lived children.
"""

from __future__ import annotations

from typing import Optional

from ..errors import OperationAborted
from ..logging import get_logger, normalized_log_event
from .cancellation_controller import CancellationController
from .cancellation_token import CancellationToken
from .subscription import Subscription

_LOGGER = get_logger("crux_cancel.compose")


class ComposedCancellationController(CancellationController):
    """Cancellation controller linked to an optional parent token.

    Raises:
        OperationAborted: if ``parent`` is already cancelled. The failure is
            synchronous so dependent work is never started.
    """

    def __init__(self, parent: Optional[CancellationToken] = None) -> None:
        super().__init__()
        self._parent_subscription: Optional[Subscription] = None
        if parent is None:
            return
        if parent.cancelled:
            normalized_log_event(_LOGGER, "compose.rejected", phase="compose", outcome="aborted")
            raise OperationAborted()
        self._parent_subscription = parent.add_listener(self._parent_cancelled)
        self.token.add_listener(self._release_parent)

    @property
    def parent(self) -> Optional[CancellationToken]:
        """Parent token while still subscribed, else ``None``."""
        if self._parent_subscription is None:
            return None
        return self._parent_subscription.token

    def _parent_cancelled(self) -> None:
        parent = self.parent
        self.cancel(parent.reason if parent is not None else None)

    def _release_parent(self) -> None:
        if self._parent_subscription is not None:
            self._parent_subscription.close()


def compose(parent: Optional[CancellationToken] = None) -> ComposedCancellationController:
    """Create a controller cancelled by its own ``cancel()`` or by ``parent``.

    Usage::

        main = CancellationController()
        composed = compose(main.token)

        main.cancel()      # cancels both main and composed
        composed.cancel()  # cancels only composed

    Raises:
        OperationAborted: if ``parent`` is already cancelled.
    """
    return ComposedCancellationController(parent)


__all__ = ["ComposedCancellationController", "compose"]
