"""One-class-per-file parts for cooperative cancellation."""

from .cancellation_controller import CancellationController
from .cancellation_token import CancellationToken
from .checkpoint import Checkpoint, bubble_abort, checkpoint
from .composed_controller import ComposedCancellationController, compose
from .subscription import Subscription

__all__ = [
    "CancellationController",
    "CancellationToken",
    "Checkpoint",
    "ComposedCancellationController",
    "Subscription",
    "bubble_abort",
    "checkpoint",
    "compose",
]
