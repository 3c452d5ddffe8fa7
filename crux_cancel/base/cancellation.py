"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable cancellation constructs via the canonical
``crux_cancel.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts`` for organization.

Notes
-----
- ``CancellationToken`` is the observable flag; ``CancellationController``
  owns one and cancels it.
- ``compose`` derives a controller that also follows a parent token.
- ``OperationAborted`` is raised by operations that observe a cancellation.
"""

from .cancellation_parts.cancellation_controller import CancellationController
from .cancellation_parts.cancellation_token import CancellationToken
from .cancellation_parts.checkpoint import Checkpoint, bubble_abort, checkpoint
from .cancellation_parts.composed_controller import ComposedCancellationController, compose
from .cancellation_parts.subscription import Subscription
from .errors_parts.operation_aborted import OperationAborted

__all__ = [
    "CancellationController",
    "CancellationToken",
    "Checkpoint",
    "ComposedCancellationController",
    "OperationAborted",
    "Subscription",
    "bubble_abort",
    "checkpoint",
    "compose",
]
