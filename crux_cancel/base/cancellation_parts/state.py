"""Internal state holder for cancellation tokens.

Dataclass used by ``CancellationToken`` to track cancellation status, the
optional reason and the registered listeners. Module scoped to keep the token
class focused and to comply with the one-class-per-file policy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

Listener = Callable[[], None]


@dataclass
class State:
    """Internal state for cooperative cancellation tokens.

    ``listeners`` is an insertion-ordered dict used as a set so each listener
    reference is registered at most once.
    """

    cancelled: bool = False
    reason: Optional[str] = None
    listeners: Dict[Listener, None] = field(default_factory=dict)


__all__ = ["State", "Listener"]
