"""Structured logging context object.

This module defines :class:`LogContext`, a dataclass used to carry common
fields for engine logging events (operation name, call id and extra metadata).
It offers a ``to_dict`` helper that merges the ``extra`` mapping and prunes
``None`` values for clean structured output.
"""
from __future__ import annotations

import itertools
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

_CALL_IDS = itertools.count(1)


def next_call_id() -> int:
    """Return a process-unique, monotonically increasing call id."""
    return next(_CALL_IDS)


@dataclass
class LogContext:
    """Structured context for engine logging events."""

    operation: Optional[str] = None
    call_id: Optional[int] = None
    timeout: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_call(cls, operation: str, *, timeout: Optional[float] = None) -> "LogContext":
        """Build a context with a freshly allocated call id."""
        return cls(operation=operation, call_id=next_call_id(), timeout=timeout)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext", "next_call_id"]
