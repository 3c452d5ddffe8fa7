"""Typed option objects accepted by the timeout-aware operations.

Purpose
-------
Provide small DTOs capturing the ``{signal?, timeout?}`` options accepted
uniformly by ``wrap_timeout`` and ``cleanup_promise`` (and the ``signal``
accepted by ``race_with_cancellation``).

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation. The token field is an arbitrary
  type and is stored by reference, never copied.

Failure modes & side effects
----------------------------
- Pure data containers. ``pydantic.ValidationError`` is raised for a negative
  timeout or a ``signal`` that is not a ``CancellationToken``.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..cancellation_parts.cancellation_token import CancellationToken
from ..timeouts import get_timeout_config


class AbortOptions(BaseModel):
    """Options carrying an optional external cancellation token."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    signal: Optional[CancellationToken] = None


class TimeoutOptions(AbortOptions):
    """Options for timeout-aware operations.

    Attributes
    ----------
    signal:
        Optional token that cancels the operation from the outside.
    timeout:
        Deadline in seconds. ``None`` defers to the configured default
        (see :func:`crux_cancel.base.timeouts.get_timeout_config`); ``0``
        disables the deadline.
    """

    timeout: Optional[float] = Field(default=None, ge=0)

    @classmethod
    def resolve(
        cls,
        options: "TimeoutOptions | None" = None,
        *,
        timeout: float | None = None,
        signal: CancellationToken | None = None,
    ) -> "TimeoutOptions":
        """Merge ``options`` with keyword overrides and apply config defaults.

        Keyword values that are not ``None`` win over the fields of
        ``options``.
        """
        base = options if options is not None else cls()
        merged_timeout = timeout if timeout is not None else base.timeout
        merged_signal = signal if signal is not None else base.signal
        if merged_timeout is None:
            merged_timeout = get_timeout_config().default_timeout_seconds
        return cls(timeout=merged_timeout, signal=merged_signal)

    @property
    def has_deadline(self) -> bool:
        """Whether a non-zero deadline applies."""
        return bool(self.timeout)


__all__ = ["AbortOptions", "TimeoutOptions"]
