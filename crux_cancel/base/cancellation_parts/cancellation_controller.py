"""Owner of a single cancellation token."""

from __future__ import annotations

from typing import Optional

from .cancellation_token import CancellationToken


class CancellationController:
    """Exclusively owns one ``CancellationToken`` and exposes ``cancel()``."""

    def __init__(self) -> None:
        self._token = CancellationToken()

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    def cancel(self, reason: Optional[str] = None) -> None:
        """Cancel the token and notify its listeners (idempotent)."""
        self._token._cancel(reason)  # noqa: SLF001 - the controller owns the token


__all__ = ["CancellationController"]
