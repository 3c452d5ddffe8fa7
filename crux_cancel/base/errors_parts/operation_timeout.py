"""Deadline error type.

``OperationTimeout`` is raised by the timeout wrapper when its countdown
elapses before the wrapped command settles.
"""

from __future__ import annotations

TIMEOUT_ERROR_CODE = "timeout"


class OperationTimeout(TimeoutError):
    """Raised when a configured deadline elapsed without settlement.

    Attributes:
        timeout: The configured duration in seconds.
        code: Stable error kind (``"timeout"``).
    """

    code = TIMEOUT_ERROR_CODE

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Timeout [t={timeout}]")
        self.timeout = timeout


__all__ = ["OperationTimeout", "TIMEOUT_ERROR_CODE"]
