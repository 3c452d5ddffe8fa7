"""Outcome latched by a cleanup-guarded command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class FinishRecord:
    """Either a result or an error; ``error`` set means the command failed."""

    result: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def of_result(cls, result: Any) -> "FinishRecord":
        return cls(result=result)

    @classmethod
    def of_error(cls, error: BaseException) -> "FinishRecord":
        return cls(error=error)

    @property
    def failed(self) -> bool:
        return self.error is not None


__all__ = ["FinishRecord"]
