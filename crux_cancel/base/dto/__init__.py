"""Option DTOs for the public operations."""

from .options import AbortOptions, TimeoutOptions

__all__ = ["AbortOptions", "TimeoutOptions"]
