"""Utility helpers shared by the engine modules."""

from .futures import ExtFuture, ext_future, to_future

__all__ = ["ExtFuture", "ext_future", "to_future"]
