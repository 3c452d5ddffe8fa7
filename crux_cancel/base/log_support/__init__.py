"""Auxiliary logging helpers (formatters, context) used by base.logging."""

from .json_formatter import JsonFormatter, ISO
from .logging_context import LogContext, next_call_id

__all__ = ["JsonFormatter", "ISO", "LogContext", "next_call_id"]
