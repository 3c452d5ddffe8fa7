"""Lifecycle phases of one ``cleanup_promise`` invocation."""

from __future__ import annotations

from enum import Enum


class RunPhase(str, Enum):
    """``RUNNING -> LATCHED -> CLEANING -> SETTLED``.

    A run may skip ``LATCHED`` when the cleanup is already known at the
    moment the outcome is latched.
    """

    RUNNING = "running"
    LATCHED = "latched"
    CLEANING = "cleaning"
    SETTLED = "settled"


__all__ = ["RunPhase"]
