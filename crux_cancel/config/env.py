"""crux_cancel.config.env
======================

Small helpers for reading typed values from environment variables.

Failure Modes
-------------
- Helpers never raise on unset or malformed variables; they return the
  supplied default so callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Optional

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def parse_env_float(name: str, default: Optional[float]) -> Optional[float]:
    """Parse an environment variable as a float with a fallback default.

    Returns the default if the variable is unset, not a valid float, or not
    positive.

    Args:
        name: The name of the environment variable to read.
        default: The fallback value to use if parsing fails.

    Returns:
        The parsed float value from the environment variable, or the provided default.
    """
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:
        return default


def parse_env_bool(name: str, default: bool) -> bool:
    """Parse an environment variable as a boolean flag.

    Accepts ``1/0``, ``true/false``, ``yes/no`` and ``on/off``
    case-insensitively; anything else yields ``default``.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def env_fingerprint(*names: str) -> str:
    """Return a string capturing the current raw values of ``names``.

    Used by cached configuration loaders to notice runtime overrides.
    """
    return "/".join(os.getenv(name, "") for name in names)


__all__ = ["parse_env_float", "parse_env_bool", "env_fingerprint"]
