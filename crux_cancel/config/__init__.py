"""Configuration layer for crux_cancel.

Sources are merged in a predictable order:
    1. Built-in defaults (``config.defaults``)
    2. Environment variables (``CRUX_CANCEL_*``)
    3. Per-call options passed to the public operations

Public API
----------
* parse_env_float(name, default) -> float | None
* parse_env_bool(name, default) -> bool
* env_fingerprint(*names) -> str
"""
from __future__ import annotations

from .env import env_fingerprint, parse_env_bool, parse_env_float

__all__ = ["parse_env_float", "parse_env_bool", "env_fingerprint"]
