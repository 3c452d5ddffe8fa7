"""Process-wide timeout configuration.

This module centralizes the default deadline applied by ``wrap_timeout`` and
``cleanup_promise`` when a caller passes no explicit ``timeout``. Values are
parsed from the environment on first use and cached; the cache refreshes when
the backing variables change so tests can adjust them at runtime.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing the normalized values.

get_timeout_config()
    Returns the process-cached configuration. Supported environment
    variables (all optional):
        CRUX_CANCEL_DEFAULT_TIMEOUT_SECONDS

Design Constraints
------------------
1. No hard-coded ad-hoc deadlines outside this module.
2. Avoid per-call env parsing (cache after first read).
3. An explicit ``timeout=0`` on a call always disables the deadline, even
   when a default is configured.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..config.defaults import DEFAULT_TIMEOUT_ENV, DEFAULT_TIMEOUT_SECONDS
from ..config.env import env_fingerprint, parse_env_float


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout settings.

    Attributes:
        default_timeout_seconds: Deadline applied when a call passes no
            timeout; ``None`` means no deadline.
    """

    default_timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = env_fingerprint(DEFAULT_TIMEOUT_ENV)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        default_timeout_seconds=parse_env_float(DEFAULT_TIMEOUT_ENV, DEFAULT_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


def reset_timeout_config_cache() -> None:
    """Drop the cached configuration so the next access re-reads the env."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    _CACHED = None
    _ENV_GUARD = None


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "reset_timeout_config_cache",
]
