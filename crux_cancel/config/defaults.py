"""crux_cancel.config.defaults
===========================

Central place for small, stable default values used across the crux_cancel
package. These defaults can be overridden via environment variables but
provide sensible fallbacks for local development and tests.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep the engine modules free of magic literals.

This module intentionally avoids importing from other crux_cancel modules to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Logging ----

# Name of the shared base logger; engine loggers are children of it.
BASE_LOGGER_NAME = "crux_cancel"
# Environment variable controlling the base logger level (DEBUG, INFO, ...).
LOG_LEVEL_ENV = "CRUX_CANCEL_LOG_LEVEL"
# Environment variable toggling JSON formatted log lines ("0" for plain text).
LOG_JSON_ENV = "CRUX_CANCEL_LOG_JSON"
# Plain text format used when JSON output is disabled.
PLAIN_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


# ---- Timeouts ----

# Process-wide deadline (seconds) applied when a caller passes no timeout.
# Unset means "no deadline"; an explicit timeout of 0 always disables it.
DEFAULT_TIMEOUT_ENV = "CRUX_CANCEL_DEFAULT_TIMEOUT_SECONDS"
DEFAULT_TIMEOUT_SECONDS = None


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LOG_JSON_ENV",
    "PLAIN_LOG_FORMAT",
    "DEFAULT_TIMEOUT_ENV",
    "DEFAULT_TIMEOUT_SECONDS",
]
