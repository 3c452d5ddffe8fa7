"""Pytest configuration for the crux_cancel test suite.

Keeps environment-driven configuration isolated per test and offers a
fixture capturing records emitted through the shared ``crux_cancel`` logger.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from crux_cancel.base.logging import configure_logger, get_logger
from crux_cancel.base.timeouts import reset_timeout_config_cache
from crux_cancel.config.defaults import DEFAULT_TIMEOUT_ENV, LOG_LEVEL_ENV


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture(autouse=True)
def isolated_timeout_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test without a configured default deadline."""

    monkeypatch.delenv(DEFAULT_TIMEOUT_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    reset_timeout_config_cache()
    yield
    reset_timeout_config_cache()


@pytest.fixture()
def log_records() -> Iterator[List[logging.LogRecord]]:
    """Collect every record reaching the base logger, DEBUG included."""

    base_logger = get_logger()
    previous_level = base_logger.level
    handler = _ListHandler()
    base_logger.addHandler(handler)
    configure_logger(level=logging.DEBUG)
    yield handler.records
    base_logger.removeHandler(handler)
    configure_logger(level=previous_level)
