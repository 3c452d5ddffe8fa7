"""Tests for environment-driven timeout configuration and option merging."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from crux_cancel.base.cancellation import CancellationController
from crux_cancel.base.dto import AbortOptions, TimeoutOptions
from crux_cancel.base.timeouts import get_timeout_config, reset_timeout_config_cache
from crux_cancel.config.defaults import DEFAULT_TIMEOUT_ENV
from crux_cancel.config.env import env_fingerprint, parse_env_bool, parse_env_float


def test_default_config_has_no_deadline():
    cfg = get_timeout_config()
    assert cfg.default_timeout_seconds is None  # nosec B101
    assert get_timeout_config() is cfg  # nosec B101 - cached


def test_config_refreshes_when_env_changes(monkeypatch):
    first = get_timeout_config()
    monkeypatch.setenv(DEFAULT_TIMEOUT_ENV, "2.5")
    second = get_timeout_config()
    assert second is not first  # nosec B101
    assert second.default_timeout_seconds == 2.5  # nosec B101


@pytest.mark.parametrize("raw", ["", "abc", "0", "-3"])
def test_invalid_env_values_fall_back(monkeypatch, raw):
    monkeypatch.setenv(DEFAULT_TIMEOUT_ENV, raw)
    reset_timeout_config_cache()
    assert get_timeout_config().default_timeout_seconds is None  # nosec B101


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("CRUX_CANCEL_TEST_FLOAT", "1.5")
    monkeypatch.setenv("CRUX_CANCEL_TEST_BOOL", "Off")
    monkeypatch.delenv("CRUX_CANCEL_TEST_MISSING", raising=False)
    assert parse_env_float("CRUX_CANCEL_TEST_FLOAT", None) == 1.5  # nosec B101
    assert parse_env_bool("CRUX_CANCEL_TEST_BOOL", True) is False  # nosec B101
    assert parse_env_bool("CRUX_CANCEL_TEST_MISSING", True) is True  # nosec B101
    assert env_fingerprint("CRUX_CANCEL_TEST_FLOAT", "CRUX_CANCEL_TEST_MISSING") == "1.5/"  # nosec B101


def test_resolve_keywords_win_over_options(monkeypatch):
    monkeypatch.setenv(DEFAULT_TIMEOUT_ENV, "9")
    first = CancellationController()
    second = CancellationController()
    base = TimeoutOptions(timeout=1.0, signal=first.token)

    merged = TimeoutOptions.resolve(base, timeout=3.0, signal=second.token)
    assert merged.timeout == 3.0 and merged.signal is second.token  # nosec B101
    assert TimeoutOptions.resolve(base).signal is first.token  # nosec B101
    assert TimeoutOptions.resolve().timeout == 9.0  # nosec B101 - configured default
    assert TimeoutOptions.resolve(timeout=0).has_deadline is False  # nosec B101


def test_options_validation():
    with pytest.raises(ValidationError):
        TimeoutOptions(timeout=-0.5)
    with pytest.raises(ValidationError):
        AbortOptions(signal="not a token")
    opts = TimeoutOptions()
    with pytest.raises(ValidationError):
        opts.timeout = 1.0  # frozen
