"""Shared test configuration."""

from __future__ import annotations

import pytest

from orgtime.configuration.settings import TimestampSettings, configure
from orgtime.timestamps.clock import NOW_ENV_VAR, set_default_clock


@pytest.fixture(autouse=True)
def _reset_process_defaults(monkeypatch):
    """Keep the process-wide clock and settings from leaking between tests."""
    monkeypatch.delenv(NOW_ENV_VAR, raising=False)
    set_default_clock(None)
    configure(TimestampSettings())
    yield
    set_default_clock(None)
    configure(TimestampSettings())
