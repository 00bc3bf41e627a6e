"""
Test fixtures and configuration for pytest
"""

import pytest

from rollbar_payload.builder import NotifyBuilder

FROZEN_TIME = 1_700_000_000.75
SERVER = {"host": "build-01", "ip": "10.0.0.7"}


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Auto-use guard: ignore any ROLLBAR_* variables and log settings
    exported in the developer's shell.
    """
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    for var in ("ROLLBAR_ACCESS_TOKEN", "ROLLBAR_ENVIRONMENT", "ROLLBAR_CONTEXT"):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def builder():
    """A builder with a frozen clock and a fixed server identity."""
    return NotifyBuilder(
        "test-token",
        "test",
        clock=lambda: FROZEN_TIME,
        server=dict(SERVER),
    )
