"""Pytest configuration and fixtures for the test suite."""

import time

import pytest

from tests.test_utils import Recorder


@pytest.fixture
def on_change() -> Recorder:
    """Record `on_change` calls."""
    return Recorder()


@pytest.fixture
def since() -> int:
    """Timestamp to query events published during the test."""
    return time.time_ns()
