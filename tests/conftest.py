# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import targeter.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset logger level to DEFAULT_TEST_LOG_LEVEL before each test for isolation.

    The app logger is a module-level singleton that persists between tests,
    so a test that changes its level would leak into the next one.
    """
    logger = mod_logs.getAppLogger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
