"""
Pytest configuration and fixtures for all tests.

Provides shared setup/teardown for logging.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import pytest

from semantica_core.logging_service import LoggingService


def pytest_configure(config):
    """Configure logging before any tests are collected."""
    LoggingService.reset()
    LoggingService.configure_logging(level="DEBUG", format="json")


@pytest.fixture(autouse=True)
def reset_logging_service():
    """Reset LoggingService state before each test."""
    LoggingService.reset()

    # Configure for tests
    LoggingService.configure_logging(level="DEBUG", format="json")

    yield

    # Cleanup after test
    LoggingService.reset()
