"""
Pytest configuration for pairing gateway tests.

Sets up test environment and global fixtures.
"""
import os

import pytest

# Set test environment variables before the app modules read them
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("NANOMID_EMAIL", "owner@example.com")
os.environ.setdefault("NANOMID_PASSWORD", "test-password")
os.environ.setdefault("ERROR_SCREENSHOT_PATH", "")

from pairing.config import Settings  # noqa: E402


@pytest.fixture
def test_settings():
    """Settings with test credentials and no delays."""
    return Settings(
        NANOMID_EMAIL="owner@example.com",
        NANOMID_PASSWORD="test-password",
        NANOMID_BASE_URL="https://nanomid.test/en",
        SETTLE_DELAY_MS=0,
        NAVIGATION_TIMEOUT_MS=50,
        WORKFLOW_TIMEOUT_SECONDS=5,
        ERROR_SCREENSHOT_PATH="",
    )


@pytest.fixture
def unconfigured_settings():
    """Settings without target-account credentials."""
    return Settings(NANOMID_EMAIL="", NANOMID_PASSWORD="", ERROR_SCREENSHOT_PATH="")
