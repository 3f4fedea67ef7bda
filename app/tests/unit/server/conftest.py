"""Fixtures for server module unit tests."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_settings():
    """Create a mock settings object."""
    settings = MagicMock()
    settings.is_production = False
    settings.PREFIX = "test-"
    settings.fcm.is_configured = False
    settings.model_dump.return_value = {
        "PREFIX": "test-",
        "LOG_LEVEL": "INFO",
        "fcm": {"FCM_PROJECT_ID": "chat-app", "FCM_CREDENTIALS_JSON": "{...}"},
        "retention": {"RETENTION_DAYS": 30},
    }
    return settings


@pytest.fixture
def mock_logger():
    return MagicMock()
