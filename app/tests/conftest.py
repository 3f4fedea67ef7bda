"""Shared fixtures for push dispatch tests.

Provides the in-memory collaborators (directory, transport, message store),
factory fixtures for core models and a fully-wired DispatchEngine.
"""

from datetime import datetime, timezone

import pytest

from infrastructure.configuration import Settings
from infrastructure.notifications import DispatchEngine, RetentionSweeper
from infrastructure.services import providers
from tests.factories.notifications import (
    make_broadcast_request,
    make_message_document,
    make_message_event,
    make_outcome,
    make_payload,
    make_recipient,
    make_user_document,
)
from tests.fixtures.notifications import (
    InMemoryMessageStore,
    InMemoryRecipientDirectory,
    RecordingTransport,
)


@pytest.fixture(autouse=True)
def clear_provider_caches():
    """Reset lru_cache providers so no test sees another test's singletons."""
    cached = [
        providers.get_settings,
        providers.get_dynamodb_client,
        providers.get_fcm_client,
        providers.get_recipient_directory,
        providers.get_delivery_transport,
        providers.get_dispatch_engine,
        providers.get_message_store,
        providers.get_retention_sweeper,
    ]
    for provider in cached:
        provider.cache_clear()
    yield
    for provider in cached:
        provider.cache_clear()


@pytest.fixture
def test_settings():
    """Settings with a non-production prefix and no external credentials."""
    return Settings(PREFIX="test-", LOG_LEVEL="DEBUG")


@pytest.fixture
def recipient_factory():
    return make_recipient


@pytest.fixture
def message_event_factory():
    return make_message_event


@pytest.fixture
def message_document_factory():
    return make_message_document


@pytest.fixture
def user_document_factory():
    return make_user_document


@pytest.fixture
def outcome_factory():
    return make_outcome


@pytest.fixture
def payload_factory():
    return make_payload


@pytest.fixture
def broadcast_request_factory():
    return make_broadcast_request


@pytest.fixture
def directory():
    """Directory holding one enabled receiver with a token."""
    return InMemoryRecipientDirectory([make_recipient()])


@pytest.fixture
def transport():
    """Transport on which every delivery succeeds unless scripted otherwise."""
    return RecordingTransport()


@pytest.fixture
def engine(directory, transport):
    return DispatchEngine(directory=directory, transport=transport)


@pytest.fixture
def fixed_now():
    return datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def message_store():
    return InMemoryMessageStore({})


@pytest.fixture
def sweeper(message_store):
    return RetentionSweeper(store=message_store)
