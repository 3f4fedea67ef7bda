"""Unit tests for infrastructure.logging.context module.

Tests cover:
- bind_event_context() context manager
- get_correlation_id()
- clear_event_context()
- Context isolation and cleanup
"""

import uuid

import pytest
import structlog

from infrastructure.logging.context import (
    bind_event_context,
    clear_event_context,
    get_correlation_id,
)


@pytest.mark.unit
class TestBindEventContext:
    """Test suite for bind_event_context context manager."""

    def test_auto_generates_correlation_id(self):
        """Correlation ID is auto-generated if not provided."""
        with bind_event_context(event_type="message_created") as correlation_id:
            assert get_correlation_id() == correlation_id
            uuid.UUID(correlation_id)

    def test_uses_provided_correlation_id(self):
        """Provided correlation ID is used instead of generating one."""
        with bind_event_context(correlation_id="evt-123"):
            assert get_correlation_id() == "evt-123"

    def test_binds_event_type_and_caller(self):
        with bind_event_context(event_type="broadcast", caller_id="ops-1"):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["event_type"] == "broadcast"
            assert ctx["caller_id"] == "ops-1"

    def test_binds_extra_context_and_skips_none(self):
        """Extra keyword context is bound; None values are left out."""
        with bind_event_context(message_id="m1", receiver_id=None):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["message_id"] == "m1"
            assert "receiver_id" not in ctx

    def test_context_removed_after_block(self):
        with bind_event_context(event_type="user_created", user_id="u1"):
            pass

        ctx = structlog.contextvars.get_contextvars()
        assert "correlation_id" not in ctx
        assert "event_type" not in ctx
        assert "user_id" not in ctx

    def test_context_removed_when_block_raises(self):
        with pytest.raises(RuntimeError):
            with bind_event_context(event_type="message_created"):
                raise RuntimeError("boom")

        assert get_correlation_id() is None

    def test_outer_context_preserved(self):
        """Context bound outside the block survives it."""
        structlog.contextvars.bind_contextvars(service="push-dispatch")

        with bind_event_context(event_type="broadcast"):
            assert structlog.contextvars.get_contextvars()["service"] == "push-dispatch"

        assert structlog.contextvars.get_contextvars() == {"service": "push-dispatch"}


@pytest.mark.unit
class TestCorrelationHelpers:
    def test_get_correlation_id_without_context(self):
        assert get_correlation_id() is None

    def test_clear_event_context(self):
        structlog.contextvars.bind_contextvars(correlation_id="c1", user_id="u1")

        clear_event_context()

        assert structlog.contextvars.get_contextvars() == {}
