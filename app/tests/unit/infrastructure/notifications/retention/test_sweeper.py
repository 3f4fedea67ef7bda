"""Unit tests for RetentionSweeper."""

from datetime import timedelta

import pytest

from infrastructure.notifications.errors import DirectoryError
from infrastructure.notifications.retention import RetentionSweeper
from tests.fixtures.notifications import InMemoryMessageStore

WINDOW = timedelta(days=30)


@pytest.fixture
def populated_store(fixed_now):
    old = fixed_now - timedelta(days=45)
    recent = fixed_now - timedelta(days=2)
    return InMemoryMessageStore(
        {
            "room-a": {"a1": old, "a2": old, "a3": recent},
            "room-b": {"b1": recent},
            "room-c": {"c1": old},
        }
    )


@pytest.mark.unit
class TestRetentionSweeper:
    def test_deletes_only_expired_messages(self, populated_store, fixed_now):
        result = RetentionSweeper(populated_store).sweep(WINDOW, fixed_now)

        assert result.cutoff == fixed_now - WINDOW
        assert result.containers_scanned == 3
        assert result.deleted_count == 3
        assert result.failed_containers == 0
        assert populated_store.conversations == {
            "room-a": {"a3": fixed_now - timedelta(days=2)},
            "room-b": {"b1": fixed_now - timedelta(days=2)},
            "room-c": {},
        }

    def test_one_batch_per_conversation(self, populated_store, fixed_now):
        RetentionSweeper(populated_store).sweep(WINDOW, fixed_now)

        assert populated_store.delete_calls == [
            ("room-a", ["a1", "a2"]),
            ("room-c", ["c1"]),
        ]

    def test_second_run_deletes_nothing(self, populated_store, fixed_now):
        sweeper = RetentionSweeper(populated_store)

        first = sweeper.sweep(WINDOW, fixed_now)
        second = sweeper.sweep(WINDOW, fixed_now)

        assert first.deleted_count == 3
        assert second.deleted_count == 0

    def test_message_exactly_at_cutoff_is_kept(self, fixed_now):
        store = InMemoryMessageStore({"room": {"m": fixed_now - WINDOW}})

        result = RetentionSweeper(store).sweep(WINDOW, fixed_now)

        assert result.deleted_count == 0

    def test_failed_conversation_does_not_stop_sweep(self, populated_store, fixed_now):
        populated_store.failing.add("room-a")

        result = RetentionSweeper(populated_store).sweep(WINDOW, fixed_now)

        assert result.failed_containers == 1
        assert result.deleted_count == 1
        assert "c1" not in populated_store.conversations["room-c"]

    def test_enumeration_failure_raises(self, populated_store, fixed_now):
        populated_store.fail_enumeration = True

        with pytest.raises(DirectoryError):
            RetentionSweeper(populated_store).sweep(WINDOW, fixed_now)

    def test_empty_store(self, sweeper, fixed_now):
        result = sweeper.sweep(WINDOW, fixed_now)

        assert result.containers_scanned == 0
        assert result.deleted_count == 0

    def test_partial_delete_counts_committed_messages(
        self, populated_store, fixed_now, monkeypatch
    ):
        def delete_then_fail(conversation_id, message_ids):
            if conversation_id == "room-a":
                raise DirectoryError("transaction cancelled", deleted=1)
            return len(message_ids)

        monkeypatch.setattr(populated_store, "delete_messages", delete_then_fail)

        result = RetentionSweeper(populated_store).sweep(WINDOW, fixed_now)

        assert result.failed_containers == 1
        assert result.deleted_count == 2
