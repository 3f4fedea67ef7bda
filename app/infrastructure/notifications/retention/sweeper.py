"""Retention sweeper: deletes chat messages older than the retention window."""

from datetime import datetime, timedelta

import structlog

from infrastructure.notifications.errors import DirectoryError
from infrastructure.notifications.models import SweepResult
from infrastructure.notifications.retention.base import MessageStore

logger = structlog.get_logger()


class RetentionSweeper:
    """Enumerates conversations and bulk-deletes their expired messages.

    A failure in one conversation is logged and counted; the sweep moves on
    to the next one. Re-running with no new writes deletes nothing.

    Args:
        store: MessageStore implementation
    """

    def __init__(self, store: MessageStore) -> None:
        self.store = store

    def sweep(self, retention_window: timedelta, now: datetime) -> SweepResult:
        """Delete every message created before ``now - retention_window``.

        Raises:
            DirectoryError: If conversations cannot be enumerated
        """
        cutoff = now - retention_window
        result = SweepResult(cutoff=cutoff)

        logger.info("retention_sweep_started", cutoff=cutoff.isoformat())

        for conversation_id in self.store.list_conversations():
            result.containers_scanned += 1
            try:
                expired = self.store.list_expired(conversation_id, cutoff)
                if not expired:
                    continue
                deleted = self.store.delete_messages(conversation_id, expired)
            except DirectoryError as e:
                result.deleted_count += e.deleted
                result.failed_containers += 1
                logger.error(
                    "retention_sweep_conversation_failed",
                    conversation_id=conversation_id,
                    deleted_count=e.deleted,
                    error=str(e),
                )
                continue

            result.deleted_count += deleted
            logger.info(
                "expired_messages_deleted",
                conversation_id=conversation_id,
                deleted_count=deleted,
            )

        logger.info(
            "retention_sweep_completed",
            containers_scanned=result.containers_scanned,
            deleted_count=result.deleted_count,
            failed_containers=result.failed_containers,
        )
        return result
