"""Message retention feature settings."""

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class RetentionSettings(FeatureSettings):
    """Retention sweep configuration.

    Environment Variables:
        CHAT_CONVERSATIONS_TABLE: DynamoDB table listing conversations
        CHAT_MESSAGES_TABLE: DynamoDB table holding messages per conversation
        RETENTION_DAYS: Age in days after which messages are deleted (default: 30)
        SWEEP_TIME: Daily time the sweep runs, HH:MM (default: 00:00)
        SWEEP_TIMEZONE: Timezone for SWEEP_TIME (default: America/New_York)
    """

    CONVERSATIONS_TABLE: str = Field(
        default="chat_rooms", alias="CHAT_CONVERSATIONS_TABLE"
    )
    MESSAGES_TABLE: str = Field(default="chat_messages", alias="CHAT_MESSAGES_TABLE")
    RETENTION_DAYS: int = Field(default=30, alias="RETENTION_DAYS", gt=0)
    SWEEP_TIME: str = Field(default="00:00", alias="SWEEP_TIME")
    SWEEP_TIMEZONE: str = Field(default="America/New_York", alias="SWEEP_TIMEZONE")
