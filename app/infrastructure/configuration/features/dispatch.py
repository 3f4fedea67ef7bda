"""Notification dispatch feature settings."""

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class DispatchSettings(FeatureSettings):
    """Dispatch engine and recipient directory configuration.

    Environment Variables:
        PUSH_USERS_TABLE: DynamoDB table holding recipient profiles
        DIRECTORY_PAGE_SIZE: Items per page when enumerating recipients (default: 100)
        MULTICAST_BATCH_SIZE: Max tokens per multicast call (default: 500)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        table = settings.dispatch.USERS_TABLE
        ```
    """

    USERS_TABLE: str = Field(default="push_users", alias="PUSH_USERS_TABLE")
    DIRECTORY_PAGE_SIZE: int = Field(default=100, alias="DIRECTORY_PAGE_SIZE", gt=0)
    MULTICAST_BATCH_SIZE: int = Field(
        default=500, alias="MULTICAST_BATCH_SIZE", gt=0, le=500
    )
