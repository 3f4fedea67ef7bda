"""Firebase Cloud Messaging integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class FcmSettings(IntegrationSettings):
    """Firebase Cloud Messaging (HTTP v1) configuration.

    Environment Variables:
        FCM_PROJECT_ID: Firebase project ID used in the send endpoint
        FCM_CREDENTIALS_JSON: Service account JSON key file content
        FCM_API_URL: Base URL of the FCM API
        FCM_TIMEOUT_SECONDS: HTTP timeout for a single send (default: 10)
        FCM_MAX_WORKERS: Concurrent sends during multicast fan-out (default: 8)
        FCM_ANDROID_CHANNEL_ID: Android notification channel for chat messages
        FCM_ANDROID_COLOR: Android notification accent color
        FCM_APNS_BADGE: Badge count set on iOS chat notifications

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        project = settings.fcm.FCM_PROJECT_ID
        ```
    """

    FCM_PROJECT_ID: str = Field(default="", alias="FCM_PROJECT_ID")
    FCM_CREDENTIALS_JSON: str | None = Field(default=None, alias="FCM_CREDENTIALS_JSON")
    FCM_API_URL: str = Field(
        default="https://fcm.googleapis.com", alias="FCM_API_URL"
    )
    FCM_TIMEOUT_SECONDS: float = Field(default=10.0, alias="FCM_TIMEOUT_SECONDS")
    FCM_MAX_WORKERS: int = Field(default=8, alias="FCM_MAX_WORKERS")
    ANDROID_CHANNEL_ID: str = Field(
        default="chat_messages", alias="FCM_ANDROID_CHANNEL_ID"
    )
    ANDROID_COLOR: str = Field(default="#4CAF50", alias="FCM_ANDROID_COLOR")
    APNS_BADGE: int = Field(default=1, alias="FCM_APNS_BADGE")

    @property
    def is_configured(self) -> bool:
        """True when both project and credentials are present."""
        return bool(self.FCM_PROJECT_ID and self.FCM_CREDENTIALS_JSON)
