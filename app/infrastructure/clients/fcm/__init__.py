"""Firebase Cloud Messaging client."""

from infrastructure.clients.fcm.client import FCM_SCOPES, FCMClient

__all__ = ["FCMClient", "FCM_SCOPES"]
