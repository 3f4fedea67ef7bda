"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.clients.aws import DynamoDBClient, SessionProvider
from infrastructure.clients.fcm import FCMClient
from infrastructure.notifications import (
    DeliveryTransport,
    DispatchEngine,
    DynamoDBMessageStore,
    DynamoDBRecipientDirectory,
    FCMTransport,
    FcmMessageOptions,
    MessageStore,
    RecipientDirectory,
    RetentionSweeper,
)


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Infrastructure packages should use this directly to ensure singleton consistency:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_dynamodb_client() -> DynamoDBClient:
    """Provider for the DynamoDB client.

    Credentials (temporary creds from assume_role or default providers) are
    created per API call, so caching this client is safe.
    """
    settings = get_settings()
    session_provider = SessionProvider(
        region=settings.aws.AWS_REGION,
        service_role_map=settings.aws.SERVICE_ROLE_MAP,
        endpoint_url=settings.aws.ENDPOINT_URL,
    )
    return DynamoDBClient(session_provider=session_provider)


@lru_cache
def get_fcm_client() -> FCMClient:
    """Provider for the FCM HTTP v1 client.

    Credentials are loaded lazily on first send, so an unconfigured client
    can be built at startup and fails only when used.
    """
    settings = get_settings()
    return FCMClient(
        project_id=settings.fcm.FCM_PROJECT_ID,
        credentials_json=settings.fcm.FCM_CREDENTIALS_JSON,
        api_url=settings.fcm.FCM_API_URL,
        timeout_seconds=settings.fcm.FCM_TIMEOUT_SECONDS,
    )


@lru_cache
def get_recipient_directory() -> RecipientDirectory:
    """Provider for the DynamoDB-backed recipient directory."""
    settings = get_settings()
    return DynamoDBRecipientDirectory(
        client=get_dynamodb_client(),
        table_name=settings.dispatch.USERS_TABLE,
        page_size=settings.dispatch.DIRECTORY_PAGE_SIZE,
    )


@lru_cache
def get_delivery_transport() -> DeliveryTransport:
    """Provider for the FCM delivery transport."""
    settings = get_settings()
    options = FcmMessageOptions(
        android_channel_id=settings.fcm.ANDROID_CHANNEL_ID,
        android_color=settings.fcm.ANDROID_COLOR,
        apns_badge=settings.fcm.APNS_BADGE,
    )
    return FCMTransport(
        client=get_fcm_client(),
        options=options,
        max_workers=settings.fcm.FCM_MAX_WORKERS,
    )


@lru_cache
def get_dispatch_engine() -> DispatchEngine:
    """
    Get application-scoped dispatch engine singleton.

    Returns:
        DispatchEngine: Engine wired to the recipient directory and transport.

    Usage:
        @router.post("/broadcast")
        def broadcast(request: BroadcastRequest, engine: DispatchEngineDep):
            return engine.dispatch_broadcast(request, caller_is_authenticated=True)
    """
    settings = get_settings()
    return DispatchEngine(
        directory=get_recipient_directory(),
        transport=get_delivery_transport(),
        multicast_batch_size=settings.dispatch.MULTICAST_BATCH_SIZE,
    )


@lru_cache
def get_message_store() -> MessageStore:
    """Provider for the DynamoDB-backed chat message store."""
    settings = get_settings()
    return DynamoDBMessageStore(
        client=get_dynamodb_client(),
        conversations_table=settings.retention.CONVERSATIONS_TABLE,
        messages_table=settings.retention.MESSAGES_TABLE,
        page_size=settings.dispatch.DIRECTORY_PAGE_SIZE,
    )


@lru_cache
def get_retention_sweeper() -> RetentionSweeper:
    """Provider for the retention sweeper."""
    return RetentionSweeper(store=get_message_store())
