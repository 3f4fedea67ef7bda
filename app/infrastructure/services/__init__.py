"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    CallerAuthDep,
    DispatchEngineDep,
    SettingsDep,
    get_caller_auth,
)
from infrastructure.services.providers import (
    get_delivery_transport,
    get_dispatch_engine,
    get_dynamodb_client,
    get_fcm_client,
    get_message_store,
    get_recipient_directory,
    get_retention_sweeper,
    get_settings,
)

__all__ = [
    "CallerAuthDep",
    "DispatchEngineDep",
    "SettingsDep",
    "get_caller_auth",
    "get_delivery_transport",
    "get_dispatch_engine",
    "get_dynamodb_client",
    "get_fcm_client",
    "get_message_store",
    "get_recipient_directory",
    "get_retention_sweeper",
    "get_settings",
]
