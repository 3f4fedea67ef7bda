"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated, Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials

from infrastructure.configuration import Settings
from infrastructure.notifications import DispatchEngine
from infrastructure.security import CallerAuth, resolve_caller, security
from infrastructure.services.providers import (
    get_dispatch_engine,
    get_settings,
)


def get_caller_auth(
    settings: Annotated[Settings, Depends(get_settings)],
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> CallerAuth:
    """Resolve the caller assertion from an optional bearer token."""
    return resolve_caller(credentials, settings.server)


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Dispatch engine dependency
DispatchEngineDep = Annotated[DispatchEngine, Depends(get_dispatch_engine)]

# Caller assertion dependency - never rejects; unauthenticated callers get
# CallerAuth(authenticated=False)
CallerAuthDep = Annotated[CallerAuth, Depends(get_caller_auth)]

__all__ = [
    "SettingsDep",
    "DispatchEngineDep",
    "CallerAuthDep",
    "get_caller_auth",
]
