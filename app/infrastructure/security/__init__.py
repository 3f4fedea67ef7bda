"""Infrastructure security services.

This module provides bearer-token verification for the broadcast endpoint.

Exports:
    CallerAuth: Caller assertion (authenticated flag + caller id)
    decode_caller_token: Verify a caller JWT and return its claims
    resolve_caller: Turn optional bearer credentials into a CallerAuth
    security: HTTPBearer scheme that does not reject missing credentials
"""

from infrastructure.security.jwt import (
    CallerAuth,
    decode_caller_token,
    resolve_caller,
    security,
)

__all__ = [
    "CallerAuth",
    "decode_caller_token",
    "resolve_caller",
    "security",
]
