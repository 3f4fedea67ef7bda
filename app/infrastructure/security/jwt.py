"""JWT caller assertion for the broadcast endpoint.

Broadcast callers present ``Authorization: Bearer <jwt>``. The token is
verified with a shared secret; a missing or invalid token yields an
unauthenticated assertion rather than an HTTP error, so the dispatch engine
decides how to reject the call.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import structlog
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError, decode

from infrastructure.configuration.infrastructure import ServerSettings

logger = structlog.get_logger()
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CallerAuth:
    """Caller assertion handed to the dispatch engine.

    Attributes:
        authenticated: Whether a valid bearer token was presented
        caller_id: The token's subject, when authenticated
    """

    authenticated: bool
    caller_id: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "CallerAuth":
        return cls(authenticated=False)


def decode_caller_token(token: str, settings: ServerSettings) -> Dict[str, Any]:
    """Verify a caller token and return its claims.

    Raises:
        PyJWTError: If the signature, expiry, audience or issuer is invalid
        ValueError: If no verification secret is configured
    """
    if not settings.BROADCAST_JWT_SECRET:
        raise ValueError("BROADCAST_JWT_SECRET is not configured")

    return decode(
        token,
        settings.BROADCAST_JWT_SECRET,
        algorithms=settings.BROADCAST_JWT_ALGORITHMS,
        audience=settings.BROADCAST_JWT_AUDIENCE,
        issuer=settings.BROADCAST_JWT_ISSUER,
        options={
            "verify_exp": True,
            "verify_aud": settings.BROADCAST_JWT_AUDIENCE is not None,
        },
    )


def resolve_caller(
    credentials: Optional[HTTPAuthorizationCredentials],
    settings: ServerSettings,
) -> CallerAuth:
    """Turn optional bearer credentials into a caller assertion.

    Args:
        credentials: Credentials parsed by ``HTTPBearer(auto_error=False)``
        settings: Server settings holding the verification parameters

    Returns:
        CallerAuth; unauthenticated when the token is missing or invalid
    """
    if (
        credentials is None
        or credentials.scheme.lower() != "bearer"
        or not credentials.credentials
    ):
        return CallerAuth.anonymous()

    try:
        claims = decode_caller_token(credentials.credentials, settings)
    except (PyJWTError, ValueError) as e:
        log = logger.bind(error=str(e))
        log.warning("caller_token_rejected")
        return CallerAuth.anonymous()

    caller_id = claims.get("sub")
    logger.debug("caller_token_accepted", caller_id=caller_id)
    return CallerAuth(authenticated=True, caller_id=caller_id)
