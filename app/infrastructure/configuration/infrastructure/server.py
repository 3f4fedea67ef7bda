"""Server infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """HTTP server and caller assertion configuration.

    Environment Variables:
        BACKEND_URL: Backend API base URL (default: http://127.0.0.1:8000)
        BROADCAST_JWT_SECRET: Shared secret used to verify broadcast callers
        BROADCAST_JWT_AUDIENCE: Expected "aud" claim (optional)
        BROADCAST_JWT_ISSUER: Expected "iss" claim (optional)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        secret = settings.server.BROADCAST_JWT_SECRET
        ```
    """

    BACKEND_URL: str = Field(default="http://127.0.0.1:8000", alias="BACKEND_URL")
    BROADCAST_JWT_SECRET: str | None = Field(
        default=None, alias="BROADCAST_JWT_SECRET"
    )
    BROADCAST_JWT_AUDIENCE: str | None = Field(
        default=None, alias="BROADCAST_JWT_AUDIENCE"
    )
    BROADCAST_JWT_ISSUER: str | None = Field(default=None, alias="BROADCAST_JWT_ISSUER")
    BROADCAST_JWT_ALGORITHMS: list[str] = ["HS256"]
