"""Fixtures for infrastructure security tests."""

import time

import jwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials

from infrastructure.configuration.infrastructure import ServerSettings

TEST_SECRET = "test-broadcast-secret-with-enough-entropy-0123456789"


@pytest.fixture
def server_settings():
    """ServerSettings verifying HS256 tokens for a known audience and issuer."""
    return ServerSettings.model_validate(
        {
            "BROADCAST_JWT_SECRET": TEST_SECRET,
            "BROADCAST_JWT_AUDIENCE": "push-dispatch",
            "BROADCAST_JWT_ISSUER": "chat-admin",
        }
    )


@pytest.fixture
def valid_jwt_payload():
    """Claims accepted by ``server_settings``."""
    now = int(time.time())
    return {
        "iss": "chat-admin",
        "sub": "operator-1",
        "aud": "push-dispatch",
        "iat": now,
        "exp": now + 300,
    }


@pytest.fixture
def make_token():
    """Factory fixture signing claims with the test secret by default."""

    def _make(claims, secret=TEST_SECRET, algorithm="HS256"):
        return jwt.encode(claims, secret, algorithm=algorithm)

    return _make


@pytest.fixture
def mock_http_credentials():
    """Factory fixture for creating HTTP authorization credentials."""

    def _make(token="valid_token", scheme="Bearer"):
        return HTTPAuthorizationCredentials(scheme=scheme, credentials=token)

    return _make
