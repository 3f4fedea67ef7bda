"""Fixtures for HTTP route tests.

Routes are mounted on a bare FastAPI app (no lifespan, no scheduler) with
the dispatch engine and settings overridden by in-memory test doubles.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import get_limiter, setup_rate_limiter
from api.router import api_router
from infrastructure.configuration import Settings
from infrastructure.configuration.infrastructure import ServerSettings
from infrastructure.services import get_dispatch_engine, get_settings

BROADCAST_SECRET = "route-test-secret-with-enough-entropy-0123456789"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Rate limit counters are process-wide; start each test from zero."""
    get_limiter().reset()
    yield
    get_limiter().reset()


@pytest.fixture
def api_settings():
    return Settings(
        PREFIX="test-",
        GIT_SHA="abc1234",
        server=ServerSettings.model_validate(
            {"BROADCAST_JWT_SECRET": BROADCAST_SECRET}
        ),
    )


@pytest.fixture
def api_app(engine, api_settings):
    app = FastAPI()
    setup_rate_limiter(app)
    app.include_router(api_router)
    app.dependency_overrides[get_dispatch_engine] = lambda: engine
    app.dependency_overrides[get_settings] = lambda: api_settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(api_app):
    return TestClient(api_app)
