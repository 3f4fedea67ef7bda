"""Unit tests for server.server module."""

import pytest

from server import server


@pytest.mark.unit
def test_handler_is_fastapi_app():
    assert server.handler.title == "push-dispatch"
    assert server.handler.router.lifespan_context is not None


@pytest.mark.unit
def test_cors_middleware_configured():
    middleware_classes = [m.cls.__name__ for m in server.handler.user_middleware]
    assert "CORSMiddleware" in middleware_classes


@pytest.mark.unit
def test_rate_limiter_attached():
    assert server.handler.state.limiter is not None


@pytest.mark.unit
@pytest.mark.parametrize(
    "path",
    [
        "/health",
        "/version",
        "/v1/broadcast",
        "/v1/events/message-created",
        "/v1/events/user-created",
        "/v1/events/user-updated",
    ],
)
def test_routes_mounted(path):
    route_paths = [route.path for route in server.handler.routes]
    assert path in route_paths
