import pytest


@pytest.mark.unit
class TestSystemRoutes:
    def test_get_version(self, client):
        response = client.get("/version")

        assert response.status_code == 200
        assert response.json() == {"version": "abc1234"}

    def test_health_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "checks": {"directory": True, "transport": True},
        }

    def test_health_degraded(self, client, transport):
        transport.healthy = False

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "degraded",
            "checks": {"directory": True, "transport": False},
        }
