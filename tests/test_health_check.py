import pytest

from modules.core import views as core_views


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    @pytest.mark.parametrize("service", ["database", "cache"])
    def test_reports_each_service(self, client, service):
        data = client.get("/health").json()
        assert data["services"][service]["status"] == "up"
        assert "response_time_ms" in data["services"][service]

    def test_cache_failure_returns_503(self, client, monkeypatch):
        def broken_cache():
            raise ConnectionError("cache unreachable")

        monkeypatch.setattr(core_views, "_check_cache", broken_cache)

        response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["cache"] == {"status": "down"}
        assert data["services"]["database"]["status"] == "up"
