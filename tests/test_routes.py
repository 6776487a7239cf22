"""
Integration tests for the dashboard HTTP endpoints.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from socialai.api.dashboard_routes import get_controller
from socialai.dashboard.controller import DashboardController
from socialai.database import get_session
from socialai.main import app
from socialai.config import settings


@pytest.fixture
def controller(session_factory, make_client, platform_api, monkeypatch) -> DashboardController:
    monkeypatch.setattr(settings, "instagram_access_token", "t")
    monkeypatch.setattr(settings, "google_access_token", "g")
    monkeypatch.setattr(settings, "youtube_api_key", None)
    return DashboardController(session_factory, make_client(platform_api()))


@pytest.fixture
def client(controller, session) -> TestClient:
    def override_get_session():
        yield session

    app.dependency_overrides[get_controller] = lambda: controller
    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.integration
class TestDashboardEndpoints:
    """Test dashboard read/refresh endpoints."""

    def test_health(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_get_dashboard_loads_once(self, client: TestClient, seeded_session):
        response = client.get("/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "idle"
        assert data["loading"] is False
        assert data["metrics"]["instagram"]["followers"] == "15.3K"
        assert data["demographics"][0] == {"name": "18-24", "value": 35.0, "color": "#8b5cf6"}
        assert data["last_loaded_at"] is not None

    def test_refresh_reports_per_platform(self, client: TestClient, session):
        response = client.post("/dashboard/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert {r["platform"] for r in data["results"]} == {"instagram", "google"}
        assert data["state"]["updating"] is False
        assert data["state"]["metrics"]["google"]["click_rate"] == "25%"

    def test_refresh_failure(self, client: TestClient, controller, make_client, platform_api):
        controller.platform_client = make_client(
            platform_api({"google": httpx.Response(403)})
        )
        response = client.post("/dashboard/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        failed = [r for r in data["results"] if not r["success"]]
        assert failed[0]["platform"] == "google"

    def test_select_platform(self, client: TestClient, seeded_session):
        response = client.put("/dashboard/platform", json={"platform": "youtube"})

        assert response.status_code == 200
        data = response.json()
        assert data["selected_platform"] == "youtube"
        assert [d["name"] for d in data["demographics"]] == ["18-24", "25-34"]

    def test_select_unknown_platform(self, client: TestClient):
        response = client.put("/dashboard/platform", json={"platform": "myspace"})
        assert response.status_code == 422

    def test_list_platform_metrics(self, client: TestClient, seeded_session):
        response = client.get("/metrics/platforms")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert {m["platform"] for m in data["metrics"]} == {"instagram", "youtube"}
