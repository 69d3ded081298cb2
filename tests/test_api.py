import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from red_alert.api.main import app
from red_alert.core.state import get_composer


@pytest.fixture
def composer():
    mock = MagicMock()
    mock.get_location_info = AsyncMock(return_value={"status": "found", "area": "עוטף עזה"})
    mock.count_active_alerts = AsyncMock(return_value={"status": "success", "active_alert_count": 0})
    return mock


@pytest.fixture
def client(composer):
    """Test client with the upstream pipeline replaced by a mock composer"""
    app.dependency_overrides[get_composer] = lambda: composer
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_endpoint(client):
    """
    Tests that the root endpoint is accessible.
    """
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to the Red Alert Service"}


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_tools(client):
    response = client.get("/api/tools")
    assert response.status_code == 200
    names = [tool["name"] for tool in response.json()["tools"]]
    assert "get_area_alerts" in names
    assert len(names) == 7


def test_call_tool_with_arguments(client, composer):
    response = client.post("/api/tools/get_location_info", json={"location_name": "שדרות"})

    assert response.status_code == 200
    assert response.json() == {"status": "found", "area": "עוטף עזה"}
    composer.get_location_info.assert_awaited_once_with(location_name="שדרות")


def test_call_tool_without_body(client, composer):
    response = client.post("/api/tools/count_active_alerts")

    assert response.status_code == 200
    assert response.json()["active_alert_count"] == 0


def test_call_tool_missing_required_argument(client, composer):
    response = client.post("/api/tools/get_location_info", json={})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "error"
    assert body["error"] == "location_name is required"
    assert body["tool"] == "get_location_info"
    composer.get_location_info.assert_not_awaited()


def test_call_unknown_tool(client):
    response = client.post("/api/tools/does_not_exist", json={})

    assert response.status_code == 404
    assert "Unknown operation" in response.json()["detail"]
