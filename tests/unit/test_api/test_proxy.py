"""
Unit tests for the development server proxy
"""

import pytest
from fastapi.testclient import TestClient
from aioresponses import aioresponses

from api.app import create_app
from utils.config_manager import WebConfig, DEVELOPMENT_MODE

DEV_SERVER = "http://localhost:5173"


@pytest.fixture
def dev_client(populated_store):
    config = WebConfig(mode=DEVELOPMENT_MODE, dev_server_url=DEV_SERVER)
    return TestClient(create_app(populated_store, config))


@pytest.mark.unit
class TestDevServerProxy:
    """Test cases for development mode proxying"""

    def test_forwards_asset_requests(self, dev_client):
        with aioresponses() as mocked:
            mocked.get(f"{DEV_SERVER}/src/main.tsx", status=200, body="export default 1;",
                       content_type="application/javascript")

            response = dev_client.get("/src/main.tsx")

        assert response.status_code == 200
        assert response.text == "export default 1;"
        assert response.headers["content-type"].startswith("application/javascript")

    def test_forwards_query_string(self, dev_client):
        with aioresponses() as mocked:
            mocked.get(f"{DEV_SERVER}/@vite/client?t=1", status=200, body="ok")

            response = dev_client.get("/@vite/client?t=1")

        assert response.status_code == 200
        assert response.text == "ok"

    def test_passes_upstream_status(self, dev_client):
        with aioresponses() as mocked:
            mocked.get(f"{DEV_SERVER}/missing", status=404, body="not found")

            response = dev_client.get("/missing")

        assert response.status_code == 404

    def test_upstream_unavailable_returns_502(self, dev_client):
        with aioresponses():
            response = dev_client.get("/index.html")

        assert response.status_code == 502
        assert response.json()["error_code"] == "NET_001"

    def test_api_routes_are_not_proxied(self, dev_client):
        with aioresponses():
            response = dev_client.get("/api/quotes")

        assert response.status_code == 200
        assert len(response.json()) == 2
