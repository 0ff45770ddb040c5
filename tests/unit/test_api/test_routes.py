"""
Unit tests for API routes
"""

import json
import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from api.app import create_app
from storage import QuoteStore
from utils.config_manager import WebConfig
from utils.exceptions import StorageError


@pytest.fixture
def static_dir(temp_dir):
    """Minimal static bundle"""
    path = temp_dir / "static"
    path.mkdir()
    (path / "index.html").write_text("<h1>Quote Me</h1>", encoding="utf-8")
    (path / "app.js").write_text("console.log('quotes');", encoding="utf-8")
    return path


@pytest.fixture
def web_config(static_dir):
    return WebConfig(static_dir=str(static_dir))


@pytest.fixture
def client(populated_store, web_config):
    """Create test client over a store holding two records"""
    return TestClient(create_app(populated_store, web_config))


@pytest.mark.unit
class TestAPIRoutes:
    """Test cases for API routes"""

    def test_get_quotes_returns_array_in_order(self, client, sample_quotes):
        response = client.get("/api/quotes")

        assert response.status_code == 200
        data = json.loads(response.text)
        assert isinstance(data, list)
        assert len(data) == 2
        assert data == sample_quotes

    def test_get_quotes_empty_store(self, store, web_config):
        client = TestClient(create_app(store, web_config))

        response = client.get("/api/quotes")

        assert response.status_code == 200
        assert response.json() == []

    def test_get_quotes_rereads_store_per_request(self, client, store_path):
        """Quotes added by another process show up without restarting the server"""
        QuoteStore(store_path).add("Stay hungry.", "Steve Jobs")

        response = client.get("/api/quotes")

        assert len(response.json()) == 3
        assert response.json()[-1]["author"] == "Steve Jobs"

    def test_get_quotes_storage_failure_is_isolated(self, client):
        """A failing request returns 500 and the next request still succeeds"""
        with patch.object(QuoteStore, "reload", side_effect=StorageError("corrupt")):
            response = client.get("/api/quotes")
        assert response.status_code == 500
        assert "Failed to load quotes" in response.json()["detail"]

        assert client.get("/api/quotes").status_code == 200

    def test_unexpected_error_is_isolated(self, client):
        with patch.object(QuoteStore, "list_quotes", side_effect=RuntimeError("boom")):
            response = client.get("/api/quotes")

        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_ERROR"
        assert client.get("/health").status_code == 200

    def test_api_is_read_only(self, client):
        assert client.post("/api/quotes", json={"quote": "x", "author": "y"}).status_code == 405
        assert client.delete("/api/quotes").status_code == 405

    def test_health_check_endpoint(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["quotes"] == 2
        assert "timestamp" in data
        assert "version" in data

    def test_process_time_header(self, client):
        response = client.get("/api/quotes")
        assert "x-process-time" in response.headers
        assert response.headers["x-content-type-options"] == "nosniff"


@pytest.mark.unit
class TestStaticFiles:
    """Test cases for static asset serving"""

    def test_root_serves_index(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "Quote Me" in response.text

    def test_serves_assets(self, client):
        response = client.get("/app.js")

        assert response.status_code == 200
        assert "console.log" in response.text

    def test_unknown_asset(self, client):
        assert client.get("/missing.css").status_code == 404

    def test_missing_static_dir_serves_api_only(self, populated_store, temp_dir):
        app = create_app(populated_store, WebConfig(static_dir=str(temp_dir / "absent")))
        client = TestClient(app)

        assert client.get("/api/quotes").status_code == 200
        assert client.get("/").status_code == 404

    def test_shipped_front_end(self, populated_store):
        client = TestClient(create_app(populated_store, WebConfig()))

        response = client.get("/")

        assert response.status_code == 200
        assert "/api/quotes" in client.get("/app.js").text
