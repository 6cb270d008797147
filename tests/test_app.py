"""Integration tests for FastAPI application, CORS, and exception handlers."""

import logging

import pytest
from fastapi.testclient import TestClient
from datetime import datetime
from unittest.mock import patch

from travel_proxy.core.config import Settings
from travel_proxy.main import app, log_startup_configuration


@pytest.fixture
def client():
    """Create test client for FastAPI application."""
    return TestClient(app)


class TestApplicationConfiguration:
    """Test cases for basic application configuration."""

    def test_app_title_and_version(self, client):
        """Test that app has correct title and version."""
        openapi_response = client.get("/openapi.json")
        assert openapi_response.status_code == 200
        openapi_data = openapi_response.json()

        assert openapi_data["info"]["title"] == "Travel Proxy API"
        assert openapi_data["info"]["version"] == "1.0.0"

    def test_root_endpoint(self, client):
        """Test root endpoint returns correct information."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["message"] == "Travel Proxy API"
        assert data["version"] == "1.0.0"
        assert data["docs"] == "/docs"

    def test_health_check_endpoint(self, client):
        """Test health check endpoint returns correct status."""
        response = client.get("/health")
        assert response.status_code == 200

        assert response.json() == {"status": "healthy", "service": "travel-proxy"}

    def test_openapi_lists_routes(self, client):
        paths = client.get("/openapi.json").json()["paths"]

        for path in ("/flight-tracker", "/map", "/reminders", "/download", "/places", "/chat-advisor"):
            assert path in paths
        assert "post" in paths["/reminders"]
        assert "post" in paths["/chat-advisor"]

    def test_docs_ui_available(self, client):
        response = client.get("/docs")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]


class TestCORSFunctionality:
    """Test cases for CORS middleware functionality."""

    @pytest.mark.parametrize("origin", ["http://localhost:3000", "http://localhost:8081"])
    def test_cors_preflight_request(self, client, origin):
        """Test CORS preflight OPTIONS request from the web and Expo dev servers."""
        headers = {
            "Origin": origin,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type"
        }

        response = client.options("/reminders", headers=headers)

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_cors_actual_request_from_allowed_origin(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:3000"})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_cors_request_from_disallowed_origin(self, client):
        response = client.get("/health", headers={"Origin": "https://evil.example.com"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers


class TestExceptionHandlers:
    """Test cases for the error envelope on the main application."""

    def test_404_not_found_exception_handler(self, client):
        response = client.get("/nonexistent-endpoint")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "HTTP_404"
        assert data["error"] == "Not Found"

    def test_405_method_not_allowed_exception_handler(self, client):
        response = client.delete("/reminders")

        assert response.status_code == 405
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "HTTP_405"

    def test_validation_error_is_400(self, client):
        response = client.get("/flight-tracker", params={"limit": "many"})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "VALIDATION_ERROR"
        assert "limit" in data["error"]

    def test_exception_handler_includes_timestamp(self, client):
        response = client.get("/nonexistent-endpoint")

        timestamp = response.json()["timestamp"]
        assert isinstance(datetime.fromisoformat(timestamp.replace("Z", "+00:00")), datetime)

    def test_exception_handler_cors_headers_preserved(self, client):
        response = client.get("/nonexistent-endpoint", headers={"Origin": "http://localhost:8081"})

        assert response.status_code == 404
        assert response.headers["access-control-allow-origin"] == "http://localhost:8081"


class TestStartupConfiguration:
    """Test startup configuration logging."""

    def test_missing_keys_are_warned_and_secrets_masked(self, caplog):
        settings = Settings(_env_file=None, AVIATION_STACK_API_KEY="abcd1234secret", GOOGLE_PLACES_API_KEY="")

        with caplog.at_level("INFO", logger="travel_proxy.main"):
            log_startup_configuration(settings)

        assert "abcd***" in caplog.text
        assert "abcd1234secret" not in caplog.text
        assert "GOOGLE_PLACES_API_KEY is not set" in caplog.text
        assert "AVIATION_STACK_API_KEY is not set" not in caplog.text

    @pytest.fixture
    def restore_root_level(self):
        root = logging.getLogger()
        original = root.level
        yield root
        root.setLevel(original)

    def test_startup_applies_configured_log_level(self, restore_root_level):
        """Test the configured LOG_LEVEL reaches the root logger when the app starts."""
        settings = Settings(_env_file=None, LOG_LEVEL="DEBUG")
        restore_root_level.setLevel(logging.INFO)

        with patch("travel_proxy.main.get_global_settings", return_value=settings):
            with TestClient(app) as client:
                assert client.get("/health").status_code == 200
                assert restore_root_level.level == logging.DEBUG

    def test_startup_logs_configuration(self, restore_root_level, caplog):
        settings = Settings(_env_file=None, LOG_LEVEL="WARNING", AVIATION_STACK_API_KEY="")

        with patch("travel_proxy.main.get_global_settings", return_value=settings):
            with caplog.at_level("WARNING", logger="travel_proxy.main"):
                with TestClient(app):
                    pass

        assert restore_root_level.level == logging.WARNING
        assert "AVIATION_STACK_API_KEY is not set" in caplog.text
