"""
Tests for the local FastAPI server.

- POST /api/search returns exactly what the serverless handler returns
- GET /health is public
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from search_backend.main import app
from search_backend.routes.search import get_search_http_client


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def override_gemini(gemini_stub):
    """Route the search endpoint's httpx client to a Gemini stub."""
    stubs = []

    def _install(status_code=200, json_body=None, responder=None):
        stub = gemini_stub(status_code, json_body, responder)
        stubs.append(stub)

        def _client():
            with stub.client() as http_client:
                yield http_client

        app.dependency_overrides[get_search_http_client] = _client
        return stub

    yield _install

    # Clean up after test
    app.dependency_overrides.clear()


class TestSearchEndpoint:
    """Tests for POST /api/search."""

    def test_happy_path(self, client, override_gemini, stop_response):
        stub = override_gemini(200, stop_response)

        response = client.post("/api/search", json={"userQuery": "budget phone"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {
            "recommendationText": "Recommendation X.",
            "products": [
                {"uri": "https://example.com/moto-g54", "title": "Moto G54 review"},
                {"uri": "https://example.com/galaxy-f15", "title": "Samsung Galaxy F15"},
            ],
        }
        assert stub.call_count == 1

    def test_invalid_json_returns_400(self, client, override_gemini):
        stub = override_gemini(200, {"candidates": []})

        response = client.post(
            "/api/search",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid search query."}
        assert stub.call_count == 0

    def test_empty_query_returns_400(self, client, override_gemini):
        override_gemini(200, {"candidates": []})

        response = client.post("/api/search", json={"userQuery": ""})

        assert response.status_code == 400

    def test_upstream_status_relayed(self, client, override_gemini):
        override_gemini(429, {"error": {"message": "rate limited"}})

        response = client.post("/api/search", json={"userQuery": "budget phone"})

        assert response.status_code == 429
        assert response.json() == {"message": "API Error: rate limited"}

    def test_connection_failure_returns_500(self, client, override_gemini):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        override_gemini(responder=refuse)

        response = client.post("/api/search", json={"userQuery": "budget phone"})

        assert response.status_code == 500
        assert response.json() == {"message": "An error occurred on the server."}

    def test_missing_api_key(self, client, override_gemini, monkeypatch, stop_response):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        stub = override_gemini(200, stop_response)

        response = client.post("/api/search", json={"userQuery": "budget phone"})

        assert response.status_code == 500
        assert response.json() == {"message": "Server is missing API key configuration."}
        assert stub.call_count == 0


class TestHealthEndpoint:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
