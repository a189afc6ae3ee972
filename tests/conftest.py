"""
Pytest configuration for search function tests.

Sets up test environment and global fixtures.
"""
import json
import os
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

# Set test environment variables before search_backend.config is imported
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ["GEMINI_API_KEY"] = "test-gemini-api-key"

TEST_API_KEY = "test-gemini-api-key"


class GeminiStub:
    """
    Stand-in for the Gemini REST endpoint, built on httpx.MockTransport.

    Records every request it receives so tests can assert on the outbound
    payload and on how many calls were made.
    """

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self._responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_payload(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


def gemini_candidate(
    text: Optional[str] = "Recommendation X.",
    finish_reason: Optional[str] = "STOP",
    attributions: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Build one generateContent candidate in the REST JSON shape."""
    candidate: Dict[str, Any] = {}
    if finish_reason is not None:
        candidate["finishReason"] = finish_reason
    if text is not None:
        candidate["content"] = {"parts": [{"text": text}], "role": "model"}
    if attributions is not None:
        candidate["groundingMetadata"] = {"groundingAttributions": attributions}
    return candidate


def web_attribution(uri: Optional[str], title: Optional[str]) -> Dict[str, Any]:
    web: Dict[str, Any] = {}
    if uri is not None:
        web["uri"] = uri
    if title is not None:
        web["title"] = title
    return {"web": web}


def search_event(user_query: Any) -> Dict[str, Any]:
    """Platform event carrying {"userQuery": ...} as its JSON body."""
    return {"httpMethod": "POST", "body": json.dumps({"userQuery": user_query})}


@pytest.fixture
def gemini_stub():
    """
    Factory fixture: gemini_stub(status_code, json_body) or gemini_stub(responder=fn).
    """
    def _make(
        status_code: int = 200,
        json_body: Any = None,
        responder: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> GeminiStub:
        if responder is None:
            def responder(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, json=json_body)
        return GeminiStub(responder)

    return _make


@pytest.fixture
def stop_response():
    """Gemini STOP response with two valid attributions and one missing title."""
    return {
        "candidates": [
            gemini_candidate(
                text="Recommendation X.",
                attributions=[
                    web_attribution("https://example.com/moto-g54", "Moto G54 review"),
                    web_attribution("https://example.com/galaxy-f15", "Samsung Galaxy F15"),
                    web_attribution("https://example.com/no-title", None),
                ],
            )
        ]
    }
