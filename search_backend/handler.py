"""
Serverless entry point for the grounded product search function.

The hosting platform (Netlify Functions / AWS Lambda) calls
``handler(event, context)`` with an HTTP-like event and expects a dict with
``statusCode``, ``headers`` and a JSON string ``body`` back.

Endpoint flow:
- Step 1: Parse/Validate → userQuery from the JSON body (400 on failure)
- Step 2: Credential → GEMINI_API_KEY from the environment (500 if absent)
- Step 3: Call LLM → single Gemini call with Google Search grounding
- Step 4: Map output → SearchResult or ErrorResponse

No exception escapes the handler; every failure becomes an error response.
"""

import json
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from search_backend.config import GeminiSearchConfig, search_config, settings
from search_backend.schemas.search import ErrorResponse
from search_backend.services.search_service import (
    GENERIC_ERROR_MESSAGE,
    InvalidQueryError,
    MissingApiKeyError,
    SafetyBlockedError,
    SearchServiceError,
    UpstreamAPIError,
    parse_search_request,
    resolve_api_key,
    search_products,
)
from search_backend.utils.logging import configure_logging, get_logger

configure_logging(settings.LOG_LEVEL)

logger = get_logger(__name__)


def _respond(status_code: int, content: BaseModel) -> Dict[str, Any]:
    """Serialize a response model into the platform's response shape."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(content.model_dump(mode="json")),
    }


def _error(error: SearchServiceError) -> Dict[str, Any]:
    return _respond(error.status_code, ErrorResponse(message=error.message))


def handle_search_event(
    event: Optional[Dict[str, Any]],
    config: GeminiSearchConfig = search_config,
    http_client: Optional[httpx.Client] = None,
) -> Dict[str, Any]:
    """
    Process one search request event.

    Args:
        event: Platform event; only ``body`` and ``isBase64Encoded`` are read
        config: Fixed Gemini settings for this process
        http_client: Optional httpx client (the local server and tests pass one)

    Returns:
        Dict with statusCode, headers and a JSON string body
    """
    event = event if isinstance(event, dict) else {}

    try:
        user_query = parse_search_request(
            event.get("body"),
            is_base64_encoded=bool(event.get("isBase64Encoded")),
        )
    except InvalidQueryError as e:
        return _error(e)

    try:
        api_key = resolve_api_key()
    except MissingApiKeyError as e:
        return _error(e)

    try:
        result = search_products(user_query, api_key, config, http_client=http_client)
    except (UpstreamAPIError, SafetyBlockedError) as e:
        logger.info(f"Returning error response with status={e.status_code}")
        return _error(e)
    except Exception as e:
        logger.exception(f"Error in search function: {type(e).__name__}: {e}")
        return _respond(500, ErrorResponse(message=GENERIC_ERROR_MESSAGE))

    return _respond(200, result)


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Platform entry point (e.g. netlify/functions/search → search_backend.handler.handler)."""
    return handle_search_event(event)
