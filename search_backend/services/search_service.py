"""
Search Service - Gemini with Google Search Grounding

This service turns a shopper's free-text query into a short recommendation
backed by web citations, using Gemini's generateContent REST endpoint with the
Google Search grounding tool.

Architecture:
- Pattern: Grounded LLM (single API call with Google Search tool)
- Model: Gemini 2.5 Flash (configurable via GEMINI_MODEL)
- Transport: httpx, one POST per request, no retry, no client-side timeout
- Temperature: 0.2 (near-deterministic for factual queries)
- Output: Plain text recommendation + up to 4 grounding citations

The REST endpoint is called directly (instead of through google-genai) because
the frontend contract is built on groundingMetadata.groundingAttributions,
which the SDK's typed response models do not carry.

Error taxonomy (all subclasses of SearchServiceError):
- InvalidQueryError: body is not JSON or userQuery is missing/empty (400)
- MissingApiKeyError: GEMINI_API_KEY is not configured (500)
- UpstreamAPIError: Gemini answered with a non-2xx status (status relayed)
- SafetyBlockedError: Gemini stopped generation for safety reasons (400)
- InvalidUpstreamResponseError: no usable candidate in the response (500)
"""

import base64
import binascii
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import ValidationError

from search_backend.agents.search.prompts import (
    SEARCH_SYSTEM_PROMPT,
    build_search_user_prompt,
)
from search_backend.config import GeminiSearchConfig, settings
from search_backend.schemas.search import ProductCitation, SearchRequest, SearchResult
from search_backend.utils.logging import get_logger

logger = get_logger(__name__)


INVALID_QUERY_MESSAGE = "Invalid search query."
MISSING_API_KEY_MESSAGE = "Server is missing API key configuration."
SAFETY_BLOCKED_MESSAGE = "The request was blocked for safety reasons. Please adjust your query."
GENERIC_ERROR_MESSAGE = "An error occurred on the server."

FINISH_REASON_STOP = "STOP"
FINISH_REASON_SAFETY = "SAFETY"


# =============================================================================
# ERRORS
# =============================================================================

class SearchServiceError(Exception):
    """Base error carrying the HTTP status and the client-facing message."""

    status_code: int = 500
    message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidQueryError(SearchServiceError):
    status_code = 400
    message = INVALID_QUERY_MESSAGE


class MissingApiKeyError(SearchServiceError):
    status_code = 500
    message = MISSING_API_KEY_MESSAGE


class UpstreamAPIError(SearchServiceError):
    """Gemini returned a non-2xx status with a readable error body."""

    def __init__(self, status_code: int, upstream_message: Any):
        self.upstream_message = upstream_message
        super().__init__(message=f"API Error: {upstream_message}", status_code=status_code)


class SafetyBlockedError(SearchServiceError):
    status_code = 400
    message = SAFETY_BLOCKED_MESSAGE


class InvalidUpstreamResponseError(SearchServiceError):
    """
    Gemini answered 200 but without a usable candidate.

    Kept separate from unknown failures so it can be told apart in logs;
    the caller still sees the generic 500 message.
    """
    status_code = 500
    message = GENERIC_ERROR_MESSAGE


# =============================================================================
# REQUEST PARSING
# =============================================================================

def parse_search_request(
    body: Union[str, bytes, None],
    is_base64_encoded: bool = False,
) -> str:
    """
    Extract userQuery from the raw request body.

    Raises:
        InvalidQueryError: If the body is missing, not a JSON object, or
            userQuery is missing, null, empty or not a string.
    """
    if body is None:
        raise InvalidQueryError()

    try:
        if is_base64_encoded:
            body = base64.b64decode(body, validate=True)
        request = SearchRequest.model_validate_json(body)
    except (ValidationError, binascii.Error, ValueError, TypeError) as e:
        logger.info(f"Rejected search request: {type(e).__name__}")
        raise InvalidQueryError() from None

    return request.userQuery


def resolve_api_key() -> str:
    """
    Read the Gemini API key for this invocation.

    Raises:
        MissingApiKeyError: If GEMINI_API_KEY is missing or empty.
    """
    api_key = settings.get_gemini_api_key()
    if not api_key:
        logger.error("GEMINI_API_KEY not configured. Search function cannot call Gemini.")
        raise MissingApiKeyError()
    return api_key


# =============================================================================
# UPSTREAM REQUEST
# =============================================================================

def build_gemini_payload(user_query: str, config: GeminiSearchConfig) -> Dict[str, Any]:
    """Build the generateContent request body. Only the query text varies."""
    return {
        "contents": [{"parts": [{"text": build_search_user_prompt(user_query)}]}],
        "tools": [{"google_search": {}}],
        "systemInstruction": {
            "parts": [{"text": SEARCH_SYSTEM_PROMPT}]
        },
        "generationConfig": {
            "maxOutputTokens": config.max_output_tokens,
            "temperature": config.temperature,
        },
    }


def call_gemini(
    payload: Dict[str, Any],
    api_key: str,
    config: GeminiSearchConfig,
    http_client: httpx.Client,
) -> Dict[str, Any]:
    """
    POST the payload to Gemini and return the decoded JSON body.

    Raises:
        UpstreamAPIError: Gemini returned a non-2xx status.
        httpx.TransportError: The connection failed.
        ValueError / KeyError / TypeError: The body (success or error) could
            not be read; the handler reports these as generic failures.
    """
    response = http_client.post(
        config.endpoint_url,
        params={"key": api_key},
        json=payload,
        headers={"Content-Type": "application/json"},
    )

    if not response.is_success:
        error_body = response.json()
        logger.error(f"Gemini API error (status={response.status_code}): {error_body}")
        raise UpstreamAPIError(response.status_code, error_body["error"]["message"])

    return response.json()


# =============================================================================
# RESPONSE TRAVERSAL
# =============================================================================
# Each helper returns None (or an empty list) as soon as a step is missing or
# has the wrong type, so callers can short-circuit with early returns.

def _as_dict(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def _as_list(value: Any) -> Optional[List[Any]]:
    return value if isinstance(value, list) else None


def first_candidate(result: Any) -> Optional[Dict[str, Any]]:
    """Return the first candidate of a generateContent result, if any."""
    result_dict = _as_dict(result)
    if result_dict is None:
        return None
    candidates = _as_list(result_dict.get("candidates"))
    if not candidates:
        return None
    return _as_dict(candidates[0])


def finish_reason(candidate: Optional[Dict[str, Any]]) -> Optional[str]:
    if candidate is None:
        return None
    reason = candidate.get("finishReason")
    return reason if isinstance(reason, str) else None


def candidate_text(candidate: Optional[Dict[str, Any]]) -> Optional[str]:
    """Return content.parts[0].text, or None if absent or empty."""
    if candidate is None:
        return None
    content = _as_dict(candidate.get("content"))
    if content is None:
        return None
    parts = _as_list(content.get("parts"))
    if not parts:
        return None
    first_part = _as_dict(parts[0])
    if first_part is None:
        return None
    text = first_part.get("text")
    if not isinstance(text, str) or not text:
        return None
    return text


def extract_products(
    candidate: Optional[Dict[str, Any]],
    limit: int = 4,
) -> List[ProductCitation]:
    """
    Collect cited web pages from the candidate's grounding metadata.

    groundingAttributions is read first; groundingChunks (emitted by the
    current Google Search tool) is used only when there are no attributions.
    Entries missing uri or title are dropped, and at most `limit` are kept.
    """
    if candidate is None:
        return []
    metadata = _as_dict(candidate.get("groundingMetadata"))
    if metadata is None:
        return []

    sources = (
        _as_list(metadata.get("groundingAttributions"))
        or _as_list(metadata.get("groundingChunks"))
        or []
    )

    products: List[ProductCitation] = []
    for source in sources:
        if len(products) >= limit:
            break
        web = _as_dict(source.get("web")) if isinstance(source, dict) else None
        if web is None:
            continue
        uri = web.get("uri")
        title = web.get("title")
        if isinstance(uri, str) and uri and isinstance(title, str) and title:
            products.append(ProductCitation(uri=uri, title=title))

    return products


# =============================================================================
# RESPONSE INTERPRETATION
# =============================================================================

def interpret_gemini_response(
    result: Any,
    config: GeminiSearchConfig,
) -> SearchResult:
    """
    Map a decoded generateContent result to the frontend payload.

    Raises:
        SafetyBlockedError: finishReason is SAFETY.
        InvalidUpstreamResponseError: No candidate, or a candidate with
            neither a clean stop nor any text.
    """
    candidate = first_candidate(result)
    reason = finish_reason(candidate)
    text = candidate_text(candidate)

    if reason == FINISH_REASON_STOP and text:
        products = extract_products(candidate, limit=config.max_products)
        logger.info(f"Returning recommendation with {len(products)} products")
        return SearchResult(recommendationText=text, products=products)

    if reason == FINISH_REASON_SAFETY:
        logger.warning("Gemini blocked the request for safety reasons")
        raise SafetyBlockedError()

    if text:
        # Text without a clean stop (e.g. MAX_TOKENS): return it without citations
        logger.warning(f"Returning partial recommendation (finish_reason={reason})")
        return SearchResult(recommendationText=text, products=[])

    result_dict = _as_dict(result) or {}
    candidate_count = len(_as_list(result_dict.get("candidates")) or [])
    logger.error(
        f"invalid_upstream_response: Invalid response from AI service "
        f"(candidates={candidate_count}, finish_reason={reason})"
    )
    raise InvalidUpstreamResponseError()


# =============================================================================
# ENTRY POINT
# =============================================================================

def search_products(
    user_query: str,
    api_key: str,
    config: GeminiSearchConfig,
    http_client: Optional[httpx.Client] = None,
) -> SearchResult:
    """
    Run one grounded search against Gemini.

    This function:
    1. Builds the fixed generateContent payload around the query
    2. Sends a single POST (creating an httpx client if none is given)
    3. Interprets the first candidate into a SearchResult

    Args:
        user_query: Validated, non-empty query text
        api_key: Gemini API key for this invocation
        config: Fixed upstream settings
        http_client: Optional client to reuse (tests inject a mock transport)

    Returns:
        SearchResult with the recommendation and up to config.max_products citations

    Raises:
        UpstreamAPIError, SafetyBlockedError, InvalidUpstreamResponseError,
        or any transport/decoding error for the handler's generic path.
    """
    logger.info(f"search_products called, query='{user_query[:50]}...'")

    payload = build_gemini_payload(user_query, config)

    logger.info("Calling Gemini API with Google Search grounding...")
    if http_client is None:
        with httpx.Client(timeout=None) as client:
            result = call_gemini(payload, api_key, config, client)
    else:
        result = call_gemini(payload, api_key, config, http_client)

    return interpret_gemini_response(result, config)
