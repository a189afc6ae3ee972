"""
FastAPI route that serves the search function locally.

The route does no work of its own: it wraps the raw request body in a
platform-style event and hands it to the same handler the serverless
platform calls, so local behaviour matches production byte for byte.

Endpoints:
- POST /api/search: grounded product search
"""

from typing import Iterator

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from search_backend.handler import handle_search_event
from search_backend.utils.logging import get_logger

logger = get_logger(__name__)

# Create router
router = APIRouter(
    prefix="/api",
    tags=["search"]
)


def get_search_http_client() -> Iterator[httpx.Client]:
    """Provide an httpx client for one request (no timeout, closed afterwards)."""
    with httpx.Client(timeout=None) as client:
        yield client


@router.post(
    "/search",
    status_code=200,
    summary="Grounded product search",
    description="""
    Sends the shopper's query to Gemini with Google Search grounding and
    returns a short recommendation plus up to 4 cited products.

    **Request body:** `{"userQuery": "..."}`

    **Responses:**
    - 200: `{"recommendationText": "...", "products": [{"uri", "title"}]}`
    - 400: invalid query or safety block
    - 500: missing API key or server error
    - Gemini's status: `{"message": "API Error: ..."}`
    """
)
async def search_endpoint(
    request: Request,
    http_client: httpx.Client = Depends(get_search_http_client),
) -> Response:
    body = await request.body()
    event = {"httpMethod": request.method, "body": body}

    result = await run_in_threadpool(handle_search_event, event, http_client=http_client)

    logger.info(f"POST /api/search returning status={result['statusCode']}")
    return Response(
        content=result["body"],
        status_code=result["statusCode"],
        media_type="application/json",
    )
