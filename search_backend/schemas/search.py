"""
Pydantic schemas for the search function.

These models define the strict request/response contracts between the
frontend and the search handler. Field names are camelCase because the
frontend reads them directly from the JSON body.
"""

from typing import List

from pydantic import BaseModel, Field, StrictStr

# ============================================================================
# REQUEST MODELS
# ============================================================================

class SearchRequest(BaseModel):
    """
    Body of POST /api/search.

    Only userQuery is read; any other keys the frontend sends are ignored.
    """
    userQuery: StrictStr = Field(
        ...,
        description="Shopper's free-text product query",
        min_length=1,
        examples=["best budget phone with good camera", "quiet mechanical keyboard"]
    )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class ProductCitation(BaseModel):
    """A web page Gemini cited while writing the recommendation."""
    uri: str = Field(..., min_length=1, description="Source URL")
    title: str = Field(..., min_length=1, description="Source page title")


class SearchResult(BaseModel):
    """
    Successful search response.

    products is empty when Gemini returned text without a clean STOP.
    """
    recommendationText: str = Field(
        ...,
        description="2-3 sentence plain-text recommendation"
    )
    products: List[ProductCitation] = Field(
        default_factory=list,
        description="Up to 4 cited products",
        max_length=4
    )


class ErrorResponse(BaseModel):
    """Body returned for every non-200 response."""
    message: str = Field(
        ...,
        examples=["Invalid search query.", "API Error: rate limited"]
    )
