"""
Search - Web-Grounded LLM Architecture

Prompt templates for the Gemini-based product search.

Architecture:
- Pattern: Web-Grounded LLM (single API call with Google Search tool)
- Model: Gemini 2.5 Flash (with Google Search grounding)
- Temperature: 0.2 (near-deterministic)
- Output: Plain-text recommendation plus grounding citations

The service layer is in:
- search_backend/services/search_service.py
"""

from search_backend.agents.search.prompts import (
    NO_RESULTS_FALLBACK,
    SEARCH_SYSTEM_PROMPT,
    build_search_user_prompt,
)

__all__ = [
    "NO_RESULTS_FALLBACK",
    "SEARCH_SYSTEM_PROMPT",
    "build_search_user_prompt",
]
