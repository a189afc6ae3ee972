"""
Search System Prompt Templates

Contains the system prompt and user prompt builder for the search function.

The search function uses Gemini with Google Search grounding to answer an
e-commerce query with a short, citation-backed recommendation.

Architecture:
- Pattern: Grounded LLM (single API call with Google Search tool)
- Model: Gemini 2.5 Flash
- Web Search: Google Search grounding tool (real-time web data)
- Temperature: 0.2 (near-deterministic for factual queries)
- Output: Plain text, no markdown (the frontend renders it as-is)
"""

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

NO_RESULTS_FALLBACK = "I could not find any specific products for that query."

SEARCH_SYSTEM_PROMPT = f"""You are an expert e-commerce search assistant. Your job is to:
1.  **You MUST use the Google Search tool.** Your answer MUST be based *only* on the search results provided.
2.  **Do NOT use your internal knowledge.** If the search results are empty or irrelevant, just say "{NO_RESULTS_FALLBACK}"
3.  Generate a concise, 2-3 sentence conversational recommendation.
4.  Please try to name 2-3 specific product models in your answer (e.g., 'A great option is the Moto G54, or the Samsung F15'), but *only if you find them* in the search results.
5.  If you find them, briefly explain *why* they are good (e.g., 'The Moto has OIS, while the Samsung has a big battery').
6.  Do NOT use any markdown formatting (like '**').
7.  You must respond ONLY with the text of the recommendation. Do not include any other pre-amble or formatting."""


# =============================================================================
# USER PROMPT BUILDER
# =============================================================================

def build_search_user_prompt(user_query: str) -> str:
    """
    Build the single user turn sent to Gemini.

    The query is embedded verbatim between double quotes.

    Args:
        user_query: Raw query typed by the shopper

    Returns:
        Prompt text for the user turn
    """
    return f'User\'s e-commerce query: "{user_query}"'
