"""
AI Components for the search function.

1. Search (Web-Grounded LLM)
   - Uses Gemini with Google Search grounding for product recommendations
   - Calls the generateContent REST endpoint directly via httpx
   - Service layer: search_backend/services/search_service.py
"""
