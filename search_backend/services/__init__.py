"""
Service layer for the search function.

Services hold the business logic between the entry points (serverless
handler, local FastAPI routes) and the Gemini API.
"""
