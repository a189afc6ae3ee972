"""
Pydantic schemas for request and response validation.

All responses MUST be built from these models so the JSON shape the
frontend reads stays fixed.
"""
