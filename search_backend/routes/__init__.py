"""
FastAPI routers for the local development server.
"""
