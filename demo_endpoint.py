"""
Quick demo script to run the search function locally.

This script starts a local server and shows how to make requests to the endpoint.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Grounded Product Search (local)")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET  http://localhost:8000/health")
    print("   - Search:        POST http://localhost:8000/api/search")
    print("   - API Docs:           http://localhost:8000/docs")
    print()
    print("🔑 Requires GEMINI_API_KEY in the environment or .env")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/api/search" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"userQuery": "best phone under $300 with a good camera"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "search_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
