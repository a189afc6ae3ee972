#!/usr/bin/env python3
"""
Search Function Smoke Script

Runs one query through the serverless handler against the live Gemini API,
without deploying or starting the local server.

Usage:
    python scripts/try_search.py
    python scripts/try_search.py --query "best budget phone with good camera"
    python scripts/try_search.py --query "quiet mechanical keyboard" --debug
"""

import argparse
import json
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from search_backend.handler import handle_search_event  # noqa: E402  (loads .env via config)


def print_result(result):
    """Pretty print the handler response."""
    status_code = result["statusCode"]
    body = json.loads(result["body"])

    print("\n" + "=" * 60)
    print(f"STATUS: {status_code}")
    print("=" * 60)

    if status_code == 200:
        print(f"\n{body['recommendationText']}\n")
        print(f"✅ {len(body['products'])} cited product(s):\n")
        for i, product in enumerate(body["products"], 1):
            print(f"--- Product #{i} ---")
            print(f"  Title: {product['title']}")
            print(f"  URL:   {product['uri']}")
            print()
    else:
        print(f"\n❌ {body['message']}\n")


def run_query(query: str):
    """Run a single search through the handler."""
    if not os.getenv("GEMINI_API_KEY"):
        print("\n⚠️  ERROR: GEMINI_API_KEY environment variable not set!")
        print("   Please set it in your .env file or export it:")
        print("   export GEMINI_API_KEY=your-gemini-api-key")
        print("\n   Get your API key at: https://aistudio.google.com/app/apikey")
        return None

    print(f"\nQuery: {query}")
    print("\nCalling Gemini API (with Google Search grounding)...")

    result = handle_search_event({"body": json.dumps({"userQuery": query})})
    print_result(result)
    return result


def main():
    parser = argparse.ArgumentParser(
        description="Run one grounded product search against the live Gemini API"
    )
    parser.add_argument(
        "--query", "-q",
        type=str,
        default="best phone under $300 with a good camera",
        help="Shopper query to send"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    run_query(args.query)


if __name__ == "__main__":
    main()
