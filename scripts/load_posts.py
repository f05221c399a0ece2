#!/usr/bin/env python3
"""
Send N concurrent GET /api/posts requests and tally the status codes.

Useful to watch the pool limit and acquisition timeout at work:
  1. Lower DB_POOL_MAX_SIZE (e.g. 2) and DB_POOL_ACQUIRE_TIMEOUT (e.g. 1).
  2. Run: python scripts/load_posts.py --url http://localhost:8001/api/posts --concurrent 50
  3. Stop Postgres and run again.

Expected: only 200s while the database is up (queued requests wait for a
connection), 503s (never 500s) once it is unreachable.

Usage:
  python scripts/load_posts.py [--url URL] [--concurrent N]
  Or set env: POSTS_URL, CONCURRENT
"""

import argparse
import os
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed

import httpx


def do_request(url: str, index: int) -> tuple[int, int]:
    """Send one GET request; return (index, status_code)."""
    try:
        r = httpx.get(url, params={"page": 0, "limit": 10}, timeout=30)
        return (index, r.status_code)
    except httpx.HTTPError:
        return (index, -1)  # -1 = transport error


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Fire N parallel GET /api/posts requests."
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("POSTS_URL", "http://localhost:8001/api/posts"),
        help="Posts endpoint URL",
    )
    parser.add_argument(
        "--concurrent",
        type=int,
        default=int(os.environ.get("CONCURRENT", "20")),
        help="Number of concurrent requests (default 20)",
    )
    args = parser.parse_args()

    print(f"Testing {args.concurrent} concurrent GET requests to {args.url}")
    print("---")

    results: list[tuple[int, int]] = []
    with ThreadPoolExecutor(max_workers=args.concurrent) as executor:
        futures = [
            executor.submit(do_request, args.url, i) for i in range(args.concurrent)
        ]
        for f in as_completed(futures):
            results.append(f.result())

    counts = Counter(code for _, code in results)
    for code, n in sorted(counts.items()):
        label = "transport error" if code == -1 else f"HTTP {code}"
        print(f"{label}: {n}")


if __name__ == "__main__":
    main()
