"""
Keep-alive daemon: pings the backend's /health endpoint forever.

Runs as its own process, with no access to the server's pool state; it only
generates periodic traffic and logs what /health reports.

Usage:
  braindump-keepalive [--url URL] [--interval SECONDS]
  Or set env: KEEPALIVE_URL, KEEPALIVE_INTERVAL
"""

import argparse
import logging
import os
import signal
import threading
from types import FrameType

import httpx

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:8001/health"
DEFAULT_INTERVAL = 60.0
DEFAULT_TIMEOUT = 10.0


def ping_server(client: httpx.Client, url: str) -> bool:
    """GET *url* once and log the outcome. Returns False on transport errors."""
    try:
        response = client.get(url)
    except httpx.HTTPError as e:
        logger.error("Ping failed: %s", str(e) or type(e).__name__)
        return False
    try:
        health = response.json()
        logger.info("Server alive - DB: %s", health["checks"]["database"])
    except (ValueError, KeyError, TypeError):
        logger.info("Server alive - Response: %s", response.status_code)
    return True


def run(
    url: str,
    interval: float,
    stop: threading.Event,
    *,
    client: httpx.Client | None = None,
) -> None:
    """Ping immediately, then every *interval* seconds until *stop* is set."""
    owns_client = client is None
    http = client or httpx.Client(timeout=DEFAULT_TIMEOUT)
    try:
        while not stop.is_set():
            ping_server(http, url)
            stop.wait(interval)
    finally:
        if owns_client:
            http.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Periodically call the backend health endpoint."
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("KEEPALIVE_URL", DEFAULT_URL),
        help=f"Health URL to ping (default {DEFAULT_URL})",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=float(os.environ.get("KEEPALIVE_INTERVAL", DEFAULT_INTERVAL)),
        help=f"Seconds between pings (default {DEFAULT_INTERVAL:.0f})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] %(levelname)s %(message)s",
    )

    stop = threading.Event()

    def _shutdown(signum: int, frame: FrameType | None) -> None:  # noqa: ARG001
        logger.info("Keep-alive daemon shutting down (%s)", signal.Signals(signum).name)
        stop.set()

    signal.signal(signal.SIGTERM, _shutdown)
    signal.signal(signal.SIGINT, _shutdown)

    logger.info("Keep-alive daemon started: %s every %.0fs", args.url, args.interval)
    run(args.url, args.interval, stop)


if __name__ == "__main__":
    main()
