"""
Retrying fetch for calls to the blog API.

Only unavailability is retried: a 503 response or an httpx transport error
(timeouts included). Anything else, a 400 for instance, goes straight back to
the caller.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from braindump.core.errors import ServiceUnavailable, TransportError

_log = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_TIMEOUT = 15.0
BASE_DELAY = 1.0
MAX_DELAY = 10.0


def retry_delay(attempt_index: int) -> float:
    """Delay after zero-indexed attempt *attempt_index*: min(1s * 2^i, 10s)."""
    return min(BASE_DELAY * 2**attempt_index, MAX_DELAY)


async def fetch_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    timeout: float = DEFAULT_TIMEOUT,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    **kwargs: Any,
) -> httpx.Response:
    """
    Send the request up to *max_attempts* times.

    Raises ServiceUnavailable when every attempt answered 503, TransportError
    when the last attempt failed at the transport level.
    """
    last_error: Exception | None = None
    for i in range(max_attempts):
        try:
            response = await client.request(method, url, timeout=timeout, **kwargs)
        except httpx.TransportError as e:
            last_error = TransportError(f"Request failed: {str(e) or type(e).__name__}")
            last_error.__cause__ = e
            reason = "Request failed"
        else:
            if response.status_code != 503:
                return response
            last_error = ServiceUnavailable("Server unavailable: max retries exceeded")
            reason = "Server unavailable"
        if i < max_attempts - 1:
            delay = retry_delay(i)
            _log.info("%s, retrying in %.0fms...", reason, delay * 1000)
            await sleep(delay)

    raise last_error or ServiceUnavailable("Max retries exceeded")
