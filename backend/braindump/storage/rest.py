"""
Post store backed by a hosted PostgREST-style API (e.g. Supabase).

Query-builder semantics map onto query parameters:
  select -> ``select=*``
  order  -> ``order=created_at.desc``
  range  -> ``offset`` / ``limit``
  eq     -> ``category=eq.<value>``
  insert -> POST with ``Prefer: return=representation``

Uses a single httpx.AsyncClient; its connection limit plays the role of the
pool. Transport failures and gateway errors surface as ServiceUnavailable.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from braindump.core.config import Settings
from braindump.core.errors import ServiceUnavailable

from .base import ErrorHandler, PoolStats

_log = logging.getLogger(__name__)

_UNAVAILABLE_STATUSES = frozenset({502, 503, 504})


class RestPostStore:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        table: str = "Blog Posts",
        timeout: float = 10.0,
        max_connections: int = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/rest/v1"
        self._api_key = api_key
        self._path = "/" + quote(table)
        self._timeout = timeout
        self._max_connections = max_connections
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._in_flight = 0
        self._error_handler: ErrorHandler | None = None

    @classmethod
    def from_settings(cls, config: Settings) -> "RestPostStore":
        return cls(
            str(config.REST_STORAGE_URL),
            config.REST_STORAGE_API_KEY or "",
            table=config.REST_STORAGE_TABLE,
            timeout=config.REST_STORAGE_TIMEOUT,
            max_connections=config.DB_POOL_MAX_SIZE,
        )

    async def open(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "apikey": self._api_key,
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=self._max_connections),
                transport=self._transport,
            )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def ping(self) -> None:
        await self._request("GET", params={"select": "id", "limit": "1"})

    async def list_posts(
        self,
        *,
        page: int,
        limit: int,
        category: str | None = None,
        ascending: bool = False,
    ) -> list[dict[str, Any]]:
        params = {
            "select": "*",
            "order": "created_at.asc" if ascending else "created_at.desc",
            "offset": str(page * limit),
            "limit": str(limit),
        }
        if category:
            params["category"] = f"eq.{category}"
        rows = await self._request("GET", params=params)
        return list(rows or [])

    async def create_post(
        self, *, title: str, content: str, category: str
    ) -> dict[str, Any]:
        rows = await self._request(
            "POST",
            json=[{"title": title, "content": content, "category": category}],
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise RuntimeError("insert returned no representation")
        return rows[0]

    def stats(self) -> PoolStats:
        """Approximation: httpx does not expose pool counters."""
        active = min(self._in_flight, self._max_connections)
        return PoolStats(
            total=active,
            idle=0,
            waiting=max(0, self._in_flight - self._max_connections),
        )

    def set_error_handler(self, handler: ErrorHandler | None) -> None:
        # No persistent pool, hence no asynchronous pool error events.
        self._error_handler = handler

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _request(self, method: str, **kwargs: Any) -> Any:
        if self._client is None:
            raise ServiceUnavailable("Storage client is not open")
        self._in_flight += 1
        try:
            resp = await self._client.request(method, self._path, **kwargs)
        except httpx.TransportError as e:
            raise ServiceUnavailable(f"Storage unreachable: {e}") from e
        finally:
            self._in_flight -= 1
        if resp.status_code in _UNAVAILABLE_STATUSES:
            raise ServiceUnavailable(f"Storage returned HTTP {resp.status_code}")
        resp.raise_for_status()
        if not resp.content:
            return None
        return resp.json()
