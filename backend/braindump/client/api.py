"""
Thin async client for the blog HTTP API. Every call goes through fetch_with_retry.
"""

from typing import Any

import httpx

from braindump.core.errors import InternalError, ValidationError

from .fetch import DEFAULT_MAX_ATTEMPTS, DEFAULT_TIMEOUT, fetch_with_retry


class BlogApiClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8001",
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        timeout: float = DEFAULT_TIMEOUT,
        http: httpx.AsyncClient | None = None,
        **fetch_kwargs: Any,
    ) -> None:
        self.max_attempts = max_attempts
        self.timeout = timeout
        self._fetch_kwargs = fetch_kwargs
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=base_url)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "BlogApiClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        return await fetch_with_retry(
            self.http,
            method,
            url,
            max_attempts=self.max_attempts,
            timeout=self.timeout,
            **self._fetch_kwargs,
            **kwargs,
        )

    async def list_posts(
        self,
        *,
        page: int = 0,
        limit: int = 10,
        category: str | None = None,
        ascending: bool = False,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {
            "page": page,
            "limit": limit,
            "ascending": "true" if ascending else "false",
        }
        if category:
            params["category"] = category
        response = await self.request("GET", "/api/posts", params=params)
        _raise_for_status(response)
        return response.json()

    async def create_post(
        self, *, title: str, content: str, category: str | None = None
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"title": title, "content": content}
        if category:
            body["category"] = category
        response = await self.request("POST", "/api/posts", json=body)
        _raise_for_status(response)
        return response.json()

    async def health(self, *, timeout: float | None = None) -> httpx.Response:
        """Single GET /health, no retries: the heartbeat counts failures itself."""
        return await self.http.get("/health", timeout=timeout or self.timeout)


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        data = response.json()
    except ValueError:
        data = None
    detail = data.get("detail") if isinstance(data, dict) else None
    message = detail or f"HTTP error! status: {response.status_code}"
    if response.status_code == 400:
        raise ValidationError(message)
    raise InternalError(message)
