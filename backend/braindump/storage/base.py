"""
Storage contract shared by the local Postgres store and the hosted REST store.

The resilience layer (pool manager, guard, prober, supervisor) only talks to
this protocol, so both backends recover the same way.
"""

from collections.abc import Callable
from typing import Any, NamedTuple, Protocol

ErrorHandler = Callable[[BaseException], None]


class PoolStats(NamedTuple):
    """Connection counts at the instant of the call; not a guarantee for callers."""

    total: int = 0
    idle: int = 0
    waiting: int = 0


class PostStore(Protocol):
    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def ping(self) -> None:
        """Run the liveness query. Raises on failure."""
        ...

    async def list_posts(
        self,
        *,
        page: int,
        limit: int,
        category: str | None = None,
        ascending: bool = False,
    ) -> list[dict[str, Any]]: ...

    async def create_post(
        self, *, title: str, content: str, category: str
    ) -> dict[str, Any]: ...

    def stats(self) -> PoolStats: ...

    def set_error_handler(self, handler: ErrorHandler | None) -> None:
        """Register the callback for asynchronous pool-level failures."""
        ...
