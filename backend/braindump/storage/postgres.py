"""
Post store backed by the local Postgres database.

Reuses one long-lived psycopg AsyncConnectionPool for every request.
Acquisition timeouts and a closed pool surface as ServiceUnavailable; any
other driver error propagates and is mapped by the request guard.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from psycopg_pool import AsyncConnectionPool, PoolClosed, PoolTimeout

from braindump.core.config import Settings
from braindump.core.errors import ServiceUnavailable
from braindump.core.pool.connect import create_pool
from braindump.core.pool.health import ping

from .base import ErrorHandler, PoolStats

_log = logging.getLogger(__name__)

_POST_COLUMNS = "id, title, content, category, created_at"


def build_list_query(
    *,
    page: int,
    limit: int,
    category: str | None = None,
    ascending: bool = False,
) -> tuple[str, list[Any]]:
    """Return (sql, params) for one page of posts, newest first unless *ascending*."""
    order = "ASC" if ascending else "DESC"
    sql = f"SELECT {_POST_COLUMNS} FROM blog_posts"
    params: list[Any] = []
    if category:
        sql += " WHERE category = %s"
        params.append(category)
    sql += f" ORDER BY created_at {order}, id {order} LIMIT %s OFFSET %s"
    params.extend([limit, page * limit])
    return sql, params


INSERT_POST_SQL = (
    "INSERT INTO blog_posts (title, content, category, created_at) "
    f"VALUES (%s, %s, %s, NOW()) RETURNING {_POST_COLUMNS}"
)


class PostgresPostStore:
    def __init__(
        self,
        pool: AsyncConnectionPool | None = None,
        *,
        acquire_timeout: float = 5.0,
    ) -> None:
        self._pool = pool
        self._acquire_timeout = acquire_timeout
        self._error_handler: ErrorHandler | None = None

    @classmethod
    def from_settings(cls, config: Settings) -> "PostgresPostStore":
        store = cls(acquire_timeout=config.DB_POOL_ACQUIRE_TIMEOUT)
        store._pool = create_pool(config, reconnect_failed=store._on_reconnect_failed)
        return store

    @property
    def pool(self) -> AsyncConnectionPool:
        if self._pool is None:
            raise RuntimeError("PostgresPostStore has no pool")
        return self._pool

    async def open(self) -> None:
        # Do not wait for the first connection: an unreachable database at
        # startup is handled by the reconnection supervisor, not by crashing.
        await self.pool.open(wait=False)

    async def close(self) -> None:
        await self.pool.close()

    async def ping(self) -> None:
        async with self._connection() as conn:
            await ping(conn)

    async def list_posts(
        self,
        *,
        page: int,
        limit: int,
        category: str | None = None,
        ascending: bool = False,
    ) -> list[dict[str, Any]]:
        sql, params = build_list_query(
            page=page, limit=limit, category=category, ascending=ascending
        )
        async with self._connection() as conn:
            cur = await conn.execute(sql, params)
            return list(await cur.fetchall())

    async def create_post(
        self, *, title: str, content: str, category: str
    ) -> dict[str, Any]:
        async with self._connection() as conn:
            cur = await conn.execute(INSERT_POST_SQL, (title, content, category))
            row = await cur.fetchone()
        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row")
        return row

    def stats(self) -> PoolStats:
        s = self.pool.get_stats()
        return PoolStats(
            total=s.get("pool_size", 0),
            idle=s.get("pool_available", 0),
            waiting=s.get("requests_waiting", 0),
        )

    def set_error_handler(self, handler: ErrorHandler | None) -> None:
        self._error_handler = handler

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[Any]:
        try:
            async with self.pool.connection(timeout=self._acquire_timeout) as conn:
                yield conn
        except PoolTimeout as e:
            raise ServiceUnavailable(
                "Database temporarily unavailable (connection acquisition timed out)"
            ) from e
        except PoolClosed as e:
            raise ServiceUnavailable("Database pool is closed") from e

    def _on_reconnect_failed(self, pool: Any) -> None:
        _log.error("Pool %s failed to reconnect", getattr(pool, "name", "?"))
        if self._error_handler is not None:
            self._error_handler(ConnectionError("connection pool failed to reconnect"))
