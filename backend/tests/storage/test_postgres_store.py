"""Unit tests for PostgresPostStore with a mocked psycopg pool."""

import asyncio
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from psycopg_pool import PoolClosed, PoolTimeout

from braindump.core.errors import ServiceUnavailable
from braindump.storage import PoolStats
from braindump.storage.postgres import (
    INSERT_POST_SQL,
    PostgresPostStore,
    build_list_query,
)


class _Checkout:
    """Stands in for ``pool.connection()``: yields *conn* or raises *error*."""

    def __init__(self, conn: Any = None, error: Exception | None = None) -> None:
        self.conn = conn
        self.error = error

    async def __aenter__(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.conn

    async def __aexit__(self, *exc: object) -> bool:
        return False


def _conn(*, rows: list[dict] | None = None, row: dict | None = None) -> MagicMock:
    cur = MagicMock()
    cur.fetchall = AsyncMock(return_value=rows or [])
    cur.fetchone = AsyncMock(return_value=row)
    conn = MagicMock()
    conn.execute = AsyncMock(return_value=cur)
    return conn


def _pool(checkout: _Checkout) -> MagicMock:
    pool = MagicMock()
    pool.connection.return_value = checkout
    return pool


# --- query building ---


def test_list_query_newest_first() -> None:
    sql, params = build_list_query(page=1, limit=10)
    assert sql == (
        "SELECT id, title, content, category, created_at FROM blog_posts"
        " ORDER BY created_at DESC, id DESC LIMIT %s OFFSET %s"
    )
    assert params == [10, 10]


def test_list_query_with_category_ascending() -> None:
    sql, params = build_list_query(page=2, limit=5, category="question", ascending=True)
    assert " WHERE category = %s " in sql
    assert sql.endswith("ORDER BY created_at ASC, id ASC LIMIT %s OFFSET %s")
    assert params == ["question", 5, 10]


# --- queries ---


def test_list_posts_executes_on_pooled_connection() -> None:
    rows = [{"id": 2, "title": "b"}, {"id": 1, "title": "a"}]
    conn = _conn(rows=rows)
    pool = _pool(_Checkout(conn))
    store = PostgresPostStore(pool, acquire_timeout=5.0)

    assert asyncio.run(store.list_posts(page=0, limit=2)) == rows
    pool.connection.assert_called_once_with(timeout=5.0)
    sql, params = build_list_query(page=0, limit=2)
    conn.execute.assert_awaited_once_with(sql, params)


def test_create_post_returns_inserted_row() -> None:
    row = {"id": 7, "title": "t", "content": "c", "category": "thought"}
    conn = _conn(row=row)
    store = PostgresPostStore(_pool(_Checkout(conn)))

    assert asyncio.run(store.create_post(title="t", content="c", category="thought")) == row
    conn.execute.assert_awaited_once_with(INSERT_POST_SQL, ("t", "c", "thought"))


def test_ping_runs_select_one() -> None:
    conn = _conn(row={"?column?": 1})
    store = PostgresPostStore(_pool(_Checkout(conn)))
    asyncio.run(store.ping())
    conn.execute.assert_awaited_once_with("SELECT 1")


@pytest.mark.parametrize(
    "error",
    [PoolTimeout("couldn't get a connection after 5.00 sec"), PoolClosed("the pool is closed")],
)
def test_checkout_failures_are_service_unavailable(error: Exception) -> None:
    store = PostgresPostStore(_pool(_Checkout(error=error)))
    with pytest.raises(ServiceUnavailable) as exc_info:
        asyncio.run(store.list_posts(page=0, limit=10))
    assert exc_info.value.__cause__ is error


def test_driver_errors_propagate() -> None:
    conn = MagicMock()
    conn.execute = AsyncMock(side_effect=RuntimeError("syntax error"))
    store = PostgresPostStore(_pool(_Checkout(conn)))
    with pytest.raises(RuntimeError):
        asyncio.run(store.list_posts(page=0, limit=10))


# --- pool bookkeeping ---


def test_stats_maps_pool_counters() -> None:
    pool = MagicMock()
    pool.get_stats.return_value = {
        "pool_min": 1,
        "pool_max": 20,
        "pool_size": 5,
        "pool_available": 3,
        "requests_waiting": 2,
    }
    assert PostgresPostStore(pool).stats() == PoolStats(total=5, idle=3, waiting=2)


def test_open_does_not_wait_for_connections() -> None:
    pool = MagicMock()
    pool.open = AsyncMock()
    pool.close = AsyncMock()
    store = PostgresPostStore(pool)

    async def run() -> None:
        await store.open()
        await store.close()

    asyncio.run(run())
    pool.open.assert_awaited_once_with(wait=False)
    pool.close.assert_awaited_once()


def test_missing_pool_raises() -> None:
    with pytest.raises(RuntimeError):
        PostgresPostStore().stats()


def test_reconnect_failed_reaches_error_handler() -> None:
    store = PostgresPostStore(MagicMock())
    received: list[BaseException] = []
    store.set_error_handler(received.append)

    store._on_reconnect_failed(SimpleNamespace(name="braindump"))

    assert len(received) == 1
    assert isinstance(received[0], ConnectionError)
