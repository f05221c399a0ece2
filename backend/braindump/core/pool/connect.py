"""
Connection pool construction for the local Postgres store.

Uses psycopg 3 and psycopg_pool.AsyncConnectionPool. Idle connections are kept
open and warm with TCP keepalives; drops on the server side are only noticed
by the probe query (see core.pool.manager).
"""

import math
from collections.abc import Callable
from typing import Any

from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from braindump.core.config import Settings


def build_conninfo(config: Settings) -> str:
    """libpq connection string with keepalives on and a bounded connect timeout."""
    return make_conninfo(
        host=config.POSTGRES_SERVER,
        port=config.POSTGRES_PORT,
        dbname=config.POSTGRES_DB,
        user=config.POSTGRES_USER,
        password=config.POSTGRES_PASSWORD,
        connect_timeout=max(1, math.ceil(config.DB_POOL_ACQUIRE_TIMEOUT)),
        keepalives=1,
        keepalives_idle=config.DB_TCP_KEEPALIVE_IDLE,
        application_name="braindump",
    )


def create_pool(
    config: Settings,
    *,
    reconnect_failed: Callable[[Any], None] | None = None,
) -> AsyncConnectionPool:
    """
    Build (but do not open) the shared pool.

    - timeout: how long a request may queue for a connection before PoolTimeout.
    - check: connections are verified on checkout, broken ones are replaced.
    - reconnect_failed: called when the pool gives up refilling itself; this
      is the pool-level error event that starts a reconnection chain.
    """
    return AsyncConnectionPool(
        build_conninfo(config),
        min_size=config.DB_POOL_MIN_SIZE,
        max_size=config.DB_POOL_MAX_SIZE,
        timeout=config.DB_POOL_ACQUIRE_TIMEOUT,
        max_idle=config.DB_POOL_MAX_IDLE,
        max_lifetime=config.DB_POOL_MAX_LIFETIME,
        reconnect_timeout=config.DB_POOL_RECONNECT_TIMEOUT,
        reconnect_failed=reconnect_failed,
        check=AsyncConnectionPool.check_connection,
        kwargs={"row_factory": dict_row},
        name="braindump",
        open=False,
    )
