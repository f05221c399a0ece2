"""
Liveness query for a single pooled connection.
"""

from typing import Any

PROBE_SQL = "SELECT 1"


async def ping(conn: Any) -> None:
    """Run SELECT 1 on *conn*. Raises whatever the driver raises."""
    cur = await conn.execute(PROBE_SQL)
    await cur.fetchone()
