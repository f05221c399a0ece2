"""
Health reporter behind GET /health.

Database: one probe (updates ConnectionState like any other probe); failure
makes the overall status DEGRADED and the HTTP code 503.
Memory: resident set size against a fixed threshold; exceeding it is only a
warning and does not change the overall status.
Connections: pool counters at the time of the call, best effort.
"""

import logging
import time
from datetime import datetime, timezone

import psutil

from braindump.core.pool.manager import PoolManager
from braindump.schemas import (
    ConnectionStats,
    DatabaseCheck,
    HealthChecks,
    HealthStatus,
    MemoryCheck,
    OverallStatus,
)

logger = logging.getLogger(__name__)


def memory_usage_mb() -> float:
    """Resident set size of this process in MB."""
    return psutil.Process().memory_info().rss / 1024 / 1024


def process_uptime() -> float:
    """Seconds since this process was started."""
    return max(0.0, time.time() - psutil.Process().create_time())


class HealthReporter:
    def __init__(self, manager: PoolManager, *, memory_warning_mb: float = 500.0) -> None:
        self.manager = manager
        self.memory_warning_mb = memory_warning_mb

    async def report(self) -> HealthStatus:
        status = OverallStatus.OK

        if await self.manager.probe():
            database = DatabaseCheck.HEALTHY
        else:
            database = DatabaseCheck.UNHEALTHY
            status = OverallStatus.DEGRADED
            logger.error("Health check database error")

        usage: int | None = None
        used_mb = memory_usage_mb()
        if used_mb > self.memory_warning_mb:
            memory = MemoryCheck.WARNING
            usage = round(used_mb)
        else:
            memory = MemoryCheck.HEALTHY

        pool = self.manager.stats()
        return HealthStatus(
            status=status,
            timestamp=datetime.now(timezone.utc),
            uptime=round(process_uptime(), 3),
            checks=HealthChecks(
                database=database,
                memory=memory,
                connections=ConnectionStats(
                    total=pool.total, idle=pool.idle, waiting=pool.waiting
                ),
            ),
            memory_usage_mb=usage,
        )


def status_code_for(health: HealthStatus) -> int:
    return 200 if health.status == OverallStatus.OK else 503
