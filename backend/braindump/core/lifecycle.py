"""
StorageRuntime: one object owning the store, the shared ConnectionState and
every component that reads or writes it.

Built once per application (or per test), started in the FastAPI lifespan and
stopped on shutdown so no timer outlives it.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from braindump.core.config import Settings
from braindump.core.guard import RequestGuard
from braindump.core.health import HealthReporter
from braindump.core.pool import BackgroundProber, PoolManager, ReconnectSupervisor
from braindump.core.state import ConnectionState
from braindump.storage import PostStore, build_store

logger = logging.getLogger(__name__)


class StorageRuntime:
    def __init__(
        self,
        store: PostStore,
        *,
        probe_timeout: float = 5.0,
        probe_interval: float = 10.0,
        failure_threshold: int = 3,
        max_attempts: int = 10,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        memory_warning_mb: float = 500.0,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.state = ConnectionState()
        self.manager = PoolManager(store, self.state, probe_timeout=probe_timeout)
        self.supervisor = ReconnectSupervisor(
            self.state,
            self.manager.probe,
            max_attempts=max_attempts,
            base_delay=base_delay,
            max_delay=max_delay,
            sleep=sleep,
        )
        self.manager.supervisor = self.supervisor
        self.prober = BackgroundProber(
            self.manager,
            self.supervisor,
            interval=probe_interval,
            failure_threshold=failure_threshold,
            sleep=sleep,
            clock=clock,
        )
        self.guard = RequestGuard(self.manager)
        self.health = HealthReporter(self.manager, memory_warning_mb=memory_warning_mb)

    @classmethod
    def from_settings(cls, config: Settings) -> "StorageRuntime":
        return cls(
            build_store(config),
            probe_timeout=config.PROBE_TIMEOUT,
            probe_interval=config.PROBE_INTERVAL,
            failure_threshold=config.PROBE_FAILURE_THRESHOLD,
            max_attempts=config.RECONNECT_MAX_ATTEMPTS,
            base_delay=config.RECONNECT_BASE_DELAY,
            max_delay=config.RECONNECT_MAX_DELAY,
            memory_warning_mb=config.MEMORY_WARNING_MB,
        )

    async def start(self) -> None:
        await self.store.open()
        if await self.manager.probe():
            logger.info("Database connected successfully")
        else:
            logger.error("Initial database connection failed")
            self.supervisor.trigger()
        self.prober.start()

    async def stop(self) -> None:
        logger.info("Shutting down, closing connections...")
        await self.prober.stop()
        await self.supervisor.stop()
        await self.store.close()


def build_runtime(config: Settings) -> StorageRuntime:
    return StorageRuntime.from_settings(config)
