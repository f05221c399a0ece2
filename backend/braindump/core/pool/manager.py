"""
Owner of the storage pool and of the shared ConnectionState.

probe() is the only way the ``connected`` flag becomes true. Failure counters
are left to the callers: the background prober keeps the streak that starts
reconnection, request-driven probes never touch it.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from braindump.core.state import ConnectionState
from braindump.storage.base import PoolStats, PostStore

if TYPE_CHECKING:
    from .supervisor import ReconnectSupervisor

_log = logging.getLogger(__name__)


class PoolManager:
    """Wraps a PostStore with a bounded probe and pool error handling."""

    def __init__(
        self,
        store: PostStore,
        state: ConnectionState,
        *,
        probe_timeout: float = 5.0,
    ) -> None:
        self.store = store
        self.state = state
        self.supervisor: "ReconnectSupervisor | None" = None
        self._probe_timeout = probe_timeout
        store.set_error_handler(self.handle_pool_error)

    async def ping(self) -> None:
        """Raw liveness query with the probe timeout. Raises; does not touch state."""
        await asyncio.wait_for(self.store.ping(), timeout=self._probe_timeout)

    async def probe(self) -> bool:
        """Ping storage and record the result in ConnectionState."""
        try:
            await self.ping()
        except Exception as e:
            self.state.mark_disconnected()
            _log.debug("Probe failed: %r", e)
            return False
        self.state.mark_connected()
        return True

    def stats(self) -> PoolStats:
        """Best-effort snapshot; never raises."""
        try:
            return self.store.stats()
        except Exception:
            _log.debug("Pool stats unavailable", exc_info=True)
            return PoolStats()

    def handle_pool_error(self, exc: BaseException) -> None:
        """Pool-level error event: mark disconnected and start a backoff chain."""
        _log.error("Unexpected pool error: %s", exc)
        self.state.mark_disconnected()
        if self.supervisor is not None:
            self.supervisor.trigger()
