"""
Periodic keep-alive probing of the storage pool.

Each tick re-probes when disconnected, then runs the liveness query anyway.
This keeps idle connections warm and catches connections the peer dropped
silently. ``failure_threshold`` failures in a row mark the state disconnected
and trigger the reconnection supervisor; this and pool error events are the
only ways a backoff chain starts.

Ticks start on a fixed grid (start + k * interval); a slow tick does not push
the next one back, and slots a tick overran are skipped, never run twice.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from braindump.core.timing import next_slot

from .manager import PoolManager
from .supervisor import ReconnectSupervisor

_log = logging.getLogger(__name__)


class BackgroundProber:
    def __init__(
        self,
        manager: PoolManager,
        supervisor: ReconnectSupervisor,
        *,
        interval: float = 10.0,
        failure_threshold: int = 3,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.manager = manager
        self.supervisor = supervisor
        self.interval = interval
        self.failure_threshold = failure_threshold
        self._sleep = sleep
        self._clock = clock
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> bool:
        """Run one probe cycle. Returns True when the liveness query succeeded."""
        state = self.manager.state
        if not state.connected:
            await self.manager.probe()
        try:
            await self.manager.ping()
        except Exception as e:
            state.consecutive_failures += 1
            _log.error(
                "Keep-alive: database ping failed (%d/%d): %s",
                state.consecutive_failures,
                self.failure_threshold,
                str(e) or type(e).__name__,
            )
            if state.consecutive_failures >= self.failure_threshold:
                _log.error(
                    "Multiple keep-alive failures detected, attempting reconnection..."
                )
                state.mark_disconnected()
                self.supervisor.trigger()
            return False
        state.consecutive_failures = 0
        _log.debug("Keep-alive: database ping successful")
        return True

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="braindump-prober"
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        slot = self._clock()
        while True:
            slot = next_slot(slot, self.interval, self._clock())
            await self._sleep(max(0.0, slot - self._clock()))
            try:
                await self.tick()
            except Exception:
                _log.exception("Keep-alive tick crashed")
