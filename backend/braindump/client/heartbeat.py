"""
Client heartbeat driving the connection-status indicator.

Independent of server-side probing: calls GET /health every ``interval``
seconds. Any success shows "connected" and resets the failure count; failures
below the threshold show "reconnecting"; at the threshold the indicator shows
"disconnected" and the next beat comes after ``fast_retry_interval`` instead.
Beats start on a fixed grid from the previous scheduled beat, so a slow
response does not stretch the period.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from enum import Enum

import httpx

from braindump.core.errors import BraindumpError, TransportError
from braindump.core.timing import next_slot

from .api import BlogApiClient

_log = logging.getLogger(__name__)


class ConnectionStatus(str, Enum):
    UNKNOWN = "unknown"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    DISCONNECTED = "disconnected"


INDICATOR_LABELS = {
    ConnectionStatus.UNKNOWN: "",
    ConnectionStatus.CONNECTED: "● Connected",
    ConnectionStatus.RECONNECTING: "● Reconnecting...",
    ConnectionStatus.DISCONNECTED: "● Disconnected",
}


class Heartbeat:
    def __init__(
        self,
        api: BlogApiClient,
        *,
        interval: float = 10.0,
        fast_retry_interval: float = 2.0,
        failure_threshold: int = 3,
        timeout: float = 10.0,
        on_status_change: Callable[[ConnectionStatus], None] | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.api = api
        self.interval = interval
        self.fast_retry_interval = fast_retry_interval
        self.failure_threshold = failure_threshold
        self.timeout = timeout
        self.status = ConnectionStatus.UNKNOWN
        self.failures = 0
        self._on_status_change = on_status_change
        self._sleep = sleep
        self._clock = clock
        self._task: asyncio.Task[None] | None = None

    @property
    def label(self) -> str:
        return INDICATOR_LABELS[self.status]

    def next_delay(self) -> float:
        if self.status == ConnectionStatus.DISCONNECTED:
            return self.fast_retry_interval
        return self.interval

    async def beat(self) -> ConnectionStatus:
        try:
            response = await self.api.health(timeout=self.timeout)
            if not response.is_success:
                raise TransportError(f"HTTP {response.status_code}")
            _log.debug("Heartbeat: %s", response.text)
        except (httpx.HTTPError, BraindumpError) as e:
            self.failures += 1
            _log.warning(
                "Heartbeat failed (%d/%d): %s",
                self.failures,
                self.failure_threshold,
                str(e) or type(e).__name__,
            )
            if self.failures >= self.failure_threshold:
                self._set_status(ConnectionStatus.DISCONNECTED)
            else:
                self._set_status(ConnectionStatus.RECONNECTING)
            return self.status

        self.failures = 0
        self._set_status(ConnectionStatus.CONNECTED)
        return self.status

    def start(self) -> None:
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="braindump-heartbeat"
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
        await self.beat()
        while True:
            slot = next_slot(slot, self.next_delay(), self._clock())
            await self._sleep(max(0.0, slot - self._clock()))
            await self.beat()

    def _set_status(self, status: ConnectionStatus) -> None:
        changed = status != self.status
        self.status = status
        if changed and self._on_status_change is not None:
            self._on_status_change(status)
