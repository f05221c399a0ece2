"""
Reconnection with capped exponential backoff.

One chain at a time: a trigger while a chain is running is a no-op. A chain
ends either when a probe succeeds (IDLE) or after max_attempts failures
(GIVEN_UP). Giving up is logged and the process keeps serving degraded; the
background prober still probes every tick, and any successful probe resets
retry_count so a later trigger can start a fresh chain.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from braindump.core.state import ConnectionState

_log = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[object]]


class SupervisorPhase(str, Enum):
    IDLE = "idle"
    BACKOFF = "backoff"
    GIVEN_UP = "given_up"


def backoff_delay(attempt: int, *, base_delay: float = 1.0, max_delay: float = 60.0) -> float:
    """Delay before 1-indexed *attempt*: min(base * 2^(attempt-1), max)."""
    return min(base_delay * 2 ** (attempt - 1), max_delay)


class ReconnectSupervisor:
    def __init__(
        self,
        state: ConnectionState,
        probe: Callable[[], Awaitable[bool]],
        *,
        max_attempts: int = 10,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.state = state
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.phase = SupervisorPhase.IDLE
        self._probe = probe
        self._sleep = sleep
        self._task: asyncio.Task[bool] | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self) -> bool:
        """Start a backoff chain unless one is running. Returns True if started."""
        if self.active:
            _log.debug("Reconnection already in progress; trigger ignored")
            return False
        if self.state.retry_count >= self.max_attempts:
            self._give_up()
            return False
        self.phase = SupervisorPhase.BACKOFF
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="braindump-reconnect"
        )
        return True

    async def wait(self) -> bool | None:
        """Wait for the current chain; None when no chain was started."""
        if self._task is None:
            return None
        return await self._task

    async def stop(self) -> None:
        if self._task is None or self._task.done():
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> bool:
        while self.state.retry_count < self.max_attempts:
            attempt = self.state.retry_count + 1
            delay = backoff_delay(
                attempt, base_delay=self.base_delay, max_delay=self.max_delay
            )
            self.state.retry_count = attempt
            _log.info(
                "Attempting database reconnection %d/%d in %.0fs...",
                attempt,
                self.max_attempts,
                delay,
            )
            await self._sleep(delay)
            if await self._probe():
                _log.info("Database reconnection successful")
                self.phase = SupervisorPhase.IDLE
                return True
        self._give_up()
        return False

    def _give_up(self) -> None:
        self.phase = SupervisorPhase.GIVEN_UP
        _log.error(
            "Max reconnection attempts reached (%d); continuing in degraded mode",
            self.max_attempts,
        )
