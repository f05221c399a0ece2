"""
Request guard around every storage read and write.

If the pool is known to be disconnected the guard re-probes first and fails
fast with ServiceUnavailable when the probe fails, so requests never queue
behind a dead connection. Nothing is awaited between reading the probe result
and deciding to proceed.

Probes made here do not count towards the prober's failure streak and never
start a reconnection chain.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from braindump.core.errors import BraindumpError, InternalError, ServiceUnavailable
from braindump.core.pool.manager import PoolManager

_log = logging.getLogger(__name__)

T = TypeVar("T")


class RequestGuard:
    def __init__(self, manager: PoolManager) -> None:
        self.manager = manager

    async def run(self, operation: Callable[[], Awaitable[T]], *, name: str = "query") -> T:
        if not self.manager.state.connected:
            if not await self.manager.probe():
                raise ServiceUnavailable()
        try:
            return await operation()
        except BraindumpError:
            raise
        except Exception as e:
            _log.exception("Error running %s", name)
            raise InternalError() from e
