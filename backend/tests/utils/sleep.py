"""Injectable sleep callables for backoff and timer tests."""

import asyncio


class RecordingSleep:
    """Records requested delays and returns at once (after yielding to the loop)."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


class GatedSleep:
    """Records requested delays; blocks every sleeper until ``open()`` is called."""

    def __init__(self) -> None:
        self.delays: list[float] = []
        self._opened = False
        self._gate: asyncio.Event | None = None

    def open(self) -> None:
        self._opened = True
        if self._gate is not None:
            self._gate.set()

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self._opened:
            await asyncio.sleep(0)
            return
        if self._gate is None:
            self._gate = asyncio.Event()
        await self._gate.wait()


class FakeClock:
    """
    Manual monotonic clock. ``sleep`` advances it instead of waiting.

    With ``max_sleeps`` set, the sleep call after that many blocks forever and
    wakes ``wait_exhausted()``, so a timer loop can be stopped at a known point.
    """

    def __init__(self, start: float = 0.0, *, max_sleeps: int | None = None) -> None:
        self.now = start
        self.sleeps: list[float] = []
        self.max_sleeps = max_sleeps
        self._exhausted: asyncio.Event | None = None

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        if self.max_sleeps is not None and len(self.sleeps) > self.max_sleeps:
            self._event().set()
            await asyncio.Event().wait()
        self.now += delay
        await asyncio.sleep(0)

    async def wait_exhausted(self) -> None:
        await self._event().wait()

    def _event(self) -> asyncio.Event:
        if self._exhausted is None:
            self._exhausted = asyncio.Event()
        return self._exhausted
