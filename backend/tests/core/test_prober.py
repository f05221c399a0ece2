"""Unit tests for BackgroundProber: failure streak, threshold and recovery."""

import asyncio

from braindump.core.lifecycle import StorageRuntime
from tests.utils.sleep import FakeClock, GatedSleep
from tests.utils.store import FakePostStore


def test_tick_success_keeps_streak_at_zero() -> None:
    store = FakePostStore()
    runtime = StorageRuntime(store)
    runtime.state.mark_connected()

    assert asyncio.run(runtime.prober.tick()) is True
    assert runtime.state.consecutive_failures == 0
    assert store.ping_calls == 1


def test_tick_probes_first_when_disconnected() -> None:
    """Disconnected: one probe, then the keep-alive query anyway."""
    store = FakePostStore()
    runtime = StorageRuntime(store)

    assert asyncio.run(runtime.prober.tick()) is True
    assert store.ping_calls == 2
    assert runtime.state.connected is True


def test_threshold_starts_exactly_one_chain() -> None:
    """Failures 1 and 2 only log; the 3rd triggers; later failures add no chain."""
    store = FakePostStore(available=False)
    sleep = GatedSleep()
    runtime = StorageRuntime(store, sleep=sleep)

    async def run() -> list[bool]:
        active = []
        for _ in range(6):
            assert await runtime.prober.tick() is False
            await asyncio.sleep(0)
            active.append(runtime.supervisor.active)
        await runtime.supervisor.stop()
        return active

    active = asyncio.run(run())

    assert active == [False, False, True, True, True, True]
    assert sleep.delays == [1]
    assert runtime.state.consecutive_failures == 6
    assert runtime.state.connected is False


def test_success_resets_streak() -> None:
    store = FakePostStore(available=False)
    runtime = StorageRuntime(store)

    async def run() -> None:
        await runtime.prober.tick()
        await runtime.prober.tick()
        assert runtime.state.consecutive_failures == 2
        store.available = True
        assert await runtime.prober.tick() is True

    asyncio.run(run())
    assert runtime.state.consecutive_failures == 0
    assert runtime.state.connected is True
    assert runtime.supervisor.active is False


def test_start_and_stop() -> None:
    runtime = StorageRuntime(FakePostStore(), probe_interval=3600.0)

    async def run() -> None:
        runtime.prober.start()
        assert runtime.prober.running is True
        await runtime.prober.stop()

    asyncio.run(run())
    assert runtime.prober.running is False


class SlowStore(FakePostStore):
    """Each ping takes *duration* seconds on *clock*; records when it started."""

    def __init__(self, clock: FakeClock, duration: float, **kwargs) -> None:
        super().__init__(**kwargs)
        self.clock = clock
        self.duration = duration
        self.ping_times: list[float] = []

    async def ping(self) -> None:
        self.ping_times.append(self.clock.now)
        self.clock.advance(self.duration)
        await super().ping()


def _timed_runtime(store: FakePostStore, clock: FakeClock, **kwargs) -> StorageRuntime:
    return StorageRuntime(
        store, probe_interval=10.0, sleep=clock.sleep, clock=clock, **kwargs
    )


def _run_prober(runtime: StorageRuntime, clock: FakeClock) -> None:
    async def run() -> None:
        runtime.prober.start()
        await clock.wait_exhausted()
        await runtime.prober.stop()

    asyncio.run(run())


def test_timer_runs_ticks_every_interval() -> None:
    clock = FakeClock(max_sleeps=3)
    store = FakePostStore()
    runtime = _timed_runtime(store, clock)
    runtime.state.mark_connected()

    _run_prober(runtime, clock)

    assert clock.sleeps == [10.0, 10.0, 10.0, 10.0]
    assert store.ping_calls == 3


def test_slow_ticks_keep_fixed_period() -> None:
    """Disconnected ticks (probe + ping, 2s each) still start every 10s."""
    clock = FakeClock(max_sleeps=3)
    store = SlowStore(clock, 2.0, available=False)
    runtime = _timed_runtime(store, clock, failure_threshold=100)

    _run_prober(runtime, clock)

    assert store.ping_times == [10.0, 12.0, 20.0, 22.0, 30.0, 32.0]
    assert clock.sleeps == [10.0, 6.0, 6.0, 6.0]
    assert runtime.state.consecutive_failures == 3


def test_overrunning_tick_skips_missed_slot() -> None:
    """A 14s tick on a 10s grid: the next tick waits for the next free slot."""
    clock = FakeClock(max_sleeps=3)
    store = SlowStore(clock, 7.0, available=False)
    runtime = _timed_runtime(store, clock, failure_threshold=100)

    _run_prober(runtime, clock)

    tick_starts = store.ping_times[::2]
    assert tick_starts == [10.0, 30.0, 50.0]
    assert clock.sleeps == [10.0, 6.0, 6.0, 6.0]
