"""Unit tests for ConnectionState transitions."""

from braindump.core.state import ConnectionState


def test_initial_state_is_disconnected() -> None:
    state = ConnectionState()
    assert state.connected is False
    assert state.consecutive_failures == 0
    assert state.retry_count == 0


def test_mark_connected_resets_counters() -> None:
    state = ConnectionState(connected=False, consecutive_failures=4, retry_count=7)
    state.mark_connected()
    assert state == ConnectionState(connected=True, consecutive_failures=0, retry_count=0)


def test_mark_disconnected_keeps_counters() -> None:
    state = ConnectionState(connected=True, consecutive_failures=2, retry_count=1)
    state.mark_disconnected()
    assert state == ConnectionState(connected=False, consecutive_failures=2, retry_count=1)
