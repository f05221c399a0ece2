from dataclasses import dataclass


@dataclass
class ConnectionState:
    """
    Shared view of storage reachability.

    Owned by a StorageRuntime and passed to the pool manager, guard, health
    reporter, prober and supervisor. Only touched from the event loop thread,
    so no locking.
    """

    connected: bool = False
    consecutive_failures: int = 0
    retry_count: int = 0

    def mark_connected(self) -> None:
        self.connected = True
        self.retry_count = 0
        self.consecutive_failures = 0

    def mark_disconnected(self) -> None:
        self.connected = False
