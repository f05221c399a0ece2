from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from braindump.core.lifecycle import StorageRuntime
from tests.utils.app import running_app
from tests.utils.store import FakePostStore


@pytest.fixture
def store() -> FakePostStore:
    return FakePostStore()


@pytest.fixture
def runtime(store: FakePostStore) -> StorageRuntime:
    # Background ticks are driven explicitly in tests, never by the timer.
    return StorageRuntime(store, probe_interval=3600.0)


@pytest.fixture
def client(runtime: StorageRuntime) -> Generator[TestClient, None, None]:
    with running_app(runtime) as c:
        yield c
