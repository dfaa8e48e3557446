import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from daystrip.core.errors import PersistenceError  # noqa: E402
from daystrip.core.event_store import EventStore  # noqa: E402
from daystrip.infra.event_storage import MemoryEventStorage  # noqa: E402


class FailingStorage(MemoryEventStorage):
    """Memory storage whose writes can be switched to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def write(self, events) -> None:
        if self.fail:
            raise PersistenceError("disk full")
        super().write(events)


@pytest.fixture
def storage() -> MemoryEventStorage:
    return MemoryEventStorage()


@pytest.fixture
def store(storage: MemoryEventStorage) -> EventStore:
    event_store = EventStore(storage, rng=random.Random(7))
    event_store.load()
    return event_store


@pytest.fixture
def failing_storage() -> FailingStorage:
    return FailingStorage()
