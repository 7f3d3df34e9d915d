"""Shared fixtures: an in-memory publisher with a fixed per-batch capacity."""

from __future__ import annotations

from typing import Any, List, Optional, Set

import pytest
from loguru import logger

from eventhub_sender.core.events import Event


class FakeBatch:
    """Batch that holds at most `capacity` events."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self.events: List[Event] = []
        self.sent = False

    @property
    def size(self) -> int:
        return len(self.events)

    def try_add(self, event: Event) -> bool:
        if self.sent:
            raise AssertionError("event added to a batch that was already sent")
        if len(self.events) >= self.capacity:
            return False
        self.events.append(event)
        return True


class FakePublisher:
    """Publisher double recording every call.

    Args:
        capacity: Events per batch
        fail_sends: 0-based send call numbers that raise
        fail_open_at: 0-based open_batch call number that raises
        fail_close: Raise from close()
        fail_add_at: try_add call number (0-based, across batches) that raises
    """

    def __init__(
        self,
        capacity: int = 10,
        fail_sends: Optional[Set[int]] = None,
        fail_open_at: Optional[int] = None,
        fail_close: bool = False,
        fail_add_at: Optional[int] = None,
    ):
        self.capacity = capacity
        self.fail_sends = fail_sends or set()
        self.fail_open_at = fail_open_at
        self.fail_close = fail_close
        self.fail_add_at = fail_add_at

        self.opened: List[FakeBatch] = []
        self.sent: List[FakeBatch] = []
        self.send_calls = 0
        self.add_calls = 0
        self.close_calls = 0
        self.calls: List[str] = []

    def open_batch(self) -> FakeBatch:
        self.calls.append("open_batch")
        if self.fail_open_at is not None and len(self.opened) == self.fail_open_at:
            raise ConnectionError("could not create batch")
        batch = _CountingBatch(self, self.capacity)
        self.opened.append(batch)
        return batch

    def send(self, batch: FakeBatch) -> None:
        self.calls.append("send")
        call = self.send_calls
        self.send_calls += 1
        if batch.sent:
            raise AssertionError("batch sent twice")
        batch.sent = True
        if call in self.fail_sends:
            raise ConnectionError(f"send {call} failed")
        self.sent.append(batch)

    def close(self) -> None:
        self.calls.append("close")
        self.close_calls += 1
        if self.fail_close:
            raise RuntimeError("close failed")

    def sent_sizes(self) -> List[int]:
        return [batch.size for batch in self.sent]


class _CountingBatch(FakeBatch):
    """FakeBatch that reports every add to its publisher."""

    def __init__(self, publisher: FakePublisher, capacity: int):
        super().__init__(capacity)
        self._publisher = publisher

    def try_add(self, event: Event) -> bool:
        call = self._publisher.add_calls
        self._publisher.add_calls += 1
        if self._publisher.fail_add_at is not None and call == self._publisher.fail_add_at:
            raise RuntimeError("unexpected add failure")
        return super().try_add(event)


class FakeFactory:
    """Publisher factory that hands out one preconfigured FakePublisher."""

    def __init__(self, publisher: Optional[FakePublisher] = None, error: Optional[Exception] = None):
        self.publisher = publisher or FakePublisher()
        self.error = error
        self.targets: List[Any] = []

    def __call__(self, connection_string: str, eventhub_name: str) -> FakePublisher:
        self.targets.append((connection_string, eventhub_name))
        if self.error is not None:
            raise self.error
        return self.publisher

    @property
    def acquisitions(self) -> int:
        return len(self.targets)


CONNECTION_STRING = "Endpoint=sb://example.servicebus.windows.net/;SharedAccessKeyName=send;SharedAccessKey=abc123"


@pytest.fixture
def connection_string() -> str:
    return CONNECTION_STRING


@pytest.fixture
def log_messages():
    """Capture loguru records as 'LEVEL message' strings."""
    messages: List[str] = []
    handler_id = logger.add(lambda msg: messages.append(f"{msg.record['level'].name} {msg.record['message']}"), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "EVENTHUB_CONNECTION_STRING",
        "EVENTHUB_NAME",
        "EVENTHUB_SENDER_LOG_LEVEL",
        "EVENTHUB_SENDER_FILE_LOG_LEVEL",
        "EVENTHUB_SENDER_LOG_FILE",
        "EVENTHUB_SENDER_LOG_ROTATION",
        "EVENTHUB_SENDER_LOG_RETENTION",
    ):
        monkeypatch.delenv(name, raising=False)
