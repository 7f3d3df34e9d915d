"""Azure Event Hubs publisher for transmitting event batches.

This module adapts the azure-eventhub producer client to the Publisher
interface: batches are created by the SDK, which enforces the hub's
message-size limit, and each batch is sent with a single call.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Any, Dict, Optional

from azure.eventhub import EventData, EventDataBatch, EventHubProducerClient
from loguru import logger

from ..core.events import Event


class EventHubBatch:
    """Batch backed by an SDK EventDataBatch."""

    def __init__(self, data_batch: EventDataBatch):
        self.data_batch = data_batch

    @property
    def size(self) -> int:
        return len(self.data_batch)

    @property
    def size_in_bytes(self) -> int:
        return self.data_batch.size_in_bytes

    def try_add(self, event: Event) -> bool:
        # The SDK raises ValueError once the size limit would be exceeded
        try:
            self.data_batch.add(EventData(event.body))
        except ValueError:
            return False
        return True


class EventHubPublisher:
    """Publisher bound to one Event Hub."""

    def __init__(self, producer: EventHubProducerClient, eventhub_name: str = ""):
        """Initialize the publisher.

        Args:
            producer: Producer client for the target hub
            eventhub_name: Hub name, used for logging only
        """
        self.producer = producer
        self.eventhub_name = eventhub_name
        self._closed = False

        # Statistics
        self._total_batches_opened = 0
        self._total_batches_sent = 0
        self._total_events_sent = 0
        self._total_send_time = 0.0
        self._last_successful_send: Optional[datetime] = None

    @classmethod
    def from_target(cls, connection_string: str, eventhub_name: str) -> "EventHubPublisher":
        """Create a publisher from a connection string and hub name."""
        producer = EventHubProducerClient.from_connection_string(conn_str=connection_string, eventhub_name=eventhub_name)
        logger.debug(f"Created producer client for event hub '{eventhub_name}'")
        return cls(producer, eventhub_name)

    def open_batch(self) -> EventHubBatch:
        batch = EventHubBatch(self.producer.create_batch())
        self._total_batches_opened += 1
        return batch

    def send(self, batch: EventHubBatch) -> None:
        """Send one batch. SDK errors propagate to the caller."""
        start_time = time.time()

        self.producer.send_batch(batch.data_batch)

        send_time = time.time() - start_time
        self._total_send_time += send_time
        self._total_batches_sent += 1
        self._total_events_sent += batch.size
        self._last_successful_send = datetime.now()

        logger.debug(f"Sent batch with {batch.size} events ({batch.size_in_bytes} bytes) in {send_time:.2f}s")

    def close(self) -> None:
        if self._closed:
            raise RuntimeError(f"Producer for '{self.eventhub_name}' is already closed")

        self._closed = True
        self.producer.close()
        logger.debug(f"Closed producer for event hub '{self.eventhub_name}'")

    def get_stats(self) -> Dict[str, Any]:
        """Get publisher statistics."""
        return {
            "eventhub_name": self.eventhub_name,
            "closed": self._closed,
            "total_batches_opened": self._total_batches_opened,
            "total_batches_sent": self._total_batches_sent,
            "total_events_sent": self._total_events_sent,
            "average_send_time_seconds": self._total_send_time / max(1, self._total_batches_sent),
            "last_successful_send": self._last_successful_send.isoformat() if self._last_successful_send else None,
        }


def create_eventhub_publisher(connection_string: str, eventhub_name: str) -> EventHubPublisher:
    """Default publisher factory used by the command-line tool."""
    return EventHubPublisher.from_target(connection_string, eventhub_name)
