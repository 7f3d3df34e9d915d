"""Publisher module for transmitting batches to Azure Event Hubs."""

from .base import Batch, Publisher, PublisherFactory
from .eventhub_publisher import EventHubBatch, EventHubPublisher, create_eventhub_publisher

__all__ = ["Batch", "Publisher", "PublisherFactory", "EventHubBatch", "EventHubPublisher", "create_eventhub_publisher"]
