"""Publisher and batch interfaces used by the batch sender."""

from __future__ import annotations

from typing import Callable, Protocol

from ..core.events import Event


class Batch(Protocol):
    """A bounded collection of events assembled before one transmission."""

    @property
    def size(self) -> int:
        """Number of events currently in the batch."""
        ...

    def try_add(self, event: Event) -> bool:
        """Append the event if it fits. Returns False, leaving the batch untouched, if it does not."""
        ...


class Publisher(Protocol):
    """Creates batches, enforces their capacity and transmits them."""

    def open_batch(self) -> Batch:
        """Allocate a new empty batch bound to the target."""
        ...

    def send(self, batch: Batch) -> None:
        """Transmit the batch. Raises on failure."""
        ...

    def close(self) -> None:
        """Release connection resources. Called exactly once."""
        ...


# Builds a publisher for (connection_string, eventhub_name)
PublisherFactory = Callable[[str, str], Publisher]
