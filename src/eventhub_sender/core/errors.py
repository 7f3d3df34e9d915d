"""Error taxonomy for the batch sender."""

from __future__ import annotations

from typing import Optional


class SendError(Exception):
    """Base class for every error raised by eventhub_sender."""


class InvalidArgument(SendError, ValueError):
    """A send request failed validation. Raised before any publisher is acquired."""


class PayloadTooLarge(SendError):
    """A single event does not fit into an empty batch."""

    def __init__(self, payload_size: int, index: int):
        self.payload_size = payload_size
        self.index = index
        super().__init__(f"Event at index {index} ({payload_size} bytes) does not fit into an empty batch")


class BatchSendError(SendError):
    """One batch failed to transmit. Non-fatal: the run continues with the next batch."""

    def __init__(self, batch_size: int, start_index: int, cause: Optional[BaseException] = None):
        self.batch_size = batch_size
        self.start_index = start_index
        self.cause = cause
        super().__init__(f"Failed to send batch of {batch_size} events starting at index {start_index}: {cause}")


class ReleaseError(SendError):
    """Closing the publisher failed."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Error closing the producer: {cause}")
