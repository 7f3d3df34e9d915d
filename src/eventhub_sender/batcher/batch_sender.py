"""Batch sender for packing copies of one payload into broker-sized batches.

The sender offers events to the current batch in index order. When the
publisher reports the batch is full, that batch is sent and a fresh one is
started with the event that did not fit. The trailing partial batch is sent
once the requested count is exhausted.

Per-batch send failures are logged and counted but never stop the run.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from loguru import logger

from ..config.settings import SendRequest
from ..core.errors import BatchSendError, InvalidArgument, PayloadTooLarge, ReleaseError
from ..core.events import Event, Payload, SendReport
from ..publisher.base import Batch, Publisher, PublisherFactory
from ..publisher.eventhub_publisher import create_eventhub_publisher


class BatchSender:
    """Publishes N identical events through a publisher in size-bounded batches."""

    def __init__(self, publisher_factory: PublisherFactory = create_eventhub_publisher):
        """Initialize the batch sender.

        Args:
            publisher_factory: Builds a publisher from (connection_string, eventhub_name)
        """
        self.publisher_factory = publisher_factory

    def send(
        self,
        connection_string: str,
        eventhub_name: str,
        message_count: int,
        payload: Payload,
        verbose: bool = False,
    ) -> SendReport:
        """Validate loose arguments into a SendRequest and run it.

        Raises:
            InvalidArgument: if the arguments fail validation
        """
        request = SendRequest.create(
            connection_string=connection_string,
            eventhub_name=eventhub_name,
            message_count=message_count,
            payload=payload,
            verbose=verbose,
        )
        return self.run(request)

    def run(self, request: SendRequest) -> SendReport:
        """Send `request.message_count` copies of the payload.

        Args:
            request: Validated send request

        Returns:
            Report of the run. A fatal error is stored in `error` and a
            publisher close failure in `release_error`; neither is raised.

        Raises:
            InvalidArgument: if `request` is not a SendRequest
        """
        if not isinstance(request, SendRequest):
            raise InvalidArgument(f"Expected a SendRequest, got {type(request).__name__}")

        report = SendReport(events_requested=request.message_count)
        logger.debug(f"Starting run: {request.describe()}")

        try:
            publisher = self.publisher_factory(*request.target)
        except Exception as e:
            logger.error(f"Error creating the producer: {e}")
            report.error = e
            report.finished_at = datetime.now()
            return report

        try:
            self._send_all(publisher, request, report)
        except Exception as e:
            logger.error(f"Error sending events: {e}")
            report.error = e
        finally:
            report.release_error = self._release(publisher)
            report.finished_at = datetime.now()

        logger.debug(
            f"Run finished - Sent: {report.events_sent}/{report.events_requested} events, "
            f"Batches sent: {report.batches_sent}, Batches failed: {report.batches_failed}, "
            f"Duration: {report.duration_seconds():.2f}s"
        )
        return report

    def _send_all(self, publisher: Publisher, request: SendRequest, report: SendReport) -> None:
        """Main batching loop."""
        message_count = request.message_count
        batch = publisher.open_batch()

        for i in range(message_count):
            event = Event(request.payload)
            report.events_attempted += 1

            if batch.try_add(event):
                continue

            # An empty batch that rejects the event will reject it forever
            if batch.size == 0:
                raise PayloadTooLarge(event.size_in_bytes(), i)

            self._send_batch(publisher, batch, i - batch.size, request.verbose, report)

            batch = publisher.open_batch()
            if not batch.try_add(event):
                raise PayloadTooLarge(event.size_in_bytes(), i)

        if batch.size > 0:
            self._send_batch(publisher, batch, message_count - batch.size, request.verbose, report, final=True)

        logger.success("All events sent successfully")
        if report.batches_failed:
            logger.warning(f"Finished with {report.batches_failed} failed batches; {report.events_failed} of {message_count} events were not delivered")

    def _send_batch(
        self,
        publisher: Publisher,
        batch: Batch,
        start_index: int,
        verbose: bool,
        report: SendReport,
        final: bool = False,
    ) -> None:
        """Send one closed batch, logging rather than raising on failure."""
        size = batch.size
        label = "final batch" if final else "batch"
        logger.log("INFO" if verbose else "DEBUG", f"Sending {label} with size: {size} for events starting at index {start_index}")

        try:
            publisher.send(batch)
        except Exception as e:
            error = BatchSendError(size, start_index, cause=e)
            logger.error(f"Error sending batch: {error}")
            report.record_failed(error)
            return

        report.record_sent(size)

    def _release(self, publisher: Publisher) -> Optional[ReleaseError]:
        """Close the publisher exactly once."""
        try:
            publisher.close()
        except Exception as e:
            error = ReleaseError(e)
            logger.error(str(error))
            return error

        return None


def send_messages(
    connection_string: str,
    eventhub_name: str,
    message_count: int,
    payload: Payload,
    verbose: bool = False,
    publisher_factory: PublisherFactory = create_eventhub_publisher,
) -> SendReport:
    """Send `message_count` copies of `payload` to an Event Hub.

    Args:
        connection_string: Event Hubs namespace connection string
        eventhub_name: Name of the target hub
        message_count: Number of events to send, at least 1
        payload: Body carried by every event
        verbose: Log every batch at INFO level
        publisher_factory: Override for the Azure-backed publisher

    Returns:
        Report of the run
    """
    return BatchSender(publisher_factory).send(connection_string, eventhub_name, message_count, payload, verbose)
