"""Command-line interface for sending batched copies of a payload to an Event Hub."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from loguru import logger

from . import __version__
from .batcher import BatchSender
from .config import SenderSettings, SendRequest, load_settings, setup_logging
from .core.errors import InvalidArgument
from .publisher import PublisherFactory, create_eventhub_publisher

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser(settings: SenderSettings) -> argparse.ArgumentParser:
    """Build the argument parser. Environment settings provide defaults for the target."""
    parser = argparse.ArgumentParser(
        prog="eventhub-sender",
        description="Send a number of copies of a message payload to an Azure Event Hub in size-bounded batches.",
    )
    parser.add_argument(
        "-c",
        "--connection-string",
        default=settings.connection_string or None,
        required=not settings.connection_string,
        help="The connection string for the Event Hub (env: EVENTHUB_CONNECTION_STRING)",
    )
    parser.add_argument(
        "-e",
        "--eventhub-name",
        default=settings.eventhub_name or None,
        required=not settings.eventhub_name,
        help="The name of the Event Hub (env: EVENTHUB_NAME)",
    )
    parser.add_argument("-n", "--message-count", type=int, required=True, help="The number of messages to send")
    parser.add_argument("-p", "--message-payload", required=True, help="The payload of the messages")

    exclusive = parser.add_mutually_exclusive_group()
    exclusive.add_argument("-v", "--verbose", action="store_true", default=False, help="Output verbose logging")
    exclusive.add_argument("-V", "--version", action="version", version=__version__, help="Show version number and exit")

    return parser


def main(argv: Optional[List[str]] = None, publisher_factory: PublisherFactory = create_eventhub_publisher) -> int:
    """Parse arguments, run the sender and return the process exit code."""
    settings = load_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    setup_logging(settings, verbose=args.verbose)

    try:
        request = SendRequest.create(
            connection_string=args.connection_string,
            eventhub_name=args.eventhub_name,
            message_count=args.message_count,
            payload=args.message_payload,
            verbose=args.verbose,
        )
    except InvalidArgument as e:
        parser.error(str(e))

    report = BatchSender(publisher_factory).run(request)

    if not report.completed:
        logger.error(f"Run aborted after {report.events_attempted} of {report.events_requested} events: {report.error}")
        return EXIT_FAILED

    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
