"""Core models and errors for the batch sender."""

from .errors import BatchSendError, InvalidArgument, PayloadTooLarge, ReleaseError, SendError
from .events import Event, Payload, SendReport

__all__ = ["Event", "Payload", "SendReport", "SendError", "InvalidArgument", "PayloadTooLarge", "BatchSendError", "ReleaseError"]
