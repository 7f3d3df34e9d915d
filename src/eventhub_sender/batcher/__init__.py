"""Event batching module for size-bounded transmission."""

from .batch_sender import BatchSender, send_messages

__all__ = ["BatchSender", "send_messages"]
