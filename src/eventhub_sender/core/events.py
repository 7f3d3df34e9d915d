"""Event and report models for the batch sender.

Events flow through a single path:
SendRequest → BatchSender → Batch → Publisher → Event Hub
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .errors import BatchSendError, ReleaseError

Payload = Union[str, bytes]


@dataclass(frozen=True)
class Event:
    """One unit of payload data published to the hub."""

    body: Payload

    def size_in_bytes(self) -> int:
        """Return the encoded size of the body."""
        if isinstance(self.body, bytes):
            return len(self.body)
        return len(self.body.encode("utf-8"))


@dataclass
class SendReport:
    """Outcome of one BatchSender run."""

    events_requested: int = 0
    events_attempted: int = 0
    events_sent: int = 0
    events_failed: int = 0
    batches_sent: int = 0
    batches_failed: int = 0
    batch_errors: List[BatchSendError] = field(default_factory=list)
    error: Optional[BaseException] = None  # Fatal error that ended the loop
    release_error: Optional[ReleaseError] = None  # Kept apart from `error`
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def completed(self) -> bool:
        """True when the loop ran to the end without a fatal error."""
        return self.error is None

    @property
    def ok(self) -> bool:
        """True when every requested event was handed to a successful send."""
        return self.completed and self.batches_failed == 0 and self.events_sent == self.events_requested

    def record_sent(self, batch_size: int) -> None:
        self.batches_sent += 1
        self.events_sent += batch_size

    def record_failed(self, error: BatchSendError) -> None:
        self.batches_failed += 1
        self.events_failed += error.batch_size
        self.batch_errors.append(error)

    def duration_seconds(self) -> float:
        end = self.finished_at or datetime.now()
        return (end - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to a plain dictionary."""
        return {
            "events_requested": self.events_requested,
            "events_attempted": self.events_attempted,
            "events_sent": self.events_sent,
            "events_failed": self.events_failed,
            "batches_sent": self.batches_sent,
            "batches_failed": self.batches_failed,
            "completed": self.completed,
            "ok": self.ok,
            "error": str(self.error) if self.error else None,
            "release_error": str(self.release_error) if self.release_error else None,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }
