"""Configuration management for the Event Hub batch sender.

This module provides the immutable per-run request handed to the sender and
the process-level settings that allow environment variable overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.errors import InvalidArgument
from ..core.events import Event

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class SendRequest(BaseModel):
    """Everything one run needs, validated once before any network interaction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    connection_string: str = Field(..., min_length=1, description="Event Hubs namespace connection string")
    eventhub_name: str = Field(..., min_length=1, description="Name of the target Event Hub")
    message_count: int = Field(..., gt=0, strict=True, description="Number of copies of the payload to send")
    payload: Union[str, bytes] = Field(..., description="Body carried by every event")
    verbose: bool = Field(default=False, description="Log every batch as it is sent")

    @field_validator("connection_string", "eventhub_name", mode="before")
    @classmethod
    def strip_identity(cls, v: Any) -> Any:
        """Treat whitespace-only identities as missing."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("payload")
    @classmethod
    def require_payload(cls, v: Union[str, bytes]) -> Union[str, bytes]:
        if len(v) == 0:
            raise ValueError("message payload must not be empty")
        return v

    @classmethod
    def create(cls, **kwargs: Any) -> "SendRequest":
        """Build a request, translating validation failures into InvalidArgument.

        Raises:
            InvalidArgument: if any field is missing or out of range
        """
        try:
            return cls(**kwargs)
        except ValidationError as e:
            problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
            raise InvalidArgument(f"Invalid send request: {problems}") from e

    @property
    def target(self) -> Tuple[str, str]:
        """Connection identity and hub name identifying where events go."""
        return self.connection_string, self.eventhub_name

    def describe(self) -> str:
        """Loggable summary that never includes the connection string."""
        return f"{self.message_count} events of {Event(self.payload).size_in_bytes()} bytes to '{self.eventhub_name}'"


@dataclass
class SenderSettings:
    """Process-level settings for the command-line tool."""

    # Target defaults (command-line options win)
    connection_string: str = ""
    eventhub_name: str = ""

    # Logging
    log_level: str = "INFO"
    file_log_level: str = "DEBUG"  # File sink keeps batch diagnostics
    log_file_path: Optional[Path] = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"

    def __post_init__(self):
        """Apply environment variable overrides."""
        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply configuration overrides from environment variables."""
        if connection_string := os.getenv("EVENTHUB_CONNECTION_STRING"):
            self.connection_string = connection_string

        if eventhub_name := os.getenv("EVENTHUB_NAME"):
            self.eventhub_name = eventhub_name

        if log_level := os.getenv("EVENTHUB_SENDER_LOG_LEVEL"):
            if log_level.upper() in LOG_LEVELS:
                self.log_level = log_level.upper()
            else:
                logger.warning(f"Invalid log level: {log_level}")

        if file_log_level := os.getenv("EVENTHUB_SENDER_FILE_LOG_LEVEL"):
            if file_log_level.upper() in LOG_LEVELS:
                self.file_log_level = file_log_level.upper()
            else:
                logger.warning(f"Invalid file log level: {file_log_level}")

        if log_file := os.getenv("EVENTHUB_SENDER_LOG_FILE"):
            self.log_file_path = Path(log_file)

        if log_rotation := os.getenv("EVENTHUB_SENDER_LOG_ROTATION"):
            self.log_rotation = log_rotation

        if log_retention := os.getenv("EVENTHUB_SENDER_LOG_RETENTION"):
            self.log_retention = log_retention

    @property
    def log_to_file(self) -> bool:
        return self.log_file_path is not None


def load_settings() -> SenderSettings:
    """Load settings from defaults and the environment."""
    return SenderSettings()
