"""Configuration module for the Event Hub batch sender."""

from .logger_config import setup_logging
from .settings import SenderSettings, SendRequest, load_settings

__all__ = ["SendRequest", "SenderSettings", "load_settings", "setup_logging"]
