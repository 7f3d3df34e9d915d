"""Logger configuration for the batch sender."""

import sys

from loguru import logger

from .settings import SenderSettings


def setup_logging(settings: SenderSettings, verbose: bool = False) -> None:
    """Configure loguru logger for console and optional file output.

    Sets up:
    - stderr output with colored levels, DEBUG when verbose
    - file output with rotation and retention when a log file is configured,
      at its own level so batch diagnostics are kept
    """

    # Remove default loguru handler
    logger.remove()

    level = "DEBUG" if verbose else settings.log_level

    logger.add(
        sink=sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if settings.log_to_file:
        logger.add(
            sink=str(settings.log_file_path),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level="DEBUG" if verbose else settings.file_log_level,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="gz",  # Compress rotated logs
        )

        logger.debug(f"File logging enabled: {settings.log_file_path}")
