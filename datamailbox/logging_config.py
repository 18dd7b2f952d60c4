"""Logging setup driven by LoggingSettings."""

import logging
from pathlib import Path
from typing import Optional

from .config import LoggingSettings


def setup_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure the root logger.

    Args:
        settings: Logging settings (defaults to LoggingSettings())
    """
    if settings is None:
        settings = LoggingSettings()

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if settings.file:
        log_path = Path(settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, settings.level),
        format=settings.format,
        handlers=handlers,
        force=True,
    )
