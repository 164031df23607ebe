"""
Logging configuration.

Configures the loguru logger with a rotating file sink.
"""

import sys

from loguru import logger

from app.config.settings import Settings, settings as default_settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure stderr and rotating file sinks."""
    settings = settings or default_settings

    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logger.add(
        settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        level=settings.log_level,
        encoding="utf-8",
    )

    logger.info("Starting SmartGrow Mining services...")
