# evictiontracker/core/logging_config.py
import logging
import sys

import structlog

from evictiontracker.config import get_settings


def setup_logging() -> None:
    """
    structlog over stdlib logging, one JSON object per line on stdout.
    Level comes from Settings.log_level (ENVIRONMENT=production forces WARNING).
    """
    level = getattr(logging, get_settings().log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# Global logger; never used inside the intake decision path
logger = structlog.get_logger("evictiontracker")
