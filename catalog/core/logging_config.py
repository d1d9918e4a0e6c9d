# catalog/core/logging_config.py
"""
Logging setup for the catalog service.

Application loggers follow LOG_LEVEL; SQLAlchemy and HTTP client loggers
are kept at WARNING so query composition logs stay readable.
"""

import logging

from catalog.core.config import settings


def configure_logging(level: str = None):
    log_level = (level or settings.LOG_LEVEL).upper()

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    # Quiet database loggers unless SQL echo was asked for explicitly
    if not settings.SQL_ECHO:
        logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger("catalog").setLevel(getattr(logging, log_level, logging.INFO))

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at level: {log_level}")
