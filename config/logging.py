"""
Logging configuration for the scan pipeline.

Library modules only create `logging.getLogger(__name__)`; the embedding
service (or a test session) calls configure_logging() once at startup.
"""

import logging
from typing import Optional

from config.settings import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'

# Chatty third-party loggers kept at WARNING
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging with the pipeline's format.

    Args:
        level: Log level name; defaults to settings.LOG_LEVEL
    """
    level_name = (level or settings.LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
