# salonbook/utils/my_logging.py
"""Logging configuration shared by the API process and the Celery worker"""
import logging
import sys
from typing import Optional

from salonbook.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

NOISY_LOGGERS = [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "aiosqlite",
    "asyncio",
    "httpx",
    "httpcore",
    "kombu",
    "uvicorn.access",
]


def setup_logging(verbose: bool = True, level: Optional[str] = None):
    """
    Configure root logging to stdout.

    verbose=False keeps only warnings from the app and errors from the
    libraries listed in NOISY_LOGGERS.
    """
    settings = get_settings()

    if verbose:
        resolved = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    else:
        resolved = logging.WARNING

    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    if not verbose or not settings.DB_ECHO:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.ERROR if not verbose else logging.WARNING)
