"""Logging configuration for the application."""

import logging
import sys

from tenantbase.core.config import get_settings


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout. Redis and SQLAlchemy engine chatter is kept at
    WARNING so cache hit/miss lines stay readable.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for noisy in ("redis", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
