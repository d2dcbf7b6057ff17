"""
Logging setup.

Usage:
    from inventory_gateway.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Fetched %d products", len(products))
"""

import logging
import sys
from typing import Optional

from inventory_gateway.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module (typically `__name__`)."""
    return logging.getLogger(name)


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure application-wide logging on stderr.

    Args:
        level: Log level name; defaults to `settings.log_level`
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
