"""
Logging setup
"""
import logging
from typing import Optional

import config

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the process.

    Args:
        level: Log level name (defaults to config.LOG_LEVEL)
    """
    level_name = (level or config.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
