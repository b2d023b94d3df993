"""Logging setup shared by the API and scripts"""
import logging
from typing import Optional

from src.common.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger

    Args:
        level: Log level name, defaults to LOG_LEVEL from settings
    """
    logging.basicConfig(
        level=level or settings.app.log_level,
        format=LOG_FORMAT,
    )
