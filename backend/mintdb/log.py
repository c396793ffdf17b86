"""
Logging setup shared by applications embedding the data layer.
"""
import logging
from typing import Optional

from mintdb.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging with the standard format.
    
    Args:
        level: Level name (e.g. "DEBUG"). Defaults to Settings.log_level.
    """
    if level is None:
        level = get_settings().log_level
    
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
