"""
Logging setup for applications embedding the identity store.
"""
import logging
from typing import Optional

from docdb_identity.config import get_settings


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the library.
    
    Args:
        level: Log level name; defaults to the configured log_level
    """
    if level is None:
        level = get_settings().log_level
    
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
