"""
Infrastructure module - configuration, logging, identifiers and JSON storage.
"""

from .identifiers import generate_uuid, utc_now, to_iso, from_iso
from .logging_config import DailyRotatingFileHandler, setup_logging
from .settings import Settings

__all__ = [
    "generate_uuid",
    "utc_now",
    "to_iso",
    "from_iso",
    "DailyRotatingFileHandler",
    "setup_logging",
    "Settings",
]
