"""
Utilities package for Database Filler.

Exports shared helpers for logging and timing.
Keep this package lightweight and free of domain-specific logic.
"""

from dbfiller.utils.logging import configure_logging, get_logger
from dbfiller.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
