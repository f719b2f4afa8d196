"""
Utilities package for people-cache.

Exports shared helpers for logging and profiling. Keep this package free of
domain-specific logic.
"""

from people_cache.utils.logging import configure_logging, get_logger
from people_cache.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
