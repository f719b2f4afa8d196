"""
Load-testing package for people-cache.

Re-exports the harness, its configuration, and the report it produces.
"""

from people_cache.load.harness import LoadHarness, LoadTestConfig
from people_cache.load.report import LoadTestReport

__all__ = [
    "LoadHarness",
    "LoadTestConfig",
    "LoadTestReport",
]
