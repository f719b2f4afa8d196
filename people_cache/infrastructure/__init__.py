"""
Infrastructure package for people-cache.

Centralizes relational store access. Keep this layer focused on I/O and
connection lifecycle, decoupled from caching and generation logic.
"""

from people_cache.infrastructure.store import PostgresStoreClient, Row, StoreClient

__all__ = [
    "PostgresStoreClient",
    "Row",
    "StoreClient",
]
