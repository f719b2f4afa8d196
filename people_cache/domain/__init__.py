"""
Domain package for people-cache.

Exports the value types shared by the store, the cache, the service and the
load harness. Keep this package focused on data definitions.
"""

from people_cache.domain.models import Person, RequestOutcome

__all__ = [
    "Person",
    "RequestOutcome",
]
