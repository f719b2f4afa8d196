"""
Service package for people-cache: the HTTP endpoint the load harness targets.
"""

from people_cache.service.app import create_app

__all__ = ["create_app"]
