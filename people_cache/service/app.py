"""
HTTP service exposing the cached people list.

`GET /` is the page the load harness targets. Handlers are plain functions, so
FastAPI runs them on its worker threads and concurrent requests exercise the
cache's single-flight path for real.

The lifespan owns the cache: created at startup, cleared at shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

import psycopg
from fastapi import FastAPI, HTTPException, Query, Request

from people_cache.cache.memory import MemoryCache
from people_cache.cache.reader import PeopleReader
from people_cache.config import Settings, get_settings
from people_cache.domain.models import Person
from people_cache.generator import BulkGenerator
from people_cache.infrastructure.store import PostgresStoreClient, StoreClient
from people_cache.utils.logging import get_logger

log = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[StoreClient] = None,
    cache: Optional[MemoryCache] = None,
) -> FastAPI:
    """
    Build the service application.

    Parameters
    ----------
    settings : Settings | None
        Defaults to get_settings().
    store : StoreClient | None
        Defaults to a PostgresStoreClient on settings.database_url.
    cache : MemoryCache | None
        Defaults to a fresh MemoryCache created at startup.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        active_store = store if store is not None else PostgresStoreClient(settings.database_url)
        active_cache = cache if cache is not None else MemoryCache()
        app.state.cache = active_cache
        app.state.reader = PeopleReader(
            active_store, active_cache, ttl_seconds=settings.cache_ttl_seconds
        )
        app.state.generator = BulkGenerator(active_store)
        log.info(
            "Service started",
            extra={"ttl_seconds": settings.cache_ttl_seconds, "env": settings.app_env},
        )
        try:
            yield
        finally:
            active_cache.clear()
            log.info("Service stopped; cache cleared")

    app = FastAPI(
        title="people-cache",
        description="Cache-aside read access to the person table.",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/", response_model=List[Person])
    def list_people(request: Request) -> List[Person]:
        """Every person, served from the TTL cache."""
        try:
            return list(request.app.state.reader.get_all())
        except psycopg.Error as exc:
            log.exception("Store read failed")
            raise HTTPException(status_code=503, detail="store unavailable") from exc

    @app.post("/generate")
    def generate(
        request: Request,
        count: int = Query(settings.generate_count, ge=0),
        first_id: int = Query(0, ge=0),
    ) -> dict:
        """
        Insert `count` synthetic people with ids `first_id .. first_id + count - 1`
        in one transaction.

        Ids are not store-assigned: repeating a call with the same `first_id` hits
        the primary key and rolls back the whole batch (HTTP 500).
        """
        committed = request.app.state.generator.generate(count, first_id=first_id)
        if not committed:
            raise HTTPException(status_code=500, detail="generation rolled back")
        if settings.cache_invalidate_on_generate:
            request.app.state.reader.invalidate()
        return {"success": True, "count": count}

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


__all__ = ["create_app"]
