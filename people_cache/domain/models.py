"""
Domain models for people-cache.

`Person` mirrors a row of the `person` table (see `db/init.sql`).
`RequestOutcome` is what a load-test virtual client records per request.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Person(BaseModel):
    """
    Representation of a single row in the `person` table.
    """

    id: int = Field(..., description="Primary key (synthetic index for generated rows).")
    name: str = Field(..., description="Display name, e.g. 'Person 42'.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class RequestOutcome(BaseModel):
    """
    Result of one request issued by a load-test virtual client.
    """

    client_id: int = Field(..., ge=0)
    sequence: int = Field(..., ge=1, description="Per-client request number, starting at 1.")
    latency_ms: float = Field(..., ge=0.0)
    success: bool
    status_code: Optional[int] = Field(None, description="HTTP status, absent on transport errors.")
    error: Optional[str] = Field(None, description="Failure detail when success is False.")

    model_config = {"frozen": True}


__all__ = ["Person", "RequestOutcome"]
