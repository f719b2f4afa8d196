"""
Relational store access for people-cache.

`StoreClient` is the synchronous boundary the cache reader and the bulk
generator depend on. `PostgresStoreClient` implements it with psycopg 3; every
operation opens its own connection, uses it, and closes it.

Connecting is retried with tenacity for transient failures.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

import psycopg
from psycopg import Connection, sql
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from people_cache.config import get_settings
from people_cache.utils.logging import get_logger

log = get_logger(__name__)

Row = tuple[Any, ...]


@runtime_checkable
class StoreClient(Protocol):
    """
    Minimal synchronous interface to the relational store.
    """

    def query_all(
        self, table: str, columns: Sequence[str], order_by: Optional[str] = None
    ) -> list[Row]:
        """
        Return every row of `table`, projected onto `columns`.

        Raises the driver's error when the read fails.
        """
        ...

    def execute_batch(self, statement: str, rows: Sequence[Sequence[Any]]) -> bool:
        """
        Execute `statement` once per parameter row inside a single transaction.

        Returns True when the transaction committed and False when it was
        rolled back; partial batches are never visible.
        """
        ...


class PostgresStoreClient:
    """
    psycopg-backed StoreClient with per-operation connection scope.

    Parameters
    ----------
    conninfo : str | None
        libpq connection string. Defaults to settings.database_url.
    connect_timeout : int
        Seconds to wait for a connection before failing.
    """

    def __init__(self, conninfo: Optional[str] = None, connect_timeout: int = 10) -> None:
        self._conninfo = conninfo or get_settings().database_url
        self._connect_timeout = connect_timeout

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
        reraise=True,
    )
    def _connect(self) -> Connection:
        return psycopg.connect(self._conninfo, connect_timeout=self._connect_timeout)

    def query_all(
        self, table: str, columns: Sequence[str], order_by: Optional[str] = None
    ) -> list[Row]:
        if not columns:
            raise ValueError("query_all requires at least one column")
        query = sql.SQL("SELECT {} FROM {}").format(
            sql.SQL(", ").join(sql.Identifier(column) for column in columns),
            sql.Identifier(table),
        )
        if order_by:
            query = query + sql.SQL(" ORDER BY {}").format(sql.Identifier(order_by))

        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(query)
                rows = cur.fetchall()
        log.debug("query_all fetched rows", extra={"table": table, "rows": len(rows)})
        return rows

    def execute_batch(self, statement: str, rows: Sequence[Sequence[Any]]) -> bool:
        try:
            with self._connect() as conn:
                with conn.transaction():
                    with conn.cursor() as cur:
                        cur.executemany(statement, rows)
        except psycopg.Error:
            log.exception("Batch rolled back", extra={"rows": len(rows)})
            return False
        log.info("Batch committed", extra={"rows": len(rows)})
        return True


__all__ = ["PostgresStoreClient", "Row", "StoreClient"]
