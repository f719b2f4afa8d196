"""
Bulk generation of synthetic Person rows.

`BulkGenerator.generate()` writes all rows of a run through a single
`execute_batch` call, so the store commits every row or none of them. The
cache is not touched; readers see the new rows once their entry expires.
"""

from __future__ import annotations

from people_cache.domain.models import Person
from people_cache.infrastructure.store import StoreClient
from people_cache.utils.logging import get_logger

log = get_logger(__name__)

NAME_TEMPLATE = "Person {i}"
INSERT_PERSON_SQL = "INSERT INTO person (id, name) VALUES (%s, %s)"


class BulkGenerator:
    """
    Build synthetic people and insert them in one transaction.
    """

    def __init__(self, store: StoreClient) -> None:
        self._store = store

    @staticmethod
    def build(count: int, first_id: int = 0) -> list[Person]:
        """
        Build `count` people with sequential ids starting at `first_id`.

        Names follow "Person {i}" for i in range(count).
        """
        if count < 0:
            raise ValueError("count must be non-negative")
        return [Person(id=first_id + i, name=NAME_TEMPLATE.format(i=i)) for i in range(count)]

    def generate(self, count: int, first_id: int = 0) -> bool:
        """
        Insert `count` synthetic people atomically.

        Returns
        -------
        bool
            True if the transaction committed, False if it was rolled back.
        """
        people = self.build(count, first_id)
        log.info(
            f"[GENERATE START] {count} people from id {first_id}",
            extra={"count": count, "first_id": first_id},
        )
        committed = self._store.execute_batch(
            INSERT_PERSON_SQL, [(person.id, person.name) for person in people]
        )
        if committed:
            log.info(f"[GENERATE SUCCESS] {count} people committed", extra={"count": count})
        else:
            log.warning(f"[GENERATE FAILED] {count} people rolled back", extra={"count": count})
        return committed


__all__ = ["BulkGenerator", "INSERT_PERSON_SQL", "NAME_TEMPLATE"]
