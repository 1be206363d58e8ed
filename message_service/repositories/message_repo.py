"""
Record repository for the ``message`` table.

Each operation borrows one connection from the pool and runs as its own
transaction; the pool commits when the connection is returned. Concurrent
upserts of the same value are resolved by the primary-key conflict clause.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from psycopg_pool import ConnectionPool

UPSERT_SQL = (
    "INSERT INTO message (value) VALUES (%s) "
    "ON CONFLICT (value) DO UPDATE SET value = excluded.value"
)
COUNT_SQL = "SELECT COUNT(*) FROM message"


@runtime_checkable
class RecordRepository(Protocol):
    """
    Operations the HTTP handlers need from storage.

    Implementations raise ``psycopg.Error`` (or a subclass) on failure.
    """

    def upsert(self, value: str) -> None:
        """Insert ``value``, or overwrite it in place if it already exists."""
        ...

    def count(self) -> int:
        """Return the total number of stored rows."""
        ...


class MessageRepository:
    """PostgreSQL-backed ``RecordRepository``."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def upsert(self, value: str) -> None:
        with self._pool.connection() as conn:
            conn.execute(UPSERT_SQL, (value,))

    def count(self) -> int:
        with self._pool.connection() as conn:
            row = conn.execute(COUNT_SQL).fetchone()
        return int(row[0]) if row else 0


__all__ = ["COUNT_SQL", "UPSERT_SQL", "MessageRepository", "RecordRepository"]
