"""SQL issued by MessageRepository, checked against a recording fake pool."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Tuple

import psycopg
import pytest

from message_service.repositories.message_repo import (
    COUNT_SQL,
    UPSERT_SQL,
    MessageRepository,
    RecordRepository,
)


class _Cursor:
    def __init__(self, row: Optional[Tuple[Any, ...]]) -> None:
        self._row = row

    def fetchone(self) -> Optional[Tuple[Any, ...]]:
        return self._row


class _RecordingPool:
    def __init__(self, row: Optional[Tuple[Any, ...]] = None, error: Optional[Exception] = None) -> None:
        self.row = row
        self.error = error
        self.executed: List[Tuple[str, Optional[tuple]]] = []
        self.checkouts = 0

    @contextmanager
    def connection(self) -> Iterator["_RecordingPool"]:
        self.checkouts += 1
        yield self

    def execute(self, sql: str, params: Optional[tuple] = None) -> _Cursor:
        if self.error is not None:
            raise self.error
        self.executed.append((sql, params))
        return _Cursor(self.row)


def test_message_repository_satisfies_protocol():
    assert isinstance(MessageRepository(_RecordingPool()), RecordRepository)


def test_upsert_uses_conflict_clause_with_bound_parameter():
    pool = _RecordingPool()

    MessageRepository(pool).upsert("hello")

    assert pool.executed == [(UPSERT_SQL, ("hello",))]
    assert "ON CONFLICT (value) DO UPDATE" in UPSERT_SQL
    assert pool.checkouts == 1


def test_count_returns_integer():
    pool = _RecordingPool(row=(3,))

    assert MessageRepository(pool).count() == 3
    assert pool.executed == [(COUNT_SQL, None)]


def test_count_without_row_is_zero():
    assert MessageRepository(_RecordingPool(row=None)).count() == 0


def test_database_errors_propagate():
    repository = MessageRepository(_RecordingPool(error=psycopg.OperationalError("gone")))

    with pytest.raises(psycopg.OperationalError, match="gone"):
        repository.count()
    with pytest.raises(psycopg.OperationalError, match="gone"):
        repository.upsert("x")
