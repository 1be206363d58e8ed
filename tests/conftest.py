"""
Pytest configuration for the message service.

Provides fixtures for:
- Settings with test-specific overrides
- In-memory repositories for HTTP tests that must not touch a database
- Database connection management for integration tests
"""

from __future__ import annotations

import os
from typing import Generator, List, Set

import psycopg
import pytest
from fastapi.testclient import TestClient

from message_service.api.app import create_app
from message_service.config import Settings, get_settings
from message_service.infrastructure.db_factory import SCHEMA_SQL, build_conninfo


class InMemoryRepository:
    """RecordRepository backed by a set; mirrors primary-key upsert semantics."""

    def __init__(self) -> None:
        self.values: Set[str] = set()
        self.upserts: List[str] = []

    def upsert(self, value: str) -> None:
        self.upserts.append(value)
        self.values.add(value)

    def count(self) -> int:
        return len(self.values)


class FailingRepository:
    """RecordRepository whose every operation fails like a lost connection."""

    def __init__(self, message: str = "server closed the connection unexpectedly") -> None:
        self.message = message

    def upsert(self, value: str) -> None:
        raise psycopg.OperationalError(self.message)

    def count(self) -> int:
        raise psycopg.OperationalError(self.message)


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("PGHOST", "localhost"),
        db_port=int(os.getenv("PGPORT", "5432")),
        db_user=os.getenv("PGUSER", "postgres"),
        db_password=os.getenv("PGPASSWORD", "postgres"),
        db_name=os.getenv("PGDATABASE", "postgres"),
        log_level="DEBUG",
        backoff_initial_interval=0.1,
        backoff_max_attempts=3,
    )


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def client(test_settings: Settings, repository: InMemoryRepository) -> Generator[TestClient, None, None]:
    """HTTP client for the default variant backed by an in-memory repository."""
    with TestClient(create_app(settings=test_settings, repository=repository)) as test_client:
        yield test_client


@pytest.fixture
def failing_client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """HTTP client whose repository raises database errors."""
    with TestClient(create_app(settings=test_settings, repository=FailingRepository())) as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return build_conninfo(test_settings)


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            conn.execute("SELECT 1;").fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped autocommit connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        conn.execute(SCHEMA_SQL)
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def clean_message_table(db_connection: psycopg.Connection) -> Generator[None, None, None]:
    """
    Empty the message table before and after each test function.
    """
    db_connection.execute("TRUNCATE TABLE message;")
    yield
    db_connection.execute("TRUNCATE TABLE message;")
