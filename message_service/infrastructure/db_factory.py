"""
Database connection factory for the message service.

Builds the libpq connection string from settings, opens the psycopg
connection pool, and bootstraps the ``message`` table. Opening the pool is
retried with exponential backoff (see ``message_service.infrastructure.retry``)
because the database container usually comes up after the service does;
creating the table is not retried.

The pool is an explicitly owned resource: ``init_store`` hands it to the
caller, which is responsible for closing it.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool, PoolTimeout

from message_service.config import Settings, get_settings
from message_service.infrastructure.retry import BackoffPolicy, retry_call
from message_service.utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_SQL = "CREATE TABLE IF NOT EXISTS message (value TEXT PRIMARY KEY)"

# Errors worth another attempt while the server is still starting up.
TRANSIENT_ERRORS = (psycopg.OperationalError, PoolTimeout)

PoolFactory = Callable[[Settings], ConnectionPool]


def build_conninfo(settings: Optional[Settings] = None) -> str:
    """Compose a libpq keyword/value connection string from settings."""
    settings = settings or get_settings()
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_name,
        user=settings.db_user,
        password=settings.db_password,
        sslmode=settings.db_sslmode,
        connect_timeout=settings.connect_timeout,
    )


def open_pool(settings: Settings) -> ConnectionPool:
    """
    Open a connection pool and wait until its minimum connections are up.

    Parameters
    ----------
    settings : Settings
        Connection parameters and pool sizing.

    Returns
    -------
    ConnectionPool
        An open pool with ``pool_min_size`` ready connections.

    Raises
    ------
    psycopg_pool.PoolTimeout
        If the server could not be reached within ``connect_timeout``.
    """
    pool = ConnectionPool(
        conninfo=build_conninfo(settings),
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=float(settings.connect_timeout))
    except PoolTimeout:
        pool.close()
        raise
    return pool


def ensure_schema(pool: ConnectionPool) -> None:
    """Create the ``message`` table if it does not exist yet."""
    with pool.connection() as conn:
        conn.execute(SCHEMA_SQL)
    log.info("Schema ensured", extra={"table": "message"})


def init_store(
    settings: Optional[Settings] = None,
    policy: Optional[BackoffPolicy] = None,
    pool_factory: PoolFactory = open_pool,
    sleep: Callable[[float], None] = time.sleep,
) -> ConnectionPool:
    """
    Open the store, retrying until the database accepts connections.

    Parameters
    ----------
    settings : Optional[Settings]
        Connection settings; defaults to the cached environment settings.
    policy : Optional[BackoffPolicy]
        Retry policy for opening the pool; defaults to the policy described
        by ``settings`` (unbounded unless limits are configured).
    pool_factory : PoolFactory
        Callable opening the pool. Replaced in tests.
    sleep : Callable[[float], None]
        Sleep function used between attempts. Replaced in tests.

    Returns
    -------
    ConnectionPool
        Open pool against a database containing the ``message`` table.

    Raises
    ------
    psycopg.OperationalError, psycopg_pool.PoolTimeout
        If a bounded policy is exhausted.
    psycopg.Error
        If the table creation fails; this is not retried.
    """
    settings = settings or get_settings()
    policy = policy or BackoffPolicy.from_settings(settings)

    pool = retry_call(
        lambda: pool_factory(settings),
        policy=policy,
        retry_on=TRANSIENT_ERRORS,
        sleep=sleep,
    )
    try:
        ensure_schema(pool)
    except Exception:
        pool.close()
        raise

    log.info(
        "Store ready",
        extra={"host": settings.db_host, "port": settings.db_port, "dbname": settings.db_name},
    )
    return pool


__all__ = [
    "SCHEMA_SQL",
    "TRANSIENT_ERRORS",
    "build_conninfo",
    "ensure_schema",
    "init_store",
    "open_pool",
]
