"""
Infrastructure package for the message service.

Centralizes database connectivity concerns (connection pool, schema bootstrap,
startup retry policy). Keep this layer focused on I/O and resource
management, decoupled from the HTTP layer.
"""

from message_service.infrastructure.db_factory import (
    build_conninfo,
    ensure_schema,
    init_store,
    open_pool,
)
from message_service.infrastructure.retry import BackoffPolicy, retry_call

__all__ = [
    "BackoffPolicy",
    "build_conninfo",
    "ensure_schema",
    "init_store",
    "open_pool",
    "retry_call",
]
