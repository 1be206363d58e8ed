"""
Message Service - a small PostgreSQL-backed HTTP service.

Accepts text values via ``POST /send``, upserts them into a single-column
``message`` table, and reports how many values are stored via ``GET /``.
A minimal variant answers health checks without touching the database.

The package is organised in layers:

- ``config`` / ``utils``: settings and logging
- ``infrastructure``: connection pool, schema bootstrap, startup backoff
- ``repositories``: SQL access to the ``message`` table
- ``api``: FastAPI application factories and handlers
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from message_service.api import create_app, create_health_app
from message_service.config import Settings, get_settings
from message_service.domain.models import Message
from message_service.infrastructure.db_factory import init_store
from message_service.infrastructure.retry import BackoffPolicy, retry_call
from message_service.repositories.message_repo import MessageRepository, RecordRepository
from message_service.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Message",
    # Store
    "BackoffPolicy",
    "init_store",
    "retry_call",
    "MessageRepository",
    "RecordRepository",
    # HTTP
    "create_app",
    "create_health_app",
    # Logging
    "configure_logging",
    "get_logger",
]
