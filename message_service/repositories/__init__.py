"""
Repositories package for the message service.

Exports the repository protocol and its PostgreSQL implementation.
"""

from message_service.repositories.message_repo import MessageRepository, RecordRepository

__all__ = [
    "MessageRepository",
    "RecordRepository",
]
