"""
Domain package for the message service.

Exports the core domain models used by the repository and the HTTP layer.
Keep this package focused on data definitions and validation concerns.
"""

from message_service.domain.models import Message

__all__ = [
    "Message",
]
