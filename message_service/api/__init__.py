"""
HTTP layer for the message service.

Two application factories are exported: the database-backed default variant
and the static health-check variant.
"""

from message_service.api.app import create_app
from message_service.api.health import create_health_app

__all__ = [
    "create_app",
    "create_health_app",
]
