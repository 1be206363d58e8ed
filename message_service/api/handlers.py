"""
Request handling logic and JSON error envelopes.

The functions here are free of HTTP routing so they can be reused by both
application variants and exercised directly in tests. Every error response
uses the same envelope: ``{"error": "<text>"}``.
"""

from __future__ import annotations

from typing import Dict

import psycopg
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from message_service.domain.models import Message
from message_service.repositories.message_repo import RecordRepository
from message_service.utils.logging import get_logger

log = get_logger(__name__)

GREETING = "Hello, Docker! ({count})\n"
METHOD_NOT_ALLOWED = "Method not allowed"
MALFORMED_BODY = "Malformed request body"


def error_body(message: str) -> Dict[str, str]:
    return {"error": message}


def root_message(repository: RecordRepository) -> str:
    """Greeting embedding the number of stored records."""
    return GREETING.format(count=repository.count())


def send_message(repository: RecordRepository, message: Message) -> Message:
    """Upsert the message value and return the message for echoing."""
    repository.upsert(message.value)
    return message


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = METHOD_NOT_ALLOWED if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(
        error_body(detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: psycopg.Error) -> JSONResponse:
    # The raw database error text is part of the response contract.
    log.error(
        "Database error while handling request",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(error_body(str(exc)), status_code=500)


def install_error_handlers(app: FastAPI) -> None:
    """Register the JSON error envelope for HTTP and database errors."""
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(psycopg.Error, database_error_handler)


__all__ = [
    "GREETING",
    "MALFORMED_BODY",
    "METHOD_NOT_ALLOWED",
    "error_body",
    "install_error_handlers",
    "root_message",
    "send_message",
]
