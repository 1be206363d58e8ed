"""
Routes of the default (database-backed) variant.

Handlers get the repository and settings from ``app.state`` through FastAPI
dependencies; nothing here reads module-level state.
"""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from message_service.api.handlers import (
    MALFORMED_BODY,
    error_body,
    root_message,
    send_message,
)
from message_service.config import Settings
from message_service.domain.models import Message
from message_service.repositories.message_repo import RecordRepository

STORE_UNAVAILABLE = "Store is not initialised"

router = APIRouter()


def get_repository(request: Request) -> RecordRepository:
    repository = request.app.state.repository
    if repository is None:
        raise HTTPException(status_code=503, detail=STORE_UNAVAILABLE)
    return repository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/")
def root(repository: RecordRepository = Depends(get_repository)) -> Dict[str, str]:
    return {"message": root_message(repository)}


@router.get("/ping")
def ping() -> Dict[str, str]:
    return {"status": "OK"}


@router.post("/send")
async def send(
    request: Request,
    repository: RecordRepository = Depends(get_repository),
    settings: Settings = Depends(get_app_settings),
):
    body = await request.body()
    try:
        message = Message.from_body(body, strict=settings.send_strict_json)
    except ValidationError:
        return JSONResponse(error_body(MALFORMED_BODY), status_code=400)

    message = await run_in_threadpool(send_message, repository, message)
    return message.model_dump()


__all__ = ["router", "get_repository", "get_app_settings"]
