"""
Minimal variant: a static responder with no persistence.
"""

from __future__ import annotations

from typing import Dict

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from message_service.api.handlers import install_error_handlers

HEALTH_GREETING = "Hello, Docker! <3"


def create_health_app() -> FastAPI:
    app = FastAPI(title="Message Service (health)")
    install_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return HEALTH_GREETING

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"Status": "OK"}

    return app


__all__ = ["HEALTH_GREETING", "create_health_app"]
