from __future__ import annotations

import sys
from typing import Optional

import typer
import uvicorn

from message_service.api.app import create_app
from message_service.api.health import create_health_app
from message_service.config import get_settings
from message_service.infrastructure.db_factory import init_store
from message_service.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Message service CLI.")
log = get_logger(__name__)

VARIANTS = ("default", "minimal")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"listen={settings.app_host}:{settings.app_port} env={settings.app_env} "
        f"backoff=({settings.backoff_initial_interval}s x{settings.backoff_multiplier}, "
        f"max_attempts={settings.backoff_max_attempts or 'unbounded'})"
    )


@app.command()
def serve(
    variant: str = typer.Option(
        "default",
        "--variant",
        "-v",
        help="Application variant: 'default' (database-backed) or 'minimal' (health only).",
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from settings)."),
) -> None:
    """
    Run the HTTP server. The default variant waits for the database before listening.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    if variant not in VARIANTS:
        raise typer.BadParameter(f"expected one of {', '.join(VARIANTS)}", param_hint="--variant")

    application = create_app(settings) if variant == "default" else create_health_app()
    bind_host = host if host is not None else settings.app_host
    bind_port = port if port is not None else settings.app_port
    log.info("Starting server", extra={"variant": variant, "host": bind_host, "port": bind_port})
    uvicorn.run(application, host=bind_host, port=bind_port, log_config=None)


@app.command("init-store")
def init_store_command() -> None:
    """
    Wait for the database, ensure the message table exists, then exit.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    pool = init_store(settings)
    pool.close()
    typer.echo("Store initialised.")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
