"""Liveness endpoint served next to the bot."""

from __future__ import annotations

import logging
import threading

from fastapi import FastAPI
from pydantic import BaseModel
import uvicorn

from crypto_signals import __version__


logger = logging.getLogger(__name__)


class HealthStatus(BaseModel):
    status: int = 200
    message: str = "bot up and running"


def create_health_app() -> FastAPI:
    app = FastAPI(title="Crypto Signals Bot", version=__version__)

    @app.get("/", response_model=HealthStatus)
    def root() -> HealthStatus:
        return HealthStatus()

    @app.get("/health", response_model=HealthStatus)
    def health() -> HealthStatus:
        return HealthStatus()

    return app


def start_health_server(host: str, port: int) -> threading.Thread:
    """Serve the liveness app from a daemon thread.

    Off the main thread uvicorn leaves signal handling to the bot's event loop.
    """
    config = uvicorn.Config(
        create_health_app(), host=host, port=port, log_level="warning", log_config=None
    )
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, name="health-server", daemon=True)
    thread.start()
    logger.info("Health check server running on %s:%s", host, port)
    return thread
