"""Lockstep slideshow FastAPI application entrypoint."""
from __future__ import annotations

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .api.advance import router as advance_router
from .api.display import router as display_router
from .api.health import router as health_router
from .api.stream import router as stream_router
from .core.catalog import CatalogError, MediaCatalog
from .core.events import EventHub
from .core.playhead import Playhead
from .util.config import Settings
from .util.logging import configure_logging

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around one catalog, playhead and event hub.

    Raises :class:`CatalogError` when a channel directory is missing or holds
    no media, so a misconfigured server never starts listening.
    """

    settings = settings or Settings.from_env()
    catalog = MediaCatalog.load(settings.channel_dirs())
    for channel, items in catalog.channels.items():
        logger.info("Channel %s: %d media files from %s", channel, len(items), catalog.directories[channel])

    app = FastAPI(title="Lockstep Slideshow", version="0.1.0")
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.playhead = Playhead()
    app.state.hub = EventHub(max_queue_size=settings.queue_size)
    app.state.templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

    app.include_router(health_router)
    app.include_router(advance_router)
    app.include_router(stream_router)
    for channel, directory in catalog.directories.items():
        app.mount(f"/static/{channel}", StaticFiles(directory=directory), name=f"static-{channel}")
    # Last: /{channel} would otherwise shadow the single-segment routes above.
    app.include_router(display_router)
    return app


def main() -> None:
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        configure_logging()
        logger.error("Invalid configuration: %s", exc)
        raise SystemExit(1) from exc
    configure_logging(settings.log_level)
    try:
        app = create_app(settings)
    except CatalogError as exc:
        logger.error("Startup failed: %s", exc)
        raise SystemExit(1) from exc
    logger.info("Server starting on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
