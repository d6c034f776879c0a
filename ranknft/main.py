"""FastAPI application: metadata API, static images and the ranking updater."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import Settings
from .ranking import (
    ColorStore,
    ImageRenderer,
    RankingCache,
    RankingUpdater,
    create_collection_source,
    create_metadata_router,
    create_reference_provider,
)

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, updater: RankingUpdater | None = None) -> FastAPI:
    """Build the application.

    Without an explicit `updater`, one is assembled from `settings` and
    started in the lifespan. Tests pass their own to avoid background
    network traffic.
    """
    settings = settings or Settings.from_env()
    settings.images_dir.mkdir(parents=True, exist_ok=True)

    if updater is None:
        updater = RankingUpdater(
            source=create_collection_source(settings),
            reference=create_reference_provider(settings),
            cache=RankingCache(),
            renderer=ImageRenderer(settings.assets_dir, settings.images_dir),
            color_store=ColorStore(settings.colors_file) if settings.sticky_colors else None,
            interval=settings.update_interval,
            cycle_timeout=settings.cycle_timeout,
        )
    cache = updater.cache

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await updater.start()
        try:
            yield
        finally:
            await updater.stop()

    app = FastAPI(title="ranknft", lifespan=lifespan)
    app.state.settings = settings
    app.state.cache = cache
    app.state.updater = updater
    app.include_router(create_metadata_router(cache, settings.server_url))
    app.mount("/images", StaticFiles(directory=settings.images_dir), name="images")
    return app


def run() -> None:
    """Console entry point: `ranknft`."""
    import uvicorn

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    app = create_app(settings)
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
