"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single ``httpx.AsyncClient`` (shared across all
requests via ``request.app.state.http_client``) for talking to the embed
host.  On shutdown it closes the client cleanly.  Per-request pipeline state
is never stored on the app.

Routers
-------
    /          playlist form, track-art POST, catch-all redirect
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from spotifart import __version__
from spotifart.logging_config import configure_logging
from spotifart.scraper.fetcher import new_client

from spotifart.api.routers import playlist as playlist_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the upstream HTTP client on startup and close it on shutdown."""
    client = new_client()
    app.state.http_client = client
    try:
        yield
    finally:
        await client.aclose()


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()

    app = FastAPI(
        title="Spotifart",
        description=(
            "Paste a Spotify playlist link and get back a page with the "
            "cover art of every track on it."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(playlist_router.router, tags=["playlist"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn spotifart.api.app:app --reload
app = create_app()
