"""Playlist form and track-art endpoints.

Routes
------
GET  /           The playlist form (text field ``url``)
POST /           Form body ``url=...``  → streamed image document
GET  /<other>    301 redirect to ``/``
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response, StreamingResponse

from spotifart.config import settings
from spotifart.scraper import open_playlist_art, resolve_playlist_url
from spotifart.scraper.errors import InvalidInputUrl, SpotifartError, UpstreamTimeoutError
from spotifart.scraper.renderer import INVALID_URL_PAGE, render_error_page

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _redirect_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=301)


def _error_response(exc: SpotifartError) -> HTMLResponse:
    status_code = 504 if isinstance(exc, UpstreamTimeoutError) else 502
    return HTMLResponse(render_error_page(str(exc)), status_code=status_code)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/", response_class=HTMLResponse)
def playlist_form() -> HTMLResponse:
    """Serve the static playlist form."""
    return HTMLResponse(settings.form_path.read_text(encoding="utf-8"))


@router.post("/")
async def playlist_art(request: Request) -> Response:
    """Scrape the submitted playlist's embed page and stream its track art.

    Unrecognised input gets the guidance page without any upstream request.
    Upstream failures are reported as a 502 (504 on timeout) HTML page; the
    pipeline is primed before the response starts, so a failure never
    surfaces halfway through a 200.

    A request without a ``url`` field is sent back to the form; an empty
    ``url`` is treated like any other unrecognised input.
    """
    # Read the form directly: a declared Form field would map "" to None.
    form = await request.form()
    url = form.get("url")
    if url is None:
        return _redirect_home()

    try:
        if not isinstance(url, str):
            # A file upload named "url" in a multipart body.
            raise InvalidInputUrl(repr(url))
        target = resolve_playlist_url(url)
    except InvalidInputUrl:
        logger.info("Rejected playlist input %r", url)
        return HTMLResponse(INVALID_URL_PAGE)

    client = request.app.state.http_client
    try:
        pieces = await open_playlist_art(client, target)
    except SpotifartError as exc:
        logger.warning("Track art for %s failed: %s", target.uri, exc)
        return _error_response(exc)

    return StreamingResponse(pieces, media_type="text/html")


@router.get("/{path:path}", include_in_schema=False)
def redirect_home(path: str) -> RedirectResponse:
    """Any other GET goes back to the form."""
    return _redirect_home()
