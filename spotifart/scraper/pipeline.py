"""Pipeline composition: fetch → assemble → extract/render.

:func:`stream_playlist_art` is the whole pipeline as one async generator of
output pieces.  :func:`open_playlist_art` primes it before an HTTP response is
committed, and :func:`collect_playlist_art` runs it to completion for the CLI.
"""

from __future__ import annotations

import logging
from contextlib import aclosing
from typing import AsyncIterator, Optional

import httpx

from spotifart.scraper.assembler import DocumentAssembler
from spotifart.scraper.fetcher import fetch_body, new_client
from spotifart.scraper.models import PlaylistTarget
from spotifart.scraper.playlist_url import resolve_playlist_url
from spotifart.scraper.renderer import render_playlist_art
from spotifart.scraper.stages import run_stages

logger = logging.getLogger(__name__)


async def stream_playlist_art(
    client: httpx.AsyncClient, target: PlaylistTarget
) -> AsyncIterator[str]:
    """Yield the rendered image document for *target*.

    Every request gets its own :class:`DocumentAssembler`; nothing is shared
    between concurrent runs except the client's connection pool.
    """
    assembler = DocumentAssembler(render=render_playlist_art)
    pieces = run_stages(fetch_body(client, target.embed_url), assembler)
    link_count = 0
    async with aclosing(pieces) as output:
        async for piece in output:
            if piece.startswith("<img"):
                link_count += 1
            yield piece
    logger.info(
        "Rendered %d track image(s) for %s (%d chunk(s), %d byte(s))",
        link_count,
        target.uri,
        assembler.chunk_count,
        assembler.byte_count,
    )


async def _prepend(first: str, rest: AsyncIterator[str]) -> AsyncIterator[str]:
    yield first
    async with aclosing(rest) as pieces:
        async for piece in pieces:
            yield piece


async def open_playlist_art(
    client: httpx.AsyncClient, target: PlaylistTarget
) -> AsyncIterator[str]:
    """Start the pipeline and wait for its first output piece.

    The assembler emits nothing until the whole document has arrived, so any
    fetch, network, timeout or truncation error is raised from here, before
    the caller has sent a status line.  The returned iterator yields the
    primed piece followed by the rest of the document.
    """
    pieces = stream_playlist_art(client, target)
    try:
        first = await anext(pieces)
    except BaseException:
        await pieces.aclose()
        raise
    return _prepend(first, pieces)


async def collect_playlist_art(
    user_url: str, client: Optional[httpx.AsyncClient] = None
) -> str:
    """Resolve *user_url*, run the pipeline and return the whole document.

    Raises:
        SpotifartError: Any pipeline failure, including ``InvalidInputUrl``.
    """
    target = resolve_playlist_url(user_url)
    if client is None:
        async with new_client() as own_client:
            return await _join(own_client, target)
    return await _join(client, target)


async def _join(client: httpx.AsyncClient, target: PlaylistTarget) -> str:
    parts = []
    async with aclosing(stream_playlist_art(client, target)) as pieces:
        async for piece in pieces:
            parts.append(piece)
    return "".join(parts)
