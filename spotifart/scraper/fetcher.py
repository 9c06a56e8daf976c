"""Streaming HTTP fetcher for the playlist embed page."""

from __future__ import annotations

import logging
import zlib
from contextlib import aclosing
from typing import AsyncIterator

import httpx

from spotifart.config import settings
from spotifart.scraper.errors import NetworkError, RemoteFetchError, UpstreamTimeoutError
from spotifart.scraper.stages import decoder_for, run_stages

logger = logging.getLogger(__name__)


def new_client() -> httpx.AsyncClient:
    """Return an ``httpx.AsyncClient`` configured from settings.

    The timeout applies to connecting and to every read, so an upstream that
    stops sending mid-body fails instead of stalling the request.
    """
    return httpx.AsyncClient(
        timeout=settings.request_timeout,
        follow_redirects=True,
    )


async def fetch_body(client: httpx.AsyncClient, url: str) -> AsyncIterator[bytes]:
    """GET *url* and yield the decoded response body chunk by chunk.

    The raw body is read with ``aiter_raw`` and run through the decoder stage
    chosen from ``Content-Encoding`` (gzip, deflate or pass-through).

    Raises:
        RemoteFetchError: On a non-2xx status, a redirect loop, an unusable
            URL or a corrupt compressed body.
        UpstreamTimeoutError: If connecting or any read times out.
        NetworkError: On any other connection-level failure.
    """
    logger.info("Fetching embed page %s", url)
    try:
        async with client.stream("GET", url, headers=settings.request_headers) as response:
            if not response.is_success:
                raise RemoteFetchError(
                    url,
                    status_code=response.status_code,
                    reason=response.reason_phrase,
                )

            encoding = response.headers.get("content-encoding")
            logger.debug("HTTP %s from %s (content-encoding=%s)", response.status_code, url, encoding)
            decoded = run_stages(response.aiter_raw(), decoder_for(encoding))
            async with aclosing(decoded) as chunks:
                async for chunk in chunks:
                    yield chunk
    except httpx.TimeoutException as exc:
        raise UpstreamTimeoutError(url, settings.request_timeout) from exc
    except httpx.TransportError as exc:
        raise NetworkError(url, str(exc) or type(exc).__name__) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        # Redirect loops, malformed URLs and other non-transport failures.
        raise RemoteFetchError(url, reason=str(exc) or type(exc).__name__) from exc
    except zlib.error as exc:
        raise RemoteFetchError(url, reason=f"corrupt compressed body ({exc})") from exc
