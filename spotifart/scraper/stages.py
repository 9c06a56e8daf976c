"""Transform stages and the composition helper that chains them.

A stage is any object with ``feed(chunk) -> list``, ``finish() -> list`` and a
``done`` flag.  :func:`run_stages` pipes an async source through a sequence of
stages: each upstream chunk is fed in arrival order, whatever the stage
returns is passed downstream, and ``finish()`` runs once the source is
exhausted.  A stage that sets ``done`` stops the pull from upstream, and the
upstream generator is closed straight away.

The decompression stages live here too; :mod:`spotifart.scraper.fetcher`
picks one from the response's ``Content-Encoding`` header.
"""

from __future__ import annotations

import zlib
from contextlib import aclosing
from typing import Any, AsyncIterator, List, Optional, Protocol


class Stage(Protocol):
    done: bool

    def feed(self, chunk: Any) -> List[Any]: ...

    def finish(self) -> List[Any]: ...


# ---------------------------------------------------------------------------
# Decompression stages
# ---------------------------------------------------------------------------

class IdentityStage:
    """Pass bytes through unchanged."""

    done = False

    def feed(self, chunk: bytes) -> List[bytes]:
        return [chunk] if chunk else []

    def finish(self) -> List[bytes]:
        return []


class GzipStage:
    """Inflate a gzip-framed body incrementally."""

    done = False

    def __init__(self) -> None:
        self._decompressor = zlib.decompressobj(zlib.MAX_WBITS | 16)

    def feed(self, chunk: bytes) -> List[bytes]:
        data = self._decompressor.decompress(chunk)
        return [data] if data else []

    def finish(self) -> List[bytes]:
        data = self._decompressor.flush()
        return [data] if data else []


class DeflateStage:
    """Inflate a ``Content-Encoding: deflate`` body incrementally.

    Servers disagree on whether "deflate" means zlib-wrapped or raw deflate
    data, so a failure on the very first chunk retries it as raw deflate.
    """

    done = False

    def __init__(self) -> None:
        self._first_attempt = True
        self._decompressor = zlib.decompressobj()

    def feed(self, chunk: bytes) -> List[bytes]:
        was_first_attempt = self._first_attempt
        self._first_attempt = False
        try:
            data = self._decompressor.decompress(chunk)
        except zlib.error:
            if not was_first_attempt:
                raise
            self._decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
            data = self._decompressor.decompress(chunk)
        return [data] if data else []

    def finish(self) -> List[bytes]:
        data = self._decompressor.flush()
        return [data] if data else []


def decoder_for(content_encoding: Optional[str]) -> Stage:
    """Return the decompression stage matching *content_encoding*."""
    encoding = (content_encoding or "").strip().lower()
    if encoding == "gzip":
        return GzipStage()
    if encoding == "deflate":
        return DeflateStage()
    return IdentityStage()


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

async def _pipe(source: AsyncIterator[Any], stage: Stage) -> AsyncIterator[Any]:
    async with aclosing(source) as chunks:
        async for chunk in chunks:
            for item in stage.feed(chunk):
                yield item
            if stage.done:
                return
        for item in stage.finish():
            yield item


def run_stages(source: AsyncIterator[Any], *stages: Stage) -> AsyncIterator[Any]:
    """Chain *stages* onto *source*, first stage nearest the source.

    *source* must be an async generator (anything with ``aclose``).
    """
    stream = source
    for stage in stages:
        stream = _pipe(stream, stage)
    return stream
