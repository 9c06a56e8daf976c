"""Exceptions raised by the playlist-art pipeline.

Every failure the pipeline can hit is one of these, so the HTTP layer and the
CLI only need to catch :class:`SpotifartError`.
"""

from __future__ import annotations

from typing import Optional


class SpotifartError(Exception):
    """Base class for all pipeline errors."""


class InvalidInputUrl(SpotifartError):
    """The user-supplied string is not a recognised playlist URL."""

    def __init__(self, user_url: str) -> None:
        super().__init__(f"Not a Spotify playlist URL: {user_url!r}")
        self.user_url = user_url


class RemoteFetchError(SpotifartError):
    """The embed page could not be retrieved or decoded."""

    def __init__(
        self, url: str, status_code: Optional[int] = None, reason: str = ""
    ) -> None:
        if status_code is not None:
            message = f"Upstream returned HTTP {status_code} for {url}"
        else:
            message = f"Upstream response for {url} could not be read"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NetworkError(SpotifartError):
    """Connection-level failure talking to the upstream host."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Network error fetching {url}: {reason}")
        self.url = url


class UpstreamTimeoutError(SpotifartError):
    """The upstream host did not connect or send data within the timeout."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Timed out after {timeout:g}s waiting for {url}")
        self.url = url
        self.timeout = timeout


class IncompleteDocumentError(SpotifartError):
    """The upstream body ended before the closing ``</html>`` tag arrived."""

    def __init__(self, chunk_count: int, byte_count: int) -> None:
        super().__init__(
            f"Upstream document ended without </html> "
            f"after {chunk_count} chunk(s), {byte_count} byte(s)"
        )
        self.chunk_count = chunk_count
        self.byte_count = byte_count
