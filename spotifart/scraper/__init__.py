"""Scraper package: embed-page fetch, track-art extraction and rendering."""

from spotifart.scraper.errors import (
    IncompleteDocumentError,
    InvalidInputUrl,
    NetworkError,
    RemoteFetchError,
    SpotifartError,
    UpstreamTimeoutError,
)
from spotifart.scraper.models import PlaylistTarget
from spotifart.scraper.pipeline import (
    collect_playlist_art,
    open_playlist_art,
    stream_playlist_art,
)
from spotifart.scraper.playlist_url import resolve_playlist_url

__all__ = [
    "collect_playlist_art",
    "open_playlist_art",
    "stream_playlist_art",
    "resolve_playlist_url",
    "PlaylistTarget",
    "SpotifartError",
    "InvalidInputUrl",
    "RemoteFetchError",
    "NetworkError",
    "UpstreamTimeoutError",
    "IncompleteDocumentError",
]
