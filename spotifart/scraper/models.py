"""Data models for the playlist-art pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlaylistTarget:
    """A resolved playlist and the embed page to scrape for it.

    Built once per request and passed explicitly through the pipeline.
    """

    user: str
    playlist_id: str
    embed_url: str

    @property
    def uri(self) -> str:
        return f"spotify:user:{self.user}:playlist:{self.playlist_id}"
