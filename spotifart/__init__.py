"""Spotifart: track-art wall for Spotify playlists."""

__version__ = "0.2.0"
