"""Translate user-supplied playlist links into the embed page to scrape.

Accepted shapes (host match is case-insensitive)::

    http(s)://open.spotify.com/user/<user>/playlist/<id>
    http(s)://play.spotify.com/user/<user>/playlist/<id>
    spotify:user:<user>:playlist:<id>

The URI form is searched for anywhere in the input, so an existing embed URL
(``https://embed.spotify.com/?uri=spotify:user:...``) resolves as well.
"""

from __future__ import annotations

import re
from typing import Optional

from spotifart.config import settings
from spotifart.scraper.errors import InvalidInputUrl
from spotifart.scraper.models import PlaylistTarget

# Playlist ids are base-62 and must end at a URL delimiter or the end of the
# input: "abc\x01def" is rejected rather than truncated to "abc", and nothing
# after a "?" or "&" reaches the embed URL.
_PLAYLIST_ID = r"([A-Za-z0-9]+)(?=$|[/?#&\s])"

_PLAYLIST_PATTERNS = [
    re.compile(r"https?://open\.spotify\.com/user/(\w+)/playlist/" + _PLAYLIST_ID, re.IGNORECASE),
    re.compile(r"https?://play\.spotify\.com/user/(\w+)/playlist/" + _PLAYLIST_ID, re.IGNORECASE),
    re.compile(r"spotify:user:(\w+):playlist:" + _PLAYLIST_ID, re.IGNORECASE),
]


def build_embed_url(user: str, playlist_id: str, base_url: Optional[str] = None) -> str:
    """Return the embed-page URL for *user*'s playlist *playlist_id*."""
    base = base_url if base_url is not None else settings.embed_base_url
    return f"{base}?uri=spotify:user:{user}:playlist:{playlist_id}"


def resolve_playlist_url(user_url: str, base_url: Optional[str] = None) -> PlaylistTarget:
    """Match *user_url* against the accepted shapes and return its target.

    Raises:
        InvalidInputUrl: If none of the accepted shapes match.
    """
    candidate = (user_url or "").strip()
    for pattern in _PLAYLIST_PATTERNS:
        match = pattern.search(candidate)
        if match:
            user, playlist_id = match.group(1), match.group(2)
            return PlaylistTarget(
                user=user,
                playlist_id=playlist_id,
                embed_url=build_embed_url(user, playlist_id, base_url),
            )
    raise InvalidInputUrl(user_url)
