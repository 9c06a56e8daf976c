"""HTML output: the image document, the guidance page and error pages."""

from __future__ import annotations

from html import escape
from typing import Iterable, Iterator, List

from spotifart.scraper.extractor import extract_track_art

INVALID_URL_PAGE = (
    "<html><p>Invalid Spotify URL</p>"
    "Please enter your input like one of the following:"
    "<ul><li>http://open.spotify.com/user/umphreys/playlist/6hBEw1ggOPkRZy9pBjibsA</li>"
    "<li>spotify:user:umphreys:playlist:6hBEw1ggOPkRZy9pBjibsA</li></ul></html>"
)


def render_image_document(links: Iterable[str]) -> Iterator[str]:
    """Yield the output document piece by piece.

    ``<html>`` first, then one ``<img src="..."/>`` line per link, then
    ``</html>``.  Link values are attribute-escaped.
    """
    yield "<html>"
    for link in links:
        yield f'<img src="{escape(link, quote=True)}"/>\n'
    yield "</html>"


def render_playlist_art(html: str) -> List[str]:
    """Extract the track art from an embed page and render the output pieces."""
    return list(render_image_document(extract_track_art(html)))


def render_error_page(message: str) -> str:
    """Return the HTML page shown when the playlist could not be scraped."""
    return (
        "<html><p>Could not load the playlist</p>"
        f"<p>{escape(message)}</p>"
        '<p><a href="/">Try again</a></p></html>'
    )
