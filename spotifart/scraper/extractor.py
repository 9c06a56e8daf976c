"""Track-art extraction: turns embed-page HTML into a list of image URLs."""

from __future__ import annotations

from typing import Iterable, List

from bs4 import BeautifulSoup

# Track rows are <li rel="track"> elements inside the #mainContainer region;
# each carries its cover-art URL in data-ca.
TRACK_ROW_SELECTOR = '#mainContainer li[rel="track"]'
TRACK_ART_ATTRIBUTE = "data-ca"


def parse_document(html: str) -> BeautifulSoup:
    """Parse *html* with the stdlib-backed ``html.parser`` tree builder."""
    return BeautifulSoup(html, "html.parser")


def extract_track_links(document: BeautifulSoup) -> List[str]:
    """Return the ``data-ca`` value of every track row, in document order.

    Rows outside ``#mainContainer`` are ignored, and a page without the
    container yields ``[]``.  Rows lacking the attribute (or carrying an
    empty one) are skipped rather than kept as placeholders.
    """
    links: List[str] = []
    for row in document.select(TRACK_ROW_SELECTOR):
        link = row.get(TRACK_ART_ATTRIBUTE)
        if link:
            links.append(link)
    return links


def dedupe_last_occurrence(links: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping each value at its *last* position.

    Implemented as reverse, keep-first-seen, reverse::

        >>> dedupe_last_occurrence(["a", "b", "a", "c", "b"])
        ['a', 'c', 'b']
    """
    seen: set[str] = set()
    kept: List[str] = []
    for link in reversed(list(links)):
        if link not in seen:
            seen.add(link)
            kept.append(link)
    kept.reverse()
    return kept


def extract_track_art(html: str) -> List[str]:
    """Parse *html* and return its deduplicated track-art URLs."""
    return dedupe_last_occurrence(extract_track_links(parse_document(html)))
