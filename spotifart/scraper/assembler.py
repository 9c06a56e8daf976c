"""Stream assembler: buffers body chunks until the document is complete."""

from __future__ import annotations

import logging
from typing import Callable, List

from spotifart.scraper.errors import IncompleteDocumentError

logger = logging.getLogger(__name__)

COMPLETION_MARKER = b"</html>"


class DocumentAssembler:
    """Stage that accumulates raw chunks and renders once ``</html>`` arrives.

    Nothing is emitted while the document is incomplete.  The chunk carrying
    the marker triggers a single join of the buffer, the text is handed to
    *render*, and its output pieces are returned with ``done`` set so the
    pipeline stops reading upstream.

    Only the new chunk (plus the last ``len(marker) - 1`` bytes of the
    previous one, in case the marker straddles the boundary) is searched, so
    the total work stays linear in the document size.
    """

    def __init__(
        self,
        render: Callable[[str], List[str]],
        marker: bytes = COMPLETION_MARKER,
        encoding: str = "utf-8",
    ) -> None:
        self.render = render
        self.marker = marker.lower()
        self.encoding = encoding
        self.buffer: List[bytes] = []
        self.chunk_count = 0
        self.byte_count = 0
        self.done = False
        self._tail = b""

    def feed(self, chunk: bytes) -> List[str]:
        if self.done or not chunk:
            return []

        self.chunk_count += 1
        self.byte_count += len(chunk)
        self.buffer.append(chunk)
        logger.debug("chunk %d: %d bytes", self.chunk_count, len(chunk))

        window = (self._tail + chunk).lower()
        if self.marker not in window:
            self._tail = window[-(len(self.marker) - 1):] if len(self.marker) > 1 else b""
            return []

        self.done = True
        text = b"".join(self.buffer).decode(self.encoding, errors="replace")
        self.buffer = []
        logger.debug(
            "document complete after %d chunk(s), %d byte(s)",
            self.chunk_count,
            self.byte_count,
        )
        return self.render(text)

    def finish(self) -> List[str]:
        if not self.done:
            raise IncompleteDocumentError(self.chunk_count, self.byte_count)
        return []
