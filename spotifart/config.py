"""Centralised settings for the Spotifart service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 6.3; WOW64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/33.0.1750.117 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Upstream embed page
    # ------------------------------------------------------------------
    embed_base_url: str = field(
        default_factory=lambda: os.environ.get(
            "SPOTIFART_EMBED_BASE_URL", "https://embed.spotify.com/"
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("SPOTIFART_USER_AGENT", _DESKTOP_USER_AGENT)
    )
    accept: str = field(
        default_factory=lambda: os.environ.get(
            "SPOTIFART_ACCEPT",
            "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        )
    )
    accept_language: str = field(
        default_factory=lambda: os.environ.get("SPOTIFART_ACCEPT_LANGUAGE", "en-US,en;q=0.8")
    )

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(
        default_factory=lambda: os.environ.get("SPOTIFART_HOST", "127.0.0.1")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("SPOTIFART_PORT", "8889"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    @property
    def form_path(self) -> Path:
        """Absolute path to the playlist form bundled with the package."""
        return Path(__file__).resolve().parent / "api" / "templates" / "form.html"

    @property
    def request_headers(self) -> dict[str, str]:
        """Headers sent with every embed-page request.

        Only the encodings the pipeline decodes itself are advertised.
        """
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            "Accept-Encoding": "gzip, deflate",
            "Accept-Language": self.accept_language,
        }


# Module-level singleton, import this everywhere:
#   from spotifart.config import settings
settings = Settings()
