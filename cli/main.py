"""Spotifart CLI: entry-point for resolving, scraping and serving.

Usage:
    python cli/main.py --help

Commands:
    resolve   → print the embed page a playlist link maps to
    art       → scrape a playlist and print its track-art document
    serve     → run the web form under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from spotifart.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import Optional

import typer

from spotifart.config import settings
from spotifart.logging_config import configure_logging
from spotifart.scraper import collect_playlist_art, resolve_playlist_url
from spotifart.scraper.errors import SpotifartError

app = typer.Typer(
    name="spotifart",
    help="Track-art wall for Spotify playlists.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Root log level."),
) -> None:
    configure_logging(log_level)


@app.command("resolve")
def resolve(
    url: str = typer.Argument(..., help="Playlist link or spotify: URI."),
) -> None:
    """Print the embed-page URL a playlist link resolves to."""
    try:
        target = resolve_playlist_url(url)
    except SpotifartError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(target.embed_url)


@app.command("art")
def art(
    url: str = typer.Argument(..., help="Playlist link or spotify: URI."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the document here instead of stdout."
    ),
) -> None:
    """Scrape a playlist's embed page and print its track-art document."""
    try:
        document = asyncio.run(collect_playlist_art(url))
    except SpotifartError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(document)
        return
    output.write_text(document, encoding="utf-8")
    typer.echo(f"[art] Wrote {output}")


@app.command("serve")
def serve(
    host: str = typer.Option(settings.host, help="Bind address."),
    port: int = typer.Option(settings.port, help="Bind port."),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes."),
) -> None:
    """Run the playlist form and track-art endpoint under uvicorn."""
    import uvicorn  # noqa: PLC0415

    typer.echo(f"[serve] Listening on http://{host}:{port}/")
    uvicorn.run("spotifart.api.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
