"""Tests for the playlist form and track-art HTTP endpoints.

The FastAPI TestClient drives the app; ``respx`` intercepts the app's own
outbound requests to the embed host, so no network is touched.
"""

from __future__ import annotations

import gzip

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from spotifart.api.app import create_app
from spotifart.scraper.renderer import INVALID_URL_PAGE


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_PLAYLIST = "https://open.spotify.com/user/umphreys/playlist/6hBEw1ggOPkRZy9pBjibsA"
_EMBED_URL = (
    "https://embed.spotify.com/?uri=spotify:user:umphreys:playlist:6hBEw1ggOPkRZy9pBjibsA"
)

_EMBED_PAGE = """\
<!DOCTYPE html>
<html>
<body>
  <div id="mainContainer">
    <ul>
      <li rel="track" data-ca="https://i.scdn.co/image/a">One</li>
      <li rel="track" data-ca="https://i.scdn.co/image/b">Two</li>
      <li rel="track" data-ca="https://i.scdn.co/image/a">Three</li>
    </ul>
  </div>
</body>
</html>
""".encode()

_EXPECTED = (
    "<html>"
    '<img src="https://i.scdn.co/image/b"/>\n'
    '<img src="https://i.scdn.co/image/a"/>\n'
    "</html>"
)


@pytest.fixture()
def client():
    """Return a TestClient whose lifespan has opened the upstream client."""
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


# ---------------------------------------------------------------------------
# GET
# ---------------------------------------------------------------------------

class TestForm:
    def test_root_serves_form(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert '<form method="post"' in resp.text
        assert 'name="url"' in resp.text

    @pytest.mark.parametrize("path", ["/favicon.ico", "/user/umphreys", "/a/b/c"])
    def test_other_paths_redirect_home(self, client, path):
        resp = client.get(path, follow_redirects=False)
        assert resp.status_code == 301
        assert resp.headers["location"] == "/"


# ---------------------------------------------------------------------------
# POST
# ---------------------------------------------------------------------------

class TestPlaylistArt:
    def test_streams_image_document(self, client):
        with respx.mock:
            respx.get(_EMBED_URL).mock(return_value=httpx.Response(200, content=_EMBED_PAGE))
            resp = client.post("/", data={"url": _PLAYLIST})

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert resp.text == _EXPECTED

    def test_gzip_upstream(self, client):
        with respx.mock:
            respx.get(_EMBED_URL).mock(
                return_value=httpx.Response(
                    200,
                    headers={"Content-Encoding": "gzip"},
                    content=gzip.compress(_EMBED_PAGE),
                )
            )
            resp = client.post("/", data={"url": _PLAYLIST})

        assert resp.status_code == 200
        assert resp.text == _EXPECTED

    def test_invalid_url_gets_guidance_without_fetch(self, client):
        with respx.mock(assert_all_called=False) as mock:
            route = mock.get(_EMBED_URL)
            resp = client.post("/", data={"url": "https://example.com/not-spotify"})

        assert resp.status_code == 200
        assert resp.text == INVALID_URL_PAGE
        assert not route.called

    def test_missing_url_redirects_home(self, client):
        resp = client.post("/", data={"playlist": _PLAYLIST}, follow_redirects=False)
        assert resp.status_code == 301
        assert resp.headers["location"] == "/"

    def test_empty_url_gets_guidance(self, client):
        with respx.mock(assert_all_called=False) as mock:
            resp = client.post("/", data={"url": ""}, follow_redirects=False)

        assert resp.status_code == 200
        assert resp.text == INVALID_URL_PAGE
        assert mock.calls.call_count == 0

    def test_control_character_in_id_gets_guidance(self, client):
        with respx.mock(assert_all_called=False) as mock:
            resp = client.post("/", data={"url": "spotify:user:u:playlist:abc\x01def"})

        assert resp.status_code == 200
        assert resp.text == INVALID_URL_PAGE
        assert mock.calls.call_count == 0

    def test_redirect_loop_is_502_page(self, client):
        with respx.mock:
            respx.get(_EMBED_URL).mock(
                return_value=httpx.Response(302, headers={"Location": _EMBED_URL})
            )
            resp = client.post("/", data={"url": _PLAYLIST})

        assert resp.status_code == 502
        assert resp.text.startswith("<html>")
        assert "redirects" in resp.text

    def test_upstream_error_is_502_page(self, client):
        with respx.mock:
            respx.get(_EMBED_URL).mock(return_value=httpx.Response(500))
            resp = client.post("/", data={"url": _PLAYLIST})

        assert resp.status_code == 502
        assert resp.text.startswith("<html>")
        assert "HTTP 500" in resp.text

    def test_network_error_is_502_page(self, client):
        with respx.mock:
            respx.get(_EMBED_URL).mock(side_effect=httpx.ConnectError("refused"))
            resp = client.post("/", data={"url": _PLAYLIST})

        assert resp.status_code == 502
        assert "Network error" in resp.text

    def test_timeout_is_504_page(self, client):
        with respx.mock:
            respx.get(_EMBED_URL).mock(side_effect=httpx.ReadTimeout("stalled"))
            resp = client.post("/", data={"url": _PLAYLIST})

        assert resp.status_code == 504
        assert "Timed out" in resp.text

    def test_truncated_page_is_502_page(self, client):
        truncated = _EMBED_PAGE[: _EMBED_PAGE.index(b"</html>")]
        with respx.mock:
            respx.get(_EMBED_URL).mock(return_value=httpx.Response(200, content=truncated))
            resp = client.post("/", data={"url": _PLAYLIST})

        assert resp.status_code == 502
        assert "without &lt;/html&gt;" in resp.text

    def test_requests_are_independent(self, client):
        other_url = _EMBED_URL.replace("umphreys", "someone")
        other_page = _EMBED_PAGE.replace(b"/image/", b"/other/")
        with respx.mock:
            respx.get(_EMBED_URL).mock(return_value=httpx.Response(200, content=_EMBED_PAGE))
            respx.get(other_url).mock(return_value=httpx.Response(200, content=other_page))
            first = client.post("/", data={"url": _PLAYLIST})
            second = client.post(
                "/", data={"url": "spotify:user:someone:playlist:6hBEw1ggOPkRZy9pBjibsA"}
            )

        assert first.text == _EXPECTED
        assert second.text == _EXPECTED.replace("/image/", "/other/")
