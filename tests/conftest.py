"""
Pytest configuration and fixtures for the OG service tests.
"""
import hashlib
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from bingo_og.codec.board_codec import SeededBoardCodec, encode_board_id
from bingo_og.core.config import Settings
from bingo_og.main import create_app
from bingo_og.services.edge_cache import InMemoryEdgeCache
from bingo_og.services.renderer import PNG_SIGNATURE, tree_to_html

PAGE_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Icebreaker Bingo</title>
  <link rel="canonical" href="https://icebreakerbingo.com/">
  <meta property="og:url" content="https://icebreakerbingo.com/">
  <meta property="og:image" content="https://icebreakerbingo.com/og-default.png">
  <meta property="og:image:width" content="1200">
  <meta name="twitter:image" content="https://icebreakerbingo.com/og-default.png">
  <meta name="description" content="Find people who match each square.">
</head>
<body><div id="app"></div></body>
</html>
"""


class FakeRenderer:
    """Deterministic stand-in for the Playwright renderer."""

    def __init__(self):
        self.calls = 0

    async def render(self, tree):
        self.calls += 1
        digest = hashlib.sha256(tree_to_html(tree).encode("utf-8")).digest()
        return PNG_SIGNATURE + digest


@pytest.fixture
def codec():
    return SeededBoardCodec()


@pytest.fixture
def board_id():
    """Board with cells 0, 6, 12, 18 and 24 marked; the center never counts."""
    return encode_board_id(12345, [0, 6, 12, 18, 24])


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def edge_cache():
    return InMemoryEdgeCache(max_entries=16)


@pytest.fixture
def site_dir(tmp_path):
    """Static page site with a board page and a script asset."""
    site = tmp_path / "site"
    site.mkdir()
    (site / "index.html").write_text(PAGE_HTML, encoding="utf-8")
    (site / "other.html").write_text(PAGE_HTML, encoding="utf-8")
    (site / "app.js").write_text('console.log("<meta property=\\"og:image\\">");', encoding="utf-8")
    return site


@pytest.fixture
def test_settings(site_dir):
    test_settings = Settings()
    test_settings.STATIC_DIR = site_dir
    test_settings.PUBLIC_ORIGIN = None
    test_settings.OG_THEME = "midnight"
    return test_settings


@pytest.fixture
def og_app(edge_cache, codec, fake_renderer, test_settings):
    return create_app(
        edge_cache=edge_cache,
        codec=codec,
        renderer=fake_renderer,
        settings=test_settings,
    )


@pytest.fixture
def client(og_app):
    """Test client for the FastAPI application."""
    return TestClient(og_app)


@pytest.fixture
def mock_playwright():
    """Mock Playwright for renderer tests."""
    with patch('bingo_og.services.renderer.async_playwright') as mock_playwright:
        mock_browser = AsyncMock()
        mock_page = AsyncMock()
        mock_png = PNG_SIGNATURE + b"fake png content"

        mock_page.screenshot = AsyncMock(return_value=mock_png)
        mock_browser.new_page = AsyncMock(return_value=mock_page)
        mock_browser.close = AsyncMock()

        mock_playwright.return_value.__aenter__.return_value.chromium.launch = AsyncMock(return_value=mock_browser)

        yield {
            'playwright': mock_playwright,
            'browser': mock_browser,
            'page': mock_page,
            'png': mock_png
        }


@pytest.fixture
def page_html():
    return PAGE_HTML
