"""
Integration tests for the board OG image endpoint.
"""
import pytest
from fastapi.testclient import TestClient

from bingo_og.exceptions import RenderError, UnknownThemeError
from bingo_og.main import create_app
from bingo_og.services.edge_cache import CacheEntry
from bingo_og.services.renderer import PNG_SIGNATURE

OG_CACHE_CONTROL = "public, max-age=31536000, immutable"


class TestOGImageValidation:

    @pytest.mark.parametrize("params", [{}, {"g": ""}, {"g": "short"}, {"g": "abcdefghijklm"}])
    def test_bad_board_id_is_rejected(self, client, edge_cache, fake_renderer, params):
        response = client.get("/og", params=params)

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Missing or invalid board ID"
        assert "cache-control" not in response.headers
        assert len(edge_cache) == 0
        assert fake_renderer.calls == 0

    def test_unknown_theme_is_rejected(self, client, edge_cache, board_id):
        response = client.get("/og", params={"g": board_id, "theme": "sepia"})

        assert response.status_code == 400
        assert "Unknown theme 'sepia'" in response.text
        assert len(edge_cache) == 0


class TestOGImageGeneration:

    def test_renders_png(self, client, board_id):
        response = client.get(f"/og?g={board_id}")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["cache-control"] == OG_CACHE_CONTROL
        assert response.headers["content-length"] == str(len(response.content))
        assert response.content.startswith(PNG_SIGNATURE)

    def test_response_is_stored_under_canonical_url(self, client, edge_cache, board_id):
        response = client.get(f"/og?g={board_id}")

        key = f"http://testserver/og?g={board_id}"
        assert key in edge_cache
        assert len(edge_cache) == 1

        entry = edge_cache._entries[key]
        assert entry.body == response.content
        assert entry.headers["Cache-Control"] == OG_CACHE_CONTROL

    def test_second_request_is_served_from_cache(self, client, fake_renderer, board_id):
        first = client.get(f"/og?g={board_id}")
        second = client.get(f"/og?g={board_id}")

        assert second.status_code == 200
        assert second.content == first.content
        assert second.headers["content-type"] == "image/png"
        assert second.headers["cache-control"] == OG_CACHE_CONTROL
        assert fake_renderer.calls == 1

    def test_rerender_without_cache_is_identical(self, client, edge_cache, board_id):
        first = client.get(f"/og?g={board_id}")
        edge_cache._entries.clear()
        second = client.get(f"/og?g={board_id}")

        assert second.content == first.content

    def test_cache_hit_is_returned_unchanged(self, client, edge_cache, fake_renderer, board_id):
        key = f"http://testserver/og?g={board_id}"
        edge_cache._entries[key] = CacheEntry(
            body=b"cached-bytes",
            headers={"Content-Type": "image/png", "Cache-Control": OG_CACHE_CONTROL},
        )

        response = client.get(f"/og?g={board_id}")

        assert response.content == b"cached-bytes"
        assert fake_renderer.calls == 0

    def test_theme_is_part_of_cache_key(self, client, edge_cache, board_id):
        midnight = client.get("/og", params={"g": board_id})
        neon = client.get("/og", params={"g": board_id, "theme": "neon"})

        assert midnight.status_code == neon.status_code == 200
        assert midnight.content != neon.content
        assert len(edge_cache) == 2


class TestOGImageFailures:

    def test_decode_failure_is_500_and_not_cached(self, client, edge_cache, fake_renderer):
        response = client.get("/og?g=abc$efghijkl")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text.startswith("Failed to generate OG image:")
        assert "Invalid character" in response.text
        assert len(edge_cache) == 0
        assert fake_renderer.calls == 0

    def test_render_failure_is_500_and_not_cached(self, og_app, client, edge_cache, fake_renderer, board_id):
        class FailingRenderer:
            async def render(self, tree):
                raise RenderError("Unsupported style property 'filter' on cell 0")

        og_app.state.og_service.renderer = FailingRenderer()
        failed = client.get(f"/og?g={board_id}")

        assert failed.status_code == 500
        assert "Unsupported style property" in failed.text
        assert len(edge_cache) == 0

        og_app.state.og_service.renderer = fake_renderer
        recovered = client.get(f"/og?g={board_id}")

        assert recovered.status_code == 200
        assert len(edge_cache) == 1

    def test_unexpected_error_is_500(self, og_app, client, edge_cache, board_id):
        class BuggyRenderer:
            async def render(self, tree):
                raise ZeroDivisionError("division by zero")

        og_app.state.og_service.renderer = BuggyRenderer()
        response = client.get(f"/og?g={board_id}")

        assert response.status_code == 500
        assert "division by zero" in response.text
        assert len(edge_cache) == 0

    def test_cache_write_failure_does_not_fail_response(self, og_app, client, board_id):
        class ReadOnlyCache:
            async def get(self, key):
                return None

            async def put(self, key, entry):
                raise ConnectionError("cache unavailable")

        og_app.state.edge_cache = ReadOnlyCache()
        response = client.get(f"/og?g={board_id}")

        assert response.status_code == 200
        assert response.content.startswith(PNG_SIGNATURE)


def test_health_endpoint(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "og"}


class TestInjectedSettings:

    class RecordingRenderer:
        def __init__(self):
            self.seen = []

        async def render(self, tree):
            self.seen.append((tree.theme_name, tree.title.text, tree.footer_brand.text))
            return PNG_SIGNATURE + b"recorded"

    def test_theme_title_and_site_name_come_from_settings(self, edge_cache, codec, test_settings):
        test_settings.OG_THEME = "neon"
        test_settings.APP_TITLE = "Office Bingo"
        test_settings.SITE_NAME = "office.example"
        renderer = self.RecordingRenderer()
        app = create_app(edge_cache=edge_cache, codec=codec, renderer=renderer, settings=test_settings)

        response = TestClient(app).get("/og?g=AAAAAAAAAAAA")

        assert response.status_code == 200
        assert renderer.seen == [("neon", "Office Bingo", "office.example")]
        assert app.state.settings is test_settings

    def test_theme_query_still_overrides_default(self, edge_cache, codec, test_settings):
        test_settings.OG_THEME = "neon"
        renderer = self.RecordingRenderer()
        app = create_app(edge_cache=edge_cache, codec=codec, renderer=renderer, settings=test_settings)

        TestClient(app).get("/og", params={"g": "AAAAAAAAAAAA", "theme": "daylight"})

        assert renderer.seen[0][0] == "daylight"

    def test_unknown_default_theme_fails_at_startup(self, edge_cache, codec, fake_renderer, test_settings):
        test_settings.OG_THEME = "sepia"

        with pytest.raises(UnknownThemeError):
            create_app(edge_cache=edge_cache, codec=codec, renderer=fake_renderer, settings=test_settings)
