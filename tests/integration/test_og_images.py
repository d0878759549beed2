"""
Integration tests for OG image generation over an in-process ASGI transport.
"""
import httpx
import pytest

from bingo_og.services.renderer import PNG_SIGNATURE


@pytest.mark.asyncio
async def test_board_og_image(og_app, board_id):
    """Test GET /og endpoint."""
    transport = httpx.ASGITransport(app=og_app)
    async with httpx.AsyncClient(transport=transport, base_url="https://example.com", timeout=30.0) as client:
        response = await client.get("/og", params={"g": board_id})

        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"
        assert response.headers["content-type"] == "image/png"
        assert response.content[:8] == PNG_SIGNATURE


@pytest.mark.asyncio
async def test_board_og_image_cached_by_full_url(og_app, edge_cache, board_id):
    """Test that the cache key carries scheme, host, path and query."""
    transport = httpx.ASGITransport(app=og_app)
    async with httpx.AsyncClient(transport=transport, base_url="https://example.com") as client:
        first = await client.get("/og", params={"g": board_id})
        second = await client.get("/og", params={"g": board_id})

    assert f"https://example.com/og?g={board_id}" in edge_cache
    assert first.content == second.content


@pytest.mark.asyncio
async def test_board_og_image_validation(og_app, edge_cache):
    """Test that the OG image endpoint validates the board id."""
    transport = httpx.ASGITransport(app=og_app)
    async with httpx.AsyncClient(transport=transport, base_url="https://example.com") as client:
        response = await client.get("/og", params={"g": "tooshort"})

    assert response.status_code == 400, "Should reject a short board id"
    assert len(edge_cache) == 0
