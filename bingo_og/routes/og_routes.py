"""
Open Graph (OG) Image Routes.
Serves the social preview image of a shared bingo board.
"""
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.background import BackgroundTask

from ..exceptions import BoardDecodeError, InvalidBoardIdError, RenderError, UnknownThemeError
from ..services.edge_cache import CacheEntry, put_best_effort
from ..services.themes import get_theme
from ..utils.debug import print_step
from ..utils.validation import require_board_id

router = APIRouter(prefix="/og", tags=["og"])

OG_CACHE_CONTROL = "public, max-age=31536000, immutable"


@router.get("")
async def generate_board_og_image(
    request: Request,
    g: Optional[str] = Query(None, description="12-character board ID"),
    theme: Optional[str] = Query(None, description="Visual theme name")
):
    """
    Generate the Open Graph image for a shared board.

    Returns a PNG image (1200x630). Successful responses are cached by
    canonical URL and marked immutable for a year, since a board id
    always renders the same image.

    Args:
        g: The board ID
        theme: Optional theme override

    Returns:
        PNG image, or a plain-text error (400 for bad input, 500 on failure)
    """
    print_step("OG Board Image Request", {
        "board_id": g,
        "theme": theme
    }, "input")

    try:
        board_id = require_board_id(g)
        resolved_theme = get_theme(theme, default=request.app.state.settings.OG_THEME)
    except (InvalidBoardIdError, UnknownThemeError) as e:
        print_step("OG Image Request Rejected", str(e), "error")
        return PlainTextResponse(str(e), status_code=400)

    edge_cache = request.app.state.edge_cache
    cache_key = str(request.url)

    cached = await edge_cache.get(cache_key)
    if cached is not None:
        print_step("OG Cache Hit", {"key": cache_key}, "output")
        return Response(content=cached.body, status_code=cached.status_code, headers=cached.headers)

    try:
        og_service = request.app.state.og_service
        image_bytes = await og_service.generate_board_image(board_id, resolved_theme)
    except (BoardDecodeError, RenderError) as e:
        print_step("OG Image Generation Failed", str(e), "error")
        return PlainTextResponse(f"Failed to generate OG image: {e}", status_code=500)
    except Exception as e:
        print_step("OG Image Unexpected Error", repr(e), "error")
        return PlainTextResponse(f"Failed to generate OG image: {e}", status_code=500)

    headers = {
        "Content-Type": "image/png",
        "Cache-Control": OG_CACHE_CONTROL,
        "Content-Disposition": "inline; filename=bingo-og.png"
    }
    entry = CacheEntry(body=image_bytes, headers=dict(headers))

    return Response(
        content=image_bytes,
        headers=headers,
        background=BackgroundTask(put_best_effort, edge_cache, cache_key, entry)
    )
