"""
Bingo OG Service FastAPI application entry point.
Serves social preview images for shared bingo boards and rewrites board
page metadata so shared links preview the right image.
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .codec.board_codec import BoardCodec, SeededBoardCodec, load_decks
from .core.config import Settings, settings as default_settings
from .middleware.meta_rewrite import MetaRewriteMiddleware
from .routes import og_routes
from .services.edge_cache import EdgeCache, InMemoryEdgeCache
from .services.og_service import OGService
from .services.renderer import ImageRenderer
from .services.themes import get_theme
from .utils.debug import configure_logging, print_step


def create_app(
    edge_cache: Optional[EdgeCache] = None,
    codec: Optional[BoardCodec] = None,
    renderer: Optional[ImageRenderer] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application for the OG service.

    Args:
        edge_cache: Cache for rendered images, in-memory LRU by default
        codec: Board codec, the seeded reference codec by default
        renderer: Image renderer, Playwright-backed by default
        settings: Settings override, the environment settings by default

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL, debug=settings.DEBUG)

    app = FastAPI(
        title="Bingo OG Service",
        version="1.0.0",
        description="Social preview images and page metadata for shareable bingo boards",
        debug=settings.DEBUG
    )

    if codec is None:
        codec = SeededBoardCodec(load_decks(settings.PROMPT_DECKS_FILE))
    if edge_cache is None:
        edge_cache = InMemoryEdgeCache(max_entries=settings.EDGE_CACHE_MAX_ENTRIES)

    # Fail at startup rather than on every request.
    get_theme(settings.OG_THEME)

    app.state.settings = settings
    app.state.edge_cache = edge_cache
    app.state.og_service = OGService(
        codec=codec,
        renderer=renderer or ImageRenderer(settings.RENDER_SETTLE_MS),
        app_title=settings.APP_TITLE,
        site_name=settings.SITE_NAME
    )

    print_step("CORS Configuration", {"origins": settings.ALL_CORS_ORIGINS}, "input")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALL_CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "HEAD"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(MetaRewriteMiddleware, public_origin=settings.PUBLIC_ORIGIN)
    print_step("FastAPI App Initialization", "FastAPI app, CORS and meta rewrite middleware configured", "output")

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": "og"}

    app.include_router(og_routes.router)

    # The page site is mounted last so it never shadows the API routes.
    if settings.STATIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.STATIC_DIR), html=True), name="site")
        print_step("Static Site Mounted", {"directory": str(settings.STATIC_DIR)}, "output")

    return app


# Create the app instance
app = create_app()

print_step("OG Service Startup", "Bingo OG Service is ready to serve requests!", "output")
print("\n" + "=" * 80)
print("BINGO OG SERVICE STARTED")
print("=" * 80)
print("Available Endpoints:")
print("   GET  /health             - Health check")
print("   GET  /og?g=<board id>    - Board preview image (PNG, 1200x630)")
print("   GET  /?g=<board id>      - Board page with rewritten preview metadata")
print("=" * 80 + "\n")
