"""
Open Graph (OG) Image Generation Service.
Decodes a board id, lays the board out under a theme and renders it to PNG.
"""
from typing import Optional

from ..codec.board_codec import BoardCodec, BoardState
from ..exceptions import BoardDecodeError, RenderError
from ..utils.debug import print_step
from .layout import DEFAULT_APP_TITLE, DEFAULT_SITE_NAME, build_layout
from .renderer import ImageRenderer
from .themes import Theme, get_theme


class OGService:
    """Service for generating bingo board preview images for social sharing."""

    def __init__(
        self,
        codec: BoardCodec,
        renderer: Optional[ImageRenderer] = None,
        app_title: str = DEFAULT_APP_TITLE,
        site_name: str = DEFAULT_SITE_NAME
    ):
        self.codec = codec
        self.renderer = renderer or ImageRenderer()
        self.app_title = app_title
        self.site_name = site_name

    def decode_board(self, board_id: str) -> BoardState:
        """
        Decode a board id, folding any codec failure into ``BoardDecodeError``.
        """
        try:
            return self.codec.decode(board_id)
        except BoardDecodeError:
            raise
        except Exception as e:
            raise BoardDecodeError(f"Could not decode board ID: {e}") from e

    async def generate_board_image(self, board_id: str, theme: Optional[Theme] = None) -> bytes:
        """
        Generate the preview image for a board.

        Args:
            board_id: 12-character board id
            theme: Visual theme, the default theme when omitted

        Returns:
            PNG image bytes (1200x630)

        Raises:
            BoardDecodeError: If the id cannot be decoded
            RenderError: If layout or rasterization fails
        """
        theme = theme or get_theme()
        print_step("OG Image Generation", {"board_id": board_id, "theme": theme.name}, "input")

        state = self.decode_board(board_id)

        try:
            tree = build_layout(state, theme, app_title=self.app_title, site_name=self.site_name)
        except (KeyError, ValueError, TypeError, StopIteration) as e:
            raise RenderError(f"Failed to lay out board: {e}") from e

        image_bytes = await self.renderer.render(tree)

        print_step("OG Image Generated", {
            "board_id": board_id,
            "checked": state.checked_count,
            "image_size_bytes": len(image_bytes)
        }, "output")

        return image_bytes
