"""
Image renderer.
Serializes a visual tree to HTML and rasterizes it with Playwright.
"""
import html
from typing import Mapping

from playwright.async_api import async_playwright

from ..exceptions import RenderError
from ..utils.debug import print_step
from .layout import GRID_GAP, SECTION_GAP, HEADER_HEIGHT, FOOTER_HEIGHT, OG_HEIGHT, OG_WIDTH, VisualTree

DEFAULT_SETTLE_MS = 250
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

ALLOWED_STYLE_PROPERTIES = frozenset({
    "align-items",
    "background",
    "border",
    "border-radius",
    "box-sizing",
    "color",
    "display",
    "flex-direction",
    "font-family",
    "font-size",
    "font-weight",
    "height",
    "justify-content",
    "letter-spacing",
    "line-height",
    "margin-left",
    "margin-top",
    "overflow",
    "padding",
    "text-align",
    "width",
})

CHROMIUM_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--no-first-run',
    '--no-zygote',
    '--disable-gpu',
    '--font-render-hinting=none',
]


def _style(style: Mapping[str, str], where: str) -> str:
    parts = []
    for prop, value in style.items():
        if prop not in ALLOWED_STYLE_PROPERTIES:
            raise RenderError(f"Unsupported style property '{prop}' on {where}")
        value = str(value)
        if any(char in value for char in ';{}<>"'):
            raise RenderError(f"Invalid value for style property '{prop}' on {where}: {value!r}")
        parts.append(f"{prop}:{value}")
    return html.escape(";".join(parts), quote=True)


def _text(node_text: str) -> str:
    return html.escape(node_text, quote=False)


def tree_to_html(tree: VisualTree) -> str:
    """
    Serialize a visual tree to a standalone HTML document.

    Raises:
        RenderError: If the tree has the wrong canvas size or uses a style
            property the renderer does not support
    """
    if (tree.width, tree.height) != (OG_WIDTH, OG_HEIGHT):
        raise RenderError(f"Unsupported canvas size {tree.width}x{tree.height}")
    if len(tree.cells) != 25:
        raise RenderError(f"Expected 25 grid cells, got {len(tree.cells)}")

    cells_html = "".join(
        f'<div class="cell" data-index="{cell.index}" style="{_style(cell.style, f"cell {cell.index}")}">'
        f"{_text(cell.text)}</div>"
        for cell in tree.cells
    )

    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8">'
        "<style>"
        "html,body{margin:0;padding:0;}"
        f"body{{width:{tree.width}px;height:{tree.height}px;overflow:hidden;}}"
        f".header{{display:flex;align-items:center;justify-content:space-between;height:{HEADER_HEIGHT}px;"
        f"margin-bottom:{SECTION_GAP}px;}}"
        ".heading{display:flex;flex-direction:column;}"
        f".grid{{display:grid;grid-template-columns:repeat(5,auto);gap:{GRID_GAP}px;justify-content:space-between;}}"
        f".footer{{display:flex;align-items:center;justify-content:center;height:{FOOTER_HEIGHT}px;"
        f"margin-top:{SECTION_GAP}px;}}"
        "</style></head><body>"
        f'<div class="canvas" style="{_style(tree.canvas_style, "canvas")}">'
        '<div class="header"><div class="heading">'
        f'<div style="{_style(tree.title.style, "title")}">{_text(tree.title.text)}</div>'
        f'<div style="{_style(tree.counter.style, "counter")}">{_text(tree.counter.text)}</div>'
        "</div>"
        f'<div style="{_style(tree.badge_style, "badge")}">'
        f'<span style="{_style(tree.badge.style, "badge text")}">{_text(tree.badge.text)}</span>'
        "</div></div>"
        f'<div class="grid">{cells_html}</div>'
        '<div class="footer">'
        f'<span style="{_style(tree.footer_text.style, "footer")}">{_text(tree.footer_text.text)}</span>'
        f'<span style="{_style(tree.footer_brand.style, "footer brand")}">{_text(tree.footer_brand.text)}</span>'
        "</div></div></body></html>"
    )


class ImageRenderer:
    """Rasterizes visual trees to PNG using headless Chromium."""

    def __init__(self, settle_ms: int = DEFAULT_SETTLE_MS):
        self.settle_ms = settle_ms

    async def render(self, tree: VisualTree) -> bytes:
        """
        Render a visual tree to PNG bytes.

        Args:
            tree: Fully resolved visual tree

        Returns:
            PNG image bytes at exactly 1200x630

        Raises:
            RenderError: On an invalid tree or any browser failure
        """
        rendered_html = tree_to_html(tree)

        print_step("Image Render", {
            "theme": tree.theme_name,
            "html_length": len(rendered_html)
        }, "input")

        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=True, args=CHROMIUM_ARGS)
                try:
                    page = await browser.new_page()

                    # Viewport is the exact OG canvas
                    await page.set_viewport_size({"width": tree.width, "height": tree.height})
                    await page.set_content(rendered_html, wait_until="load")

                    if self.settle_ms:
                        await page.wait_for_timeout(self.settle_ms)

                    screenshot_bytes = await page.screenshot(type='png', full_page=False)
                finally:
                    await browser.close()
        except Exception as e:
            print_step("Image Render Error", str(e), "error")
            raise RenderError(f"Rasterization failed: {e}") from e

        if not screenshot_bytes or not bytes(screenshot_bytes).startswith(PNG_SIGNATURE):
            raise RenderError("Renderer produced no PNG data")

        print_step("Image Rendered", {
            "image_size_bytes": len(screenshot_bytes)
        }, "output")

        return bytes(screenshot_bytes)
