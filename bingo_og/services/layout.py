"""
Layout builder: turns a decoded board into a visual tree.

The tree is a plain description of what to draw (header, 5x5 grid,
footer) with every style already resolved from the theme.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

from ..codec.board_codec import CELL_COUNT, CENTER_INDEX, GRID_SIZE, PROMPT_COUNT, BoardState
from .themes import Theme

OG_WIDTH = 1200
OG_HEIGHT = 630
FREE_LABEL = "FREE"
DEFAULT_APP_TITLE = "Icebreaker Bingo"
DEFAULT_SITE_NAME = "icebreakerbingo.com"

PADDING_X = 40
PADDING_Y = 28
GRID_GAP = 8
HEADER_HEIGHT = 64
FOOTER_HEIGHT = 28
SECTION_GAP = 12

CELL_WIDTH = (OG_WIDTH - 2 * PADDING_X - (GRID_SIZE - 1) * GRID_GAP) // GRID_SIZE
CELL_HEIGHT = (
    OG_HEIGHT - 2 * PADDING_Y - HEADER_HEIGHT - FOOTER_HEIGHT - 2 * SECTION_GAP - (GRID_SIZE - 1) * GRID_GAP
) // GRID_SIZE

Style = Dict[str, str]


@dataclass(frozen=True)
class TextNode:
    text: str
    style: Style


@dataclass(frozen=True)
class VisualCell:
    index: int
    row: int
    col: int
    text: str
    checked: bool
    is_center: bool
    style: Style


@dataclass(frozen=True)
class VisualTree:
    width: int
    height: int
    theme_name: str
    font_family: str
    canvas_style: Style
    title: TextNode
    counter: TextNode
    badge_style: Style
    badge: TextNode
    cells: Tuple[VisualCell, ...]
    footer_text: TextNode
    footer_brand: TextNode


def _cell_style(theme: Theme, variant: Style) -> Style:
    style = {
        "display": "flex",
        "align-items": "center",
        "justify-content": "center",
        "text-align": "center",
        "overflow": "hidden",
        "box-sizing": "border-box",
        "width": f"{CELL_WIDTH}px",
        "height": f"{CELL_HEIGHT}px",
    }
    style.update(theme.cell_base)
    style.update(variant)
    return style


def build_cells(state: BoardState, theme: Theme) -> Tuple[VisualCell, ...]:
    """
    Lay out the 25 grid cells in row-major order.

    Prompts are consumed in order, skipping the center, which always
    shows the FREE label whatever its checked flag says.
    """
    prompts = iter(state.prompts)
    cells = []
    for index in range(CELL_COUNT):
        row, col = divmod(index, GRID_SIZE)
        if index == CENTER_INDEX:
            cells.append(VisualCell(index, row, col, FREE_LABEL, False, True, _cell_style(theme, theme.cell_free)))
            continue

        checked = state.is_checked(index)
        variant = theme.cell_checked if checked else theme.cell_unchecked
        cells.append(VisualCell(index, row, col, next(prompts), checked, False, _cell_style(theme, variant)))
    return tuple(cells)


def build_layout(
    state: BoardState,
    theme: Theme,
    app_title: str = DEFAULT_APP_TITLE,
    site_name: str = DEFAULT_SITE_NAME,
) -> VisualTree:
    """
    Build the visual tree for a board under a theme.

    Args:
        state: Decoded board state
        theme: Style tables to resolve cell and header styles from
        app_title: Header title
        site_name: Footer brand

    Returns:
        A fully resolved tree sized for a 1200x630 canvas
    """
    canvas_style = {
        "display": "flex",
        "flex-direction": "column",
        "box-sizing": "border-box",
        "width": f"{OG_WIDTH}px",
        "height": f"{OG_HEIGHT}px",
        "padding": f"{PADDING_Y}px {PADDING_X}px",
        "font-family": theme.font_family,
    }
    canvas_style.update(theme.canvas)

    return VisualTree(
        width=OG_WIDTH,
        height=OG_HEIGHT,
        theme_name=theme.name,
        font_family=theme.font_family,
        canvas_style=canvas_style,
        title=TextNode(app_title, dict(theme.title)),
        counter=TextNode(f"{state.checked_count}/{PROMPT_COUNT} checked", dict(theme.counter)),
        badge_style=dict(theme.badge),
        badge=TextNode(state.title, dict(theme.badge_text)),
        cells=build_cells(state, theme),
        footer_text=TextNode("Play yours at", dict(theme.footer_text)),
        footer_brand=TextNode(site_name, dict(theme.footer_brand)),
    )
