"""
Visual themes for board preview images.

A theme is a set of style tables (CSS property -> value). Themes only
change cosmetic values; grid geometry lives in the layout builder.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from ..exceptions import UnknownThemeError

Style = Dict[str, str]


@dataclass(frozen=True)
class Theme:
    name: str
    canvas: Style
    title: Style
    counter: Style
    badge: Style
    badge_text: Style
    cell_base: Style
    cell_unchecked: Style
    cell_checked: Style
    cell_free: Style
    footer_text: Style
    footer_brand: Style
    font_family: str = "Inter, system-ui, sans-serif"


MIDNIGHT = Theme(
    name="midnight",
    canvas={"background": "linear-gradient(135deg, #0b1628 0%, #0f2440 50%, #0b1628 100%)"},
    title={"font-size": "28px", "font-weight": "700", "color": "#f1f5f9"},
    counter={"font-size": "16px", "color": "#64748b", "margin-top": "4px"},
    badge={
        "background": "rgba(56, 189, 248, 0.15)",
        "border": "1px solid rgba(56, 189, 248, 0.3)",
        "border-radius": "50px",
        "padding": "8px 20px",
    },
    badge_text={"font-size": "18px", "font-weight": "600", "color": "#38bdf8"},
    cell_base={"border-radius": "8px", "padding": "4px", "font-size": "13px", "line-height": "1.2"},
    cell_unchecked={
        "background": "rgba(255, 255, 255, 0.05)",
        "border": "1px solid rgba(255, 255, 255, 0.1)",
        "color": "#94a3b8",
        "font-weight": "400",
    },
    cell_checked={
        "background": "rgba(56, 189, 248, 0.25)",
        "border": "2px solid rgba(56, 189, 248, 0.5)",
        "color": "#e2e8f0",
        "font-weight": "600",
    },
    cell_free={
        "background": "rgba(250, 204, 21, 0.18)",
        "border": "2px solid rgba(250, 204, 21, 0.55)",
        "color": "#facc15",
        "font-weight": "800",
        "font-size": "26px",
    },
    footer_text={"font-size": "14px", "color": "#64748b"},
    footer_brand={"font-size": "16px", "font-weight": "700", "color": "#e2e8f0", "margin-left": "6px"},
)

DAYLIGHT = Theme(
    name="daylight",
    canvas={"background": "linear-gradient(160deg, #fdfbf7 0%, #f3efe6 100%)"},
    title={"font-size": "28px", "font-weight": "800", "color": "#1f2937"},
    counter={"font-size": "16px", "color": "#6b7280", "margin-top": "4px"},
    badge={
        "background": "#fde68a",
        "border": "1px solid #f59e0b",
        "border-radius": "50px",
        "padding": "8px 20px",
    },
    badge_text={"font-size": "18px", "font-weight": "700", "color": "#92400e"},
    cell_base={"border-radius": "10px", "padding": "4px", "font-size": "13px", "line-height": "1.2"},
    cell_unchecked={
        "background": "#ffffff",
        "border": "1px solid #e5e7eb",
        "color": "#4b5563",
        "font-weight": "400",
    },
    cell_checked={
        "background": "#dcfce7",
        "border": "2px solid #22c55e",
        "color": "#14532d",
        "font-weight": "700",
    },
    cell_free={
        "background": "#1f2937",
        "border": "2px solid #111827",
        "color": "#fbbf24",
        "font-weight": "800",
        "font-size": "26px",
    },
    footer_text={"font-size": "14px", "color": "#6b7280"},
    footer_brand={"font-size": "16px", "font-weight": "800", "color": "#1f2937", "margin-left": "6px"},
    font_family="'Nunito', 'Inter', system-ui, sans-serif",
)

NEON = Theme(
    name="neon",
    canvas={"background": "#050505"},
    title={"font-size": "30px", "font-weight": "900", "color": "#f472b6", "letter-spacing": "1px"},
    counter={"font-size": "16px", "color": "#a3e635", "margin-top": "4px"},
    badge={
        "background": "#050505",
        "border": "2px solid #22d3ee",
        "border-radius": "6px",
        "padding": "8px 20px",
    },
    badge_text={"font-size": "18px", "font-weight": "700", "color": "#22d3ee"},
    cell_base={"border-radius": "4px", "padding": "4px", "font-size": "13px", "line-height": "1.2"},
    cell_unchecked={
        "background": "#111111",
        "border": "1px solid #3f3f46",
        "color": "#a1a1aa",
        "font-weight": "400",
    },
    cell_checked={
        "background": "#3b0764",
        "border": "2px solid #e879f9",
        "color": "#fdf4ff",
        "font-weight": "700",
    },
    cell_free={
        "background": "#a3e635",
        "border": "2px solid #bef264",
        "color": "#050505",
        "font-weight": "900",
        "font-size": "26px",
    },
    footer_text={"font-size": "14px", "color": "#71717a"},
    footer_brand={"font-size": "16px", "font-weight": "800", "color": "#f472b6", "margin-left": "6px"},
)

DEFAULT_THEME = "midnight"

THEMES: Dict[str, Theme] = {theme.name: theme for theme in (MIDNIGHT, DAYLIGHT, NEON)}


def get_theme(name: Optional[str] = None, default: str = DEFAULT_THEME) -> Theme:
    """
    Resolve a theme by name; ``None`` selects ``default``.

    Raises:
        UnknownThemeError: If no theme has that name
    """
    resolved = name or default
    try:
        return THEMES[resolved]
    except KeyError:
        raise UnknownThemeError(
            f"Unknown theme '{resolved}'. Available themes: {', '.join(sorted(THEMES))}"
        ) from None
