"""Stripe colors for card faces."""
from typing import Optional, Tuple

Rgb = Tuple[int, int, int]

STRIPE_COLORS = {
    "blue": "#3b82f6",
    "yellow": "#facc15",
    "red": "#ef4444",
    "green": "#22c55e",
    "purple": "#a855f7",
    "orange": "#f97316",
    "brown": "#8b5e3c",
    "black": "#111827",
    "white": "#f8fafc",
    "gray": "#9ca3af",
    "beige": "#f5f1da",
    "ivory": "#fff9e6",
    "almond": "#efdfc8",
    "sky": "#7dd3fc",
    "aqua": "#22d3ee",
    "blush": "#fbcfe8",
    "cream": "#fff4d6",
    "taupe": "#a58a7f",
    "rosewood": "#8b4a5a",
    "lilac": "#c4b5fd",
    "pink": "#f9a8d4",
    "mint": "#a7f3d0",
    "peach": "#f7b7a3",
    "lavender": "#e9d5ff",
    "coral": "#fb7185",
    "rose": "#f43f5e",
    "salmon": "#fda4af",
    "plum": "#7c3aed",
    "apricot": "#f9c27b",
    "lime": "#a3e635",
}

# Used for words that are not in STRIPE_COLORS
FALLBACK_STRIPE = "rgba(0, 0, 0, 0.2)"
# Light colors are replaced by a translucent dark stripe to stay visible
LIGHT_STRIPE = "rgba(0, 0, 0, 0.25)"
VERY_LIGHT_STRIPE = "rgba(0, 0, 0, 0.35)"


def color_key(main_word: Optional[str]) -> str:
    """Lookup key for a word: lower case, spaces replaced by hyphens."""
    if not main_word:
        return ""
    return str(main_word).lower().replace(" ", "-")


def hex_to_rgb(hex_value: str) -> Optional[Rgb]:
    normalized = hex_value.replace("#", "")
    if len(normalized) != 6:
        return None
    try:
        return (
            int(normalized[0:2], 16),
            int(normalized[2:4], 16),
            int(normalized[4:6], 16),
        )
    except ValueError:
        return None


def relative_luminance(rgb: Rgb) -> float:
    """WCAG relative luminance of an sRGB color, in [0, 1]."""
    def linear(value: int) -> float:
        channel = value / 255
        return channel / 12.92 if channel <= 0.03928 else ((channel + 0.055) / 1.055) ** 2.4

    red, green, blue = rgb
    return 0.2126 * linear(red) + 0.7152 * linear(green) + 0.0722 * linear(blue)


def stripe_color(key: str) -> str:
    """Stripe color for a color key, darkened for light colors."""
    hex_color = STRIPE_COLORS.get(key)
    if not hex_color:
        return FALLBACK_STRIPE

    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return hex_color

    luminance = relative_luminance(rgb)
    if luminance > 0.75:
        return VERY_LIGHT_STRIPE
    if luminance > 0.6:
        return LIGHT_STRIPE
    return hex_color
