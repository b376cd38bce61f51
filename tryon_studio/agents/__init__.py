"""Generation agents for the try-on studio."""

from .color_variation import PALETTE_COLORS, ColorVariationEngine

__all__ = [
    "PALETTE_COLORS",
    "ColorVariationEngine",
]
