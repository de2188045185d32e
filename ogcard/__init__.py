"""
Text card rendering: paragraph layout with kerning and overflow wrapping,
FreeType rasterization, and coverage compositing onto an RGBA canvas.

This package provides:
- Font loading and scaled metrics (FreeType)
- Paragraph layout ("overflow" and "words" strategies)
- Glyph compositing with two blend policies ("over" and "alpha")
- A three-block card pipeline (body text, title, author)
"""

from __future__ import annotations

__version__ = "0.1.0"

from .base import BlendPolicy, CardParamError, FontParseError, OgcardError
from .card import validate_card_params
from .constants import CANVAS_HEIGHT, CANVAS_MARGIN, CANVAS_WIDTH
from .font import Font, ScaledFont
from .layout import (
    LAYOUT_STRATEGIES,
    Glyph,
    get_layout,
    layout_paragraph,
    layout_paragraph_words,
    measure,
)
from .raster import (
    BLEND_POLICIES,
    CoverageAlphaBlend,
    CoverageMask,
    OverBackgroundBlend,
    composite_glyphs,
    get_blend_policy,
    glyph_masks,
    outline_glyph,
)
from .render import (
    CardConfig,
    TextBlock,
    card_blocks,
    encode_png,
    new_canvas,
    render_blocks,
    render_card,
    render_text,
    to_image,
)

__all__ = [
    "BlendPolicy",
    "CardParamError",
    "FontParseError",
    "OgcardError",
    "validate_card_params",
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
    "CANVAS_MARGIN",
    "Font",
    "ScaledFont",
    "Glyph",
    "LAYOUT_STRATEGIES",
    "get_layout",
    "layout_paragraph",
    "layout_paragraph_words",
    "measure",
    "BLEND_POLICIES",
    "CoverageAlphaBlend",
    "CoverageMask",
    "OverBackgroundBlend",
    "composite_glyphs",
    "get_blend_policy",
    "glyph_masks",
    "outline_glyph",
    "CardConfig",
    "TextBlock",
    "card_blocks",
    "encode_png",
    "new_canvas",
    "render_blocks",
    "render_card",
    "render_text",
    "to_image",
    "__version__",
]
