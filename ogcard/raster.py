# this_file: ogcard/raster.py
"""
Glyph rasterization with FreeType and compositing onto an RGBA canvas.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator

import freetype
import numpy as np

from .base import BlendPolicy
from .constants import DEFAULT_BLEND_POLICY
from .font import FT_ONE, Font, ScaledFont
from .layout import Glyph

logger = logging.getLogger(__name__)

IDENTITY = freetype.FT_Matrix(0x10000, 0, 0, 0x10000)


@dataclass(frozen=True)
class CoverageMask:
    """Pixel-aligned coverage of one glyph, in canvas coordinates."""

    left: int
    top: int
    coverage: np.ndarray

    @property
    def width(self) -> int:
        return self.coverage.shape[1]

    @property
    def height(self) -> int:
        return self.coverage.shape[0]

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """(min_x, min_y, max_x, max_y), max exclusive."""
        return self.left, self.top, self.left + self.width, self.top + self.height


class OverBackgroundBlend(BlendPolicy):
    """Blend the text colour over the existing RGB; touched pixels become opaque."""

    name = "over"
    description = "rgb = rgb*(1-v) + color*v, alpha forced to 255"

    def blend(self, region, coverage, color):
        v = coverage[..., np.newaxis]
        rgb = region[..., :3].astype(np.float32)
        text = np.asarray(color, dtype=np.float32)
        region[..., :3] = (rgb * (1.0 - v) + text * v).astype(np.uint8)
        region[..., 3][coverage > 0] = 255


class CoverageAlphaBlend(BlendPolicy):
    """Paint solid text colour and accumulate coverage into alpha."""

    name = "alpha"
    description = "rgb = color, alpha += v*255 (saturating)"

    def blend(self, region, coverage, color):
        touched = coverage > 0
        region[touched, :3] = color
        added = (coverage * 255.0).astype(np.uint16)
        alpha = region[..., 3].astype(np.uint16) + added
        region[..., 3] = np.minimum(alpha, 255).astype(np.uint8)


BLEND_POLICIES: dict[str, type[BlendPolicy]] = {
    OverBackgroundBlend.name: OverBackgroundBlend,
    CoverageAlphaBlend.name: CoverageAlphaBlend,
}


def get_blend_policy(name: str = DEFAULT_BLEND_POLICY) -> BlendPolicy:
    """Create a blend policy by name ("over" or "alpha")."""
    try:
        return BLEND_POLICIES[name]()
    except KeyError:
        known = ", ".join(sorted(BLEND_POLICIES))
        raise ValueError(f"Unknown blend policy: {name} (expected one of: {known})") from None


def outline_glyph(font: ScaledFont, glyph: Glyph) -> CoverageMask | None:
    """
    Rasterize ``glyph`` at its pen position.

    The glyph is rendered unhinted and shifted by the fractional part of its
    position, so the mask lands on whole pixels. Returns None for .notdef and
    for glyphs without a visible outline.
    """
    if glyph.id == 0 or not font.is_valid(glyph.id):
        return None

    ix, iy = math.floor(glyph.x), math.floor(glyph.y)
    fx, fy = glyph.x - ix, glyph.y - iy
    face = font.face
    # FreeType's y axis points up
    face.set_transform(IDENTITY, freetype.FT_Vector(round(fx * FT_ONE), round(-fy * FT_ONE)))
    face.load_glyph(glyph.id, freetype.FT_LOAD_RENDER | freetype.FT_LOAD_NO_HINTING)

    slot = face.glyph
    bitmap = slot.bitmap
    if not (bitmap.buffer and bitmap.width > 0 and bitmap.rows > 0):
        return None

    pixels = np.array(bitmap.buffer, dtype=np.uint8).reshape(bitmap.rows, bitmap.pitch)
    coverage = pixels[:, : bitmap.width].astype(np.float32) / 255.0
    return CoverageMask(ix + slot.bitmap_left, iy - slot.bitmap_top, coverage)


def glyph_masks(
    font: Font | ScaledFont, glyphs: list[Glyph]
) -> Iterator[tuple[Glyph, CoverageMask]]:
    """
    Yield (glyph, mask) for every glyph that has something to draw.

    A ``ScaledFont`` is reused for glyphs at its own scale; other scales get
    a face of their own.
    """
    scaled: dict[float, ScaledFont] = {}
    if isinstance(font, ScaledFont):
        scaled[font.scale] = font
        font = font.font
    for glyph in glyphs:
        if glyph.scale not in scaled:
            scaled[glyph.scale] = font.as_scaled(glyph.scale)
        mask = outline_glyph(scaled[glyph.scale], glyph)
        if mask is None:
            logger.debug("glyph %d has no outline, skipped", glyph.id)
            continue
        yield glyph, mask


def composite_mask(
    canvas: np.ndarray,
    mask: CoverageMask,
    color: tuple[int, int, int],
    policy: BlendPolicy,
) -> None:
    """Blend one mask into the canvas, clipping to the canvas edges."""
    ih, iw = canvas.shape[:2]
    x, y = mask.left, mask.top

    x1 = max(0, x)
    y1 = max(0, y)
    x2 = min(iw, x + mask.width)
    y2 = min(ih, y + mask.height)

    if x2 <= x1 or y2 <= y1:
        logger.debug("mask at (%d, %d) lies outside the canvas", x, y)
        return

    gx1 = x1 - x
    gy1 = y1 - y
    gx2 = gx1 + (x2 - x1)
    gy2 = gy1 + (y2 - y1)

    coverage = mask.coverage[gy1:gy2, gx1:gx2]
    if not np.any(coverage > 0):
        return

    policy.blend(canvas[y1:y2, x1:x2], coverage, color)


def composite_glyphs(
    font: Font | ScaledFont,
    glyphs: list[Glyph],
    canvas: np.ndarray,
    color: tuple[int, int, int],
    policy: BlendPolicy | None = None,
) -> np.ndarray:
    """
    Draw ``glyphs`` onto ``canvas`` in order (later glyphs win on overlap).

    Args:
        font: Font (or the ScaledFont) the glyphs were laid out with
        glyphs: Positioned glyphs
        canvas: uint8 RGBA array of shape (height, width, 4), mutated in place
        color: RGB text colour
        policy: Blend policy, defaults to "over"

    Returns:
        The same canvas object
    """
    if policy is None:
        policy = get_blend_policy()
    color = tuple(int(c) for c in color[:3])
    for _glyph, mask in glyph_masks(font, glyphs):
        composite_mask(canvas, mask, color, policy)
    return canvas
