# this_file: ogcard/font.py
"""
Font loading and scaled metrics on top of FreeType.

A ``Font`` is parsed once from raw bytes and never mutated afterwards. The
FreeType face object carries mutable state (character size, transform), so
every ``ScaledFont`` opens a private face from the font's bytes instead of
sharing one.
"""

from __future__ import annotations

import ctypes
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path

import freetype
from freetype.raw import FT_Get_Kerning

from .base import FontParseError

logger = logging.getLogger(__name__)

# FreeType lengths are 26.6 fixed point
FT_ONE = 64


def _open_face(data: bytes) -> freetype.Face:
    return freetype.Face(io.BytesIO(data))


@dataclass(frozen=True)
class Font:
    """
    Immutable, shareable font resource.

    Holds the raw font bytes plus the unscaled header metrics read at parse
    time. Use ``Font.from_bytes`` or ``Font.from_path`` to build one.
    """

    data: bytes = field(repr=False)
    family_name: str
    units_per_em: int
    ascender: int
    descender: int
    line_gap: int
    num_glyphs: int

    @classmethod
    def from_bytes(cls, data: bytes) -> Font:
        """
        Parse raw font bytes.

        Raises:
            FontParseError: If FreeType rejects the data or the font has no
                usable vertical metrics.
        """
        if not data:
            raise FontParseError("font data is empty")

        data = bytes(data)
        try:
            face = _open_face(data)
        except freetype.FT_Exception as exc:
            raise FontParseError(f"failed to load font: {exc}") from exc

        if not face.is_scalable:
            raise FontParseError("font has no scalable outlines")

        units_per_em = face.units_per_EM
        ascender = face.ascender
        descender = face.descender
        if units_per_em <= 0 or ascender - descender <= 0:
            raise FontParseError(
                f"font has unusable metrics (upem={units_per_em}, "
                f"ascender={ascender}, descender={descender})"
            )

        # face.height is ascender - descender + line gap
        line_gap = max(0, face.height - (ascender - descender))
        family = face.family_name
        if isinstance(family, bytes):
            family = family.decode("utf-8", "replace")

        font = cls(
            data=data,
            family_name=family or "",
            units_per_em=units_per_em,
            ascender=ascender,
            descender=descender,
            line_gap=line_gap,
            num_glyphs=face.num_glyphs,
        )
        logger.info(
            "loaded font %r (%d glyphs, upem=%d)",
            font.family_name,
            font.num_glyphs,
            font.units_per_em,
        )
        return font

    @classmethod
    def from_path(cls, path: Path | str) -> Font:
        """Read and parse a font file."""
        return cls.from_bytes(Path(path).read_bytes())

    @property
    def unit_height(self) -> int:
        return self.ascender - self.descender

    def as_scaled(self, scale: float) -> ScaledFont:
        """Bind the font to a pixel scale (the pixel height of ascent - descent)."""
        return ScaledFont(self, scale)


class ScaledFont:
    """
    Metrics view of a ``Font`` at a pixel scale.

    ``scale`` is the pixel height of the font's ascent-to-descent span, so
    ``height() == scale``. All metrics are unhinted: font units multiplied by
    ``scale / (ascender - descender)``.
    """

    def __init__(self, font: Font, scale: float):
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.font = font
        self.scale = float(scale)
        self.factor = self.scale / font.unit_height
        self.face = _open_face(font.data)
        # Em size in 26.6 points at 72 dpi, i.e. pixels
        self.face.set_char_size(int(round(self.em_size * FT_ONE)), 0, 72, 72)

    @property
    def em_size(self) -> float:
        """Pixel size of one em at this scale."""
        return self.font.units_per_em * self.factor

    def ascent(self) -> float:
        return self.font.ascender * self.factor

    def descent(self) -> float:
        return self.font.descender * self.factor

    def line_gap(self) -> float:
        return self.font.line_gap * self.factor

    def height(self) -> float:
        return self.ascent() - self.descent()

    def is_valid(self, glyph_id: int) -> bool:
        return 0 <= glyph_id < self.font.num_glyphs

    def glyph_id(self, char: str) -> int:
        """Map a character through the cmap; unmapped characters give 0 (.notdef)."""
        return self.face.get_char_index(ord(char))

    def advance(self, glyph_id: int) -> float:
        """Horizontal advance in pixels; 0 for ids outside the font."""
        if not self.is_valid(glyph_id):
            return 0.0
        units = self.face.get_advance(glyph_id, freetype.FT_LOAD_NO_SCALE)
        return units * self.factor

    def kerning(self, prev_id: int, next_id: int) -> float:
        """Signed pixel adjustment between two glyphs; 0 when undefined."""
        if not (self.is_valid(prev_id) and self.is_valid(next_id)):
            return 0.0
        if not self.face.has_kerning:
            return 0.0
        # Face.get_kerning takes character codes, so go through the raw call
        vector = freetype.FT_Vector(0, 0)
        error = FT_Get_Kerning(
            self.face._FT_Face,
            prev_id,
            next_id,
            freetype.FT_KERNING_UNSCALED,
            ctypes.byref(vector),
        )
        if error:
            return 0.0
        return vector.x * self.factor

    def __repr__(self) -> str:
        return f"ScaledFont({self.font.family_name!r}, scale={self.scale})"
