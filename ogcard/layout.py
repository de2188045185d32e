# this_file: ogcard/layout.py
"""
Paragraph layout: turn text into positioned glyphs.

Two strategies are available. ``layout_paragraph`` ("overflow") wraps as
soon as a non-whitespace glyph pushes the pen past the line width, with no
look-back for a word boundary. ``layout_paragraph_words`` ("words") moves
the overflowing word to the next line when the line has an earlier space.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, replace
from typing import Callable

from .font import ScaledFont


@dataclass(frozen=True)
class Glyph:
    """A glyph id placed at a pen position (baseline origin, canvas pixels)."""

    id: int
    x: float
    y: float
    scale: float


LayoutFunc = Callable[[ScaledFont, tuple[float, float], float, str], list[Glyph]]


def is_control(char: str) -> bool:
    return unicodedata.category(char) == "Cc"


def layout_paragraph(
    font: ScaledFont,
    position: tuple[float, float],
    max_width: float,
    text: str,
) -> list[Glyph]:
    """
    Lay out ``text`` with its top-left corner at ``position``.

    Args:
        font: Scaled metrics
        position: (x, y) anchor, top-left of the block
        max_width: Line width after which the pen wraps
        text: Text to lay out

    Returns:
        Glyphs in reading order. Control characters produce no glyph.
    """
    x0, y0 = position
    v_advance = font.height() + font.line_gap()
    caret_x, caret_y = x0, y0 + font.ascent()
    last_id: int | None = None
    glyphs: list[Glyph] = []

    for char in text:
        if is_control(char):
            if char == "\n":
                caret_x, caret_y = x0, caret_y + v_advance
                last_id = None
            continue

        glyph_id = font.glyph_id(char)
        if last_id is not None:
            caret_x += font.kerning(last_id, glyph_id)

        glyphs.append(Glyph(glyph_id, caret_x, caret_y, font.scale))
        last_id = glyph_id
        caret_x += font.advance(glyph_id)

        if not char.isspace() and caret_x > x0 + max_width:
            caret_x, caret_y = x0, caret_y + v_advance
            last_id = None

    return glyphs


def layout_paragraph_words(
    font: ScaledFont,
    position: tuple[float, float],
    max_width: float,
    text: str,
) -> list[Glyph]:
    """
    Word-aware variant of ``layout_paragraph``.

    When a non-whitespace glyph overflows the line and the line contains an
    earlier whitespace character, the glyphs after that whitespace are moved
    to a new line. A single word wider than the line still wraps on overflow.
    """
    x0, y0 = position
    v_advance = font.height() + font.line_gap()
    caret_x, caret_y = x0, y0 + font.ascent()
    last_id: int | None = None
    glyphs: list[Glyph] = []
    # Index into glyphs of the first glyph after the last space on this line
    word_start: int | None = None

    for char in text:
        if is_control(char):
            if char == "\n":
                caret_x, caret_y = x0, caret_y + v_advance
                last_id = None
                word_start = None
            continue

        glyph_id = font.glyph_id(char)
        if last_id is not None:
            caret_x += font.kerning(last_id, glyph_id)

        glyphs.append(Glyph(glyph_id, caret_x, caret_y, font.scale))
        last_id = glyph_id
        caret_x += font.advance(glyph_id)

        if char.isspace():
            word_start = len(glyphs)
            continue

        if caret_x <= x0 + max_width:
            continue

        if word_start is not None and word_start < len(glyphs):
            # Shift the partial word onto a fresh line
            shift = glyphs[word_start].x - x0
            caret_y += v_advance
            for i in range(word_start, len(glyphs)):
                glyphs[i] = replace(glyphs[i], x=glyphs[i].x - shift, y=caret_y)
            caret_x -= shift
            word_start = None
        else:
            caret_x, caret_y = x0, caret_y + v_advance
            last_id = None
            word_start = None

    return glyphs


LAYOUT_STRATEGIES: dict[str, LayoutFunc] = {
    "overflow": layout_paragraph,
    "words": layout_paragraph_words,
}


def get_layout(name: str) -> LayoutFunc:
    """Look up a layout strategy by name."""
    try:
        return LAYOUT_STRATEGIES[name]
    except KeyError:
        known = ", ".join(sorted(LAYOUT_STRATEGIES))
        raise ValueError(f"Unknown layout: {name} (expected one of: {known})") from None


def measure(glyphs: list[Glyph], font: ScaledFont) -> tuple[float, float]:
    """
    Pen extent of a laid-out paragraph as (width, height).

    Width runs from the leftmost glyph origin to the furthest advance on any
    line; height spans from the first line's top to the last line's bottom.
    """
    if not glyphs:
        return 0.0, 0.0
    left = min(g.x for g in glyphs)
    right = max(g.x + font.advance(g.id) for g in glyphs)
    top = min(g.y for g in glyphs) - font.ascent()
    bottom = max(g.y for g in glyphs) - font.descent()
    return right - left, bottom - top
