# this_file: tests/conftest.py
"""Shared fixtures: a tiny synthetic TrueType font built with fontTools."""

import io
import string

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import newTable
from fontTools.ttLib.tables._k_e_r_n import KernTable_format_0

from ogcard import Font

UPEM = 1000
ASCENT = 800
DESCENT = -200
LINE_GAP = 100
ADVANCE = 600
SPACE_ADVANCE = 250
# Every letter is the same box: x 50..550, y 0..700 (font units)
BOX = (50, 0, 550, 700)
KERN_AV = -100


def _box_glyph(x0, y0, x1, y1):
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()
    return pen.glyph()


def build_test_font() -> bytes:
    letters = list(string.ascii_letters)
    glyph_order = [".notdef", "space"] + letters

    glyphs = {".notdef": _box_glyph(*BOX), "space": TTGlyphPen(None).glyph()}
    metrics = {".notdef": (ADVANCE, BOX[0]), "space": (SPACE_ADVANCE, 0)}
    for name in letters:
        glyphs[name] = _box_glyph(*BOX)
        metrics[name] = (ADVANCE, BOX[0])

    cmap = {ord(" "): "space"}
    cmap.update({ord(c): c for c in letters})

    fb = FontBuilder(UPEM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT, lineGap=LINE_GAP)
    fb.setupOS2(
        sTypoAscender=ASCENT,
        sTypoDescender=DESCENT,
        sTypoLineGap=LINE_GAP,
        usWinAscent=ASCENT,
        usWinDescent=-DESCENT,
    )
    fb.setupNameTable({"familyName": "OgcardTest", "styleName": "Regular"})
    fb.setupPost()
    fb.setupMaxp()

    kern = newTable("kern")
    kern.version = 0
    subtable = KernTable_format_0()
    subtable.version = 0
    subtable.format = 0
    subtable.coverage = 1
    subtable.kernTable = {("A", "V"): KERN_AV}
    kern.kernTables = [subtable]
    fb.font["kern"] = kern

    buf = io.BytesIO()
    fb.save(buf)
    return buf.getvalue()


@pytest.fixture(scope="session")
def font_bytes():
    """Raw bytes of the synthetic test font."""
    return build_test_font()


@pytest.fixture(scope="session")
def font(font_bytes):
    """Parsed test font."""
    return Font.from_bytes(font_bytes)


@pytest.fixture
def font_path(font_bytes, tmp_path):
    """The test font written to disk."""
    path = tmp_path / "OgcardTest.ttf"
    path.write_bytes(font_bytes)
    return path
