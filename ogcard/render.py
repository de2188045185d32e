# this_file: ogcard/render.py
"""
Render orchestration: text blocks onto a shared canvas, and the three-block
card pipeline built on top of it.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, replace

import numpy as np
from PIL import Image

from .base import BlendPolicy
from .constants import (
    AUTHOR_POSITION,
    AUTHOR_SCALE,
    BACKGROUND_COLOR,
    CANVAS_HEIGHT,
    CANVAS_MARGIN,
    CANVAS_WIDTH,
    DEFAULT_BLEND_POLICY,
    DEFAULT_LAYOUT,
    MAX_TEXT_LENGTH,
    TEXT_COLOR,
    TEXT_POSITION,
    TEXT_SCALE,
    TITLE_POSITION,
    TITLE_SCALE,
)
from .font import Font
from .layout import LayoutFunc, get_layout, layout_paragraph
from .raster import composite_glyphs, get_blend_policy

logger = logging.getLogger(__name__)


def new_canvas(
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
    background: tuple[int, int, int, int] = BACKGROUND_COLOR,
) -> np.ndarray:
    """Allocate an RGBA canvas filled with ``background``."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid canvas dimensions width={width} height={height}")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[...] = background
    return canvas


def render_text(
    font: Font,
    scale: float,
    canvas: np.ndarray,
    text: str,
    color: tuple[int, int, int],
    position: tuple[float, float],
    *,
    max_width: float | None = None,
    policy: BlendPolicy | None = None,
    layout: LayoutFunc = layout_paragraph,
) -> np.ndarray:
    """
    Lay out and draw one block of text.

    Args:
        font: Parsed font
        scale: Pixel height of the font's ascent-to-descent span
        canvas: RGBA canvas, mutated in place
        text: Text to draw
        color: RGB text colour
        position: Top-left anchor of the block
        max_width: Line width; defaults to canvas width minus the margin
        policy: Blend policy; defaults to "over"
        layout: Layout strategy

    Returns:
        The same canvas object
    """
    if max_width is None:
        max_width = canvas.shape[1] - CANVAS_MARGIN
    scaled = font.as_scaled(scale)
    glyphs = layout(scaled, position, max_width, text)
    return composite_glyphs(scaled, glyphs, canvas, color, policy)


@dataclass(frozen=True)
class TextBlock:
    text: str
    scale: float
    position: tuple[float, float]
    color: tuple[int, int, int] = TEXT_COLOR


@dataclass
class CardConfig:
    """Everything about a card except its three strings."""

    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    background: tuple[int, int, int, int] = BACKGROUND_COLOR
    color: tuple[int, int, int] = TEXT_COLOR
    margin: int = CANVAS_MARGIN
    policy: str = DEFAULT_BLEND_POLICY
    layout: str = DEFAULT_LAYOUT
    text_scale: float = TEXT_SCALE
    text_position: tuple[float, float] = TEXT_POSITION
    title_scale: float = TITLE_SCALE
    title_position: tuple[float, float] = TITLE_POSITION
    author_scale: float = AUTHOR_SCALE
    author_position: tuple[float, float] = AUTHOR_POSITION
    max_text_length: int = MAX_TEXT_LENGTH

    def replace(self, **changes) -> CardConfig:
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    @property
    def max_width(self) -> float:
        return float(self.width - self.margin)


def card_blocks(text: str, title: str, author: str, config: CardConfig) -> list[TextBlock]:
    """The card's text blocks in draw order: body, title, author."""
    return [
        TextBlock(text, config.text_scale, config.text_position, config.color),
        TextBlock(title, config.title_scale, config.title_position, config.color),
        TextBlock(author, config.author_scale, config.author_position, config.color),
    ]


def render_blocks(
    font: Font,
    canvas: np.ndarray,
    blocks: list[TextBlock],
    *,
    max_width: float | None = None,
    policy: BlendPolicy | None = None,
    layout: LayoutFunc = layout_paragraph,
) -> np.ndarray:
    for block in blocks:
        render_text(
            font,
            block.scale,
            canvas,
            block.text,
            block.color,
            block.position,
            max_width=max_width,
            policy=policy,
            layout=layout,
        )
    return canvas


def render_card(
    font: Font,
    text: str,
    title: str,
    author: str,
    config: CardConfig | None = None,
) -> np.ndarray:
    """
    Render a full card: body text, then title, then author.

    Returns:
        A new RGBA canvas of ``config.width`` x ``config.height``
    """
    config = config or CardConfig()
    policy = get_blend_policy(config.policy)
    layout = get_layout(config.layout)
    canvas = new_canvas(config.width, config.height, config.background)
    logger.info(
        "rendering %dx%d card (policy=%s, layout=%s)",
        config.width,
        config.height,
        config.policy,
        config.layout,
    )
    return render_blocks(
        font,
        canvas,
        card_blocks(text, title, author, config),
        max_width=config.max_width,
        policy=policy,
        layout=layout,
    )


def to_image(canvas: np.ndarray) -> Image.Image:
    """Wrap the canvas as a Pillow RGBA image (copies the pixels)."""
    return Image.fromarray(canvas)


def encode_png(canvas: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    to_image(canvas).save(buffer, format="PNG")
    return buffer.getvalue()
