# this_file: ogcard/cli.py
"""
ogcard Command Line Interface

Fire-based CLI for rendering cards and inspecting layout.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import fire

from . import __version__
from .base import OgcardError
from .card import validate_card_params
from .constants import (
    BACKGROUND_COLOR,
    CANVAS_HEIGHT,
    CANVAS_MARGIN,
    CANVAS_WIDTH,
    DEFAULT_BLEND_POLICY,
    DEFAULT_LAYOUT,
    TEXT_COLOR,
    TEXT_POSITION,
    TEXT_SCALE,
)
from .font import Font
from .layout import LAYOUT_STRATEGIES, get_layout, measure
from .raster import BLEND_POLICIES, get_blend_policy
from .render import CardConfig, encode_png, new_canvas, render_card, render_text

logger = logging.getLogger(__name__)


def parse_color(value, components: int) -> tuple:
    """Parse "R,G,B[,A]" (or a tuple, as fire already splits commas)."""
    if isinstance(value, str):
        parts = [int(x) for x in value.split(",")]
    else:
        parts = [int(x) for x in value]
    if len(parts) != components:
        raise ValueError(f"Color must have {components} components, got {len(parts)}")
    if any(p < 0 or p > 255 for p in parts):
        raise ValueError(f"Color components must be within 0-255: {value}")
    return tuple(parts)


class OgcardCLI:
    """ogcard text card renderer"""

    def __init__(self, verbose: bool = False):
        """Initialize the CLI"""
        self.version = __version__
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )

    def card(
        self,
        font: str,
        output: str,
        text: Optional[str] = None,
        title: Optional[str] = None,
        author: Optional[str] = None,
        policy: str = DEFAULT_BLEND_POLICY,
        layout: str = DEFAULT_LAYOUT,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
        color=TEXT_COLOR,
        background=BACKGROUND_COLOR,
    ):
        """
        Render a card with body text, title and author to a PNG file.

        Args:
            font: Path to font file
            output: Output PNG path
            text: Body text (at most 150 UTF-8 bytes)
            title: Title line
            author: Author line
            policy: Blend policy ('over' or 'alpha')
            layout: Layout strategy ('overflow' or 'words')
            width: Canvas width in pixels
            height: Canvas height in pixels
            color: Text colour as R,G,B
            background: Background colour as R,G,B,A

        Examples:
            ogcard card font.ttf card.png --text="Hello" --title="Blog" --author="me"
            ogcard card font.ttf card.png --text="Hi" --title="T" --author="A" --policy=alpha --background=0,0,0,0
        """
        params = {
            "text": None if text is None else str(text),
            "title": None if title is None else str(title),
            "author": None if author is None else str(author),
        }
        try:
            fg_color = parse_color(color, 3)
            bg_color = parse_color(background, 4)
            config = CardConfig(
                width=int(width),
                height=int(height),
                background=bg_color,
                color=fg_color,
                policy=policy,
                layout=layout,
            )
            body, title_text, author_text = validate_card_params(params, config.max_text_length)
            loaded = Font.from_path(font)
            canvas = render_card(loaded, body, title_text, author_text, config)
            data = encode_png(canvas)
            Path(output).write_bytes(data)
        except (OgcardError, ValueError, OSError) as e:
            logger.error("card rendering failed: %s", e)
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(f"✓ Rendered to {output} ({len(data)} bytes)")
        return 0

    def text(
        self,
        font: str,
        output: str,
        text: str,
        size: float = TEXT_SCALE,
        x: float = TEXT_POSITION[0],
        y: float = TEXT_POSITION[1],
        max_width: Optional[float] = None,
        policy: str = DEFAULT_BLEND_POLICY,
        layout: str = DEFAULT_LAYOUT,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
        color=TEXT_COLOR,
        background=BACKGROUND_COLOR,
    ):
        """
        Render a single block of text to a PNG file.

        Examples:
            ogcard text font.ttf out.png "Hello World" --size=48 --x=10 --y=10
        """
        try:
            loaded = Font.from_path(font)
            canvas = new_canvas(int(width), int(height), parse_color(background, 4))
            render_text(
                loaded,
                float(size),
                canvas,
                str(text),
                parse_color(color, 3),
                (float(x), float(y)),
                max_width=None if max_width is None else float(max_width),
                policy=get_blend_policy(policy),
                layout=get_layout(layout),
            )
            data = encode_png(canvas)
            Path(output).write_bytes(data)
        except (OgcardError, ValueError, OSError) as e:
            logger.error("text rendering failed: %s", e)
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(f"✓ Rendered to {output} ({len(data)} bytes)")
        return 0

    def layout(
        self,
        font: str,
        text: str,
        size: float = TEXT_SCALE,
        x: float = TEXT_POSITION[0],
        y: float = TEXT_POSITION[1],
        max_width: float = CANVAS_WIDTH - CANVAS_MARGIN,
        layout: str = DEFAULT_LAYOUT,
    ):
        """
        Print glyph positions as JSON.

        Examples:
            ogcard layout font.ttf "Hello" --size=70 --max_width=100
        """
        try:
            scaled = Font.from_path(font).as_scaled(float(size))
            glyphs = get_layout(layout)(scaled, (float(x), float(y)), float(max_width), str(text))
        except (OgcardError, ValueError, OSError) as e:
            logger.error("layout failed: %s", e)
            print(f"Error: {e}", file=sys.stderr)
            return 1

        width, height = measure(glyphs, scaled)
        result = {
            "text": str(text),
            "size": float(size),
            "width": width,
            "height": height,
            "glyphs": [{"id": g.id, "x": g.x, "y": g.y} for g in glyphs],
        }
        print(json.dumps(result, indent=2))
        return 0

    def policies(self):
        """
        List blend policies and layout strategies.

        Examples:
            ogcard policies
        """
        print("Blend policies:")
        for name in sorted(BLEND_POLICIES):
            print(f"  {name}: {get_blend_policy(name).description}")
        print("\nLayout strategies:")
        for name in sorted(LAYOUT_STRATEGIES):
            print(f"  {name}")
        return 0

    def info(self):
        """
        Display version information.

        Examples:
            ogcard info
        """
        print(f"ogcard v{self.version}")
        return 0


def main():
    """Main CLI entry point"""
    try:
        fire.Fire(OgcardCLI)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
