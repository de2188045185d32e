# this_file: ogcard/constants.py
"""
Rendering constants shared across the card pipeline.
"""

# Default canvas dimensions (pixels)
CANVAS_WIDTH = 1200
CANVAS_HEIGHT = 630

# Horizontal space kept free to the right of every text block.
# Max line width = canvas width - CANVAS_MARGIN
CANVAS_MARGIN = 180

# RGBA
BACKGROUND_COLOR = (255, 255, 255, 255)
TRANSPARENT_BACKGROUND = (0, 0, 0, 0)
# RGB
TEXT_COLOR = (0, 0, 0)

# Body text block
TEXT_SCALE = 70.0
TEXT_POSITION = (80.0, 230.0)

# Title block
TITLE_SCALE = 60.0
TITLE_POSITION = (80.0, 80.0)

# Author block
AUTHOR_SCALE = 60.0
AUTHOR_POSITION = (1000.0, 500.0)

# Maximum body text length in UTF-8 bytes
MAX_TEXT_LENGTH = 150

DEFAULT_BLEND_POLICY = "over"
DEFAULT_LAYOUT = "overflow"
