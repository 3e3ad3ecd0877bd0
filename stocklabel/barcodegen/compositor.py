"""
Text compositor for captioned raster output.

Caption width is estimated from a per-character advance table rather than
measured with the font. Positions depend only on the caption, canvas width
and font size.
"""

from __future__ import annotations

import logging
import math
from typing import Final, Tuple

from PIL import Image, ImageDraw

from stocklabel.barcodegen.fonts import DEFAULT_FONT_SIZE, FontAsset

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_PADDING",
    "TEXT_PADDING",
    "char_advance",
    "estimate_text_width",
    "place",
    "draw_caption",
]

# Offset of the caption from the top edge of its band
DEFAULT_PADDING: Final[int] = 4
# Gap between two adjacent bands (barcode/caption)
TEXT_PADDING: Final[int] = 10

WIDE_FACTOR: Final[float] = 0.75
NARROW_FACTOR: Final[float] = 0.4
SPACE_FACTOR: Final[float] = 0.3
PAREN_FACTOR: Final[float] = 0.35
STANDARD_FACTOR: Final[float] = 0.55

_NARROW_LOWER: Final[frozenset] = frozenset("iljtf")


def char_advance(char: str, font_size: float = DEFAULT_FONT_SIZE) -> float:
    if char.isupper():
        return font_size * WIDE_FACTOR
    if char in _NARROW_LOWER:
        return font_size * NARROW_FACTOR
    if char == " ":
        return font_size * SPACE_FACTOR
    if char in "()":
        return font_size * PAREN_FACTOR
    return font_size * STANDARD_FACTOR


def estimate_text_width(text: str, font_size: float = DEFAULT_FONT_SIZE) -> float:
    return sum(char_advance(c, font_size) for c in text)


def place(
    caption: str,
    canvas_width: int,
    band_offset: int = 0,
    font_size: float = DEFAULT_FONT_SIZE,
) -> Tuple[int, int]:
    """
    Position of a caption centered on the canvas.

    Args:
        caption: Text to draw.
        canvas_width: Canvas width in pixels.
        band_offset: Top edge of the caption band.
        font_size: Pixel size used for the width estimate.

    Returns:
        (x, y); x is clamped at 0 for captions wider than the canvas.
    """
    width = estimate_text_width(caption, font_size)
    x = max(0, math.floor((canvas_width - width) / 2))
    return x, band_offset + DEFAULT_PADDING


def draw_caption(
    canvas: Image.Image, font: FontAsset, caption: str, band_offset: int
) -> Tuple[int, int]:
    """Draw a centered black caption in the band starting at band_offset."""
    pos = place(caption, canvas.width, band_offset, font.size)
    logger.debug("Drawing caption %r at %s", caption, pos)
    draw = ImageDraw.Draw(canvas)
    draw.text(pos, caption, font=font.font, fill=(0, 0, 0))
    return pos
