"""Font provider: one immutable caption font, loaded once at startup."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Optional, Union

from PIL import ImageFont
from PIL.ImageFont import FreeTypeFont
from PIL.ImageFont import ImageFont as PILImageFont

logger = logging.getLogger(__name__)

__all__ = ["FontAsset", "load_font_asset", "DEFAULT_FONT_SIZE"]

DEFAULT_FONT_SIZE: Final[int] = 22


@dataclass(frozen=True)
class FontAsset:
    """Read-only font shared by every caption render."""

    font: Union[FreeTypeFont, PILImageFont]
    size: int
    source: str  # file path, or "default" for Pillow's bundled font


def load_font_asset(
    path: Optional[str] = None, size: int = DEFAULT_FONT_SIZE
) -> FontAsset:
    """
    Load the caption font.

    Args:
        path: TrueType/OpenType file. None uses Pillow's bundled font.
        size: Pixel size.

    Returns:
        FontAsset. An unreadable file falls back to the bundled font.
    """
    if size <= 0:
        raise ValueError(f"Font size must be positive, got {size}")
    if path:
        try:
            font = ImageFont.truetype(path, size)
            logger.info("Loaded caption font %s at %dpx", path, size)
            return FontAsset(font=font, size=size, source=path)
        except OSError as e:
            logger.warning("Failed to load caption font (%r): %r", path, e)
    logger.debug("Using Pillow default font at %dpx", size)
    return FontAsset(font=ImageFont.load_default(size=size), size=size, source="default")
