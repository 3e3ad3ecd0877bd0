"""
model/enums.py

Domain enums for stocklabel: output targets of the encode-and-render pipeline and
the two text sanitizing policies.

NO rendering logic here! See stocklabel.barcodegen for the renderers.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, Optional

_logger: Final[logging.Logger] = logging.getLogger(__name__)

PNG_FILENAME: Final[str] = "barcode.png"
SVG_FILENAME: Final[str] = "barcode.svg"


class RenderTarget(str, Enum):
    """Output format/layout selected for a module train."""

    JSON = "json"
    SVG = "svg"
    PNG = "png"
    PNG_CAPTION = "png_caption"  # barcode + "{product} ({variant})" band below
    PNG_SKU_CAPTION = "png_sku_caption"  # SKU band, barcode, product band

    @property
    def filename(self) -> Optional[str]:
        """Artifact filename, or None for targets that persist nothing."""
        if self is RenderTarget.JSON:
            return None
        if self is RenderTarget.SVG:
            return SVG_FILENAME
        return PNG_FILENAME

    @classmethod
    def parse(cls, value: str) -> "RenderTarget":
        """Lenient lookup by value or member name ("png-caption", "PNG_CAPTION")."""
        key = value.strip().lower().replace("-", "_")
        for member in cls:
            if member.value == key:
                return member
        _logger.debug("Unknown render target %r", value)
        raise ValueError(f"Unknown render target: {value!r}")


class SanitizePolicy(str, Enum):
    """Which normalization produced a token. The two are never mixed."""

    PATH = "path"
    BARCODE = "barcode"
