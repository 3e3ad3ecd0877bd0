"""
Format renderers for module trains.

Each renderer is a pure function of its explicit inputs:

- render_json / to_document / decode_json: structured data, exact round trip
- render_svg: vector document, one <rect> per bar
- render_png: monochrome bitmap of the barcode band only
- render_png_with_caption: barcode plus one caption band below, optionally a
  SKU band above

Layout of captioned output (band heights stack with TEXT_PADDING between
adjacent bands):

    [ SKU band      ]   optional, TEXT_BAND_HEIGHT
    [ barcode band  ]   barcode height
    [ caption band  ]   TEXT_BAND_HEIGHT
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from io import BytesIO
from typing import Final, List, Optional, Tuple

from PIL import Image, ImageDraw

from stocklabel.barcodegen.compositor import DEFAULT_PADDING, TEXT_PADDING, draw_caption
from stocklabel.barcodegen.errors import BarcodeFormatError
from stocklabel.barcodegen.fonts import FontAsset
from stocklabel.model.module_train import BarcodeDocument, ModuleTrain

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_BARCODE_HEIGHT",
    "DEFAULT_JSON_HEIGHT",
    "DEFAULT_XDIM",
    "to_document",
    "render_json",
    "decode_json",
    "render_svg",
    "render_png",
    "render_png_with_caption",
    "caption_canvas_height",
    "text_band_height",
    "band_layout",
    "image_to_png_bytes",
]

# Высота полосы штрихкода в пикселях
DEFAULT_BARCODE_HEIGHT: Final[int] = 44
DEFAULT_JSON_HEIGHT: Final[int] = 10
DEFAULT_XDIM: Final[int] = 1

SVG_NAMESPACE: Final[str] = "http://www.w3.org/2000/svg"


# --- JSON


def to_document(
    train: ModuleTrain, height: int = DEFAULT_JSON_HEIGHT, xdim: int = DEFAULT_XDIM
) -> BarcodeDocument:
    return BarcodeDocument.from_train(train, height=height, xdim=xdim)


def render_json(
    train: ModuleTrain, height: int = DEFAULT_JSON_HEIGHT, xdim: int = DEFAULT_XDIM
) -> str:
    """Serialize {height, xdim, encoding} where encoding is one 0/1 per unit."""
    try:
        return json.dumps(to_document(train, height, xdim).to_dict(), separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise BarcodeFormatError("Failed to generate JSON from barcode", cause=e) from e


def decode_json(text: str) -> ModuleTrain:
    """Inverse of render_json."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise BarcodeFormatError(
            f"Invalid barcode JSON at line {e.lineno}, column {e.colno}", cause=e
        ) from e
    if not isinstance(data, dict):
        raise BarcodeFormatError(
            f"Barcode JSON must be an object, got {type(data).__name__}"
        )
    try:
        return BarcodeDocument.from_dict(data).to_train()
    except ValueError as e:
        raise BarcodeFormatError(f"Invalid barcode JSON: {e}", cause=e) from e


# --- SVG


def render_svg(
    train: ModuleTrain, height: int = DEFAULT_BARCODE_HEIGHT, xdim: int = DEFAULT_XDIM
) -> str:
    """
    Render a vector document with exactly one rect per bar module.

    Spaces are left undrawn. The output is parsed back before returning.

    Raises:
        BarcodeFormatError: if the produced markup is not well-formed.
    """
    if height <= 0 or xdim <= 0:
        raise BarcodeFormatError(f"Invalid SVG scale: height={height}, xdim={xdim}")
    width = train.total_width * xdim
    rects = [
        f'<rect x="{start * xdim}" y="0" width="{span * xdim}" height="{height}" fill="#000000"/>'
        for start, span in train.bar_spans()
    ]
    svg = (
        f'<svg version="1.1" xmlns="{SVG_NAMESPACE}" '
        f'width="{width}" height="{height}" viewBox="0 0 {width} {height}">'
        + "".join(rects)
        + "</svg>"
    )
    try:
        ET.fromstring(svg)
    except ET.ParseError as e:
        logger.error("Generated SVG is not well-formed: %r", e)
        raise BarcodeFormatError("Failed to generate SVG data", cause=e) from e
    logger.debug("SVG rendered: %dx%d, %d bars", width, height, len(rects))
    return svg


# --- PNG


def render_png(
    train: ModuleTrain, height: int = DEFAULT_BARCODE_HEIGHT, xdim: int = DEFAULT_XDIM
) -> Image.Image:
    """Rasterize the barcode band: mode "1", white background, black bars."""
    if height <= 0 or xdim <= 0:
        raise BarcodeFormatError(f"Invalid raster scale: height={height}, xdim={xdim}")
    img = Image.new("1", (train.total_width * xdim, height), 255)
    draw = ImageDraw.Draw(img)
    for start, span in train.bar_spans():
        x0 = start * xdim
        draw.rectangle((x0, 0, x0 + span * xdim - 1, height - 1), fill=0)
    logger.debug("Generated barcode image: %dx%d", img.width, img.height)
    return img


def text_band_height(font_size: int) -> int:
    return font_size + DEFAULT_PADDING * 2


def caption_canvas_height(
    barcode_height: int, font_size: int, with_sku: bool = False
) -> int:
    """Σ(active band heights) + TEXT_PADDING between each pair of adjacent bands."""
    bands = [barcode_height, text_band_height(font_size)]
    if with_sku:
        bands.insert(0, text_band_height(font_size))
    return sum(bands) + TEXT_PADDING * (len(bands) - 1)


def _band_tops(heights: List[int]) -> List[int]:
    tops = []
    offset = 0
    for h in heights:
        tops.append(offset)
        offset += h + TEXT_PADDING
    return tops


def render_png_with_caption(
    train: ModuleTrain,
    font: FontAsset,
    caption: str,
    sku_caption: Optional[str] = None,
    height: int = DEFAULT_BARCODE_HEIGHT,
    xdim: int = DEFAULT_XDIM,
) -> Image.Image:
    """
    Render the barcode with a caption band below and an optional SKU band above.

    Args:
        train: Module train to draw.
        font: Shared caption font.
        caption: Text of the band below the barcode, e.g. "PRODUCT (XL)".
        sku_caption: Text of the band above the barcode, e.g. "SKU: PRODUCT-XL".
        height: Barcode band height.
        xdim: Pixels per unit.

    Returns:
        RGB image; width is the barcode width.
    """
    barcode_img = render_png(train, height=height, xdim=xdim)
    bands = band_layout(height, font.size, with_sku=sku_caption is not None)
    total_height = caption_canvas_height(height, font.size, sku_caption is not None)

    canvas = Image.new("RGB", (barcode_img.width, total_height), (255, 255, 255))
    texts = {"sku": sku_caption, "caption": caption}
    for name, top, _band_height in bands:
        if name == "barcode":
            canvas.paste(barcode_img.convert("RGB"), (0, top))
        else:
            draw_caption(canvas, font, texts[name] or "", top)

    logger.debug(
        "Captioned canvas %dx%d (%d bands)", canvas.width, canvas.height, len(bands)
    )
    return canvas


def image_to_png_bytes(img: Image.Image) -> bytes:
    buf = BytesIO()
    try:
        img.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise BarcodeFormatError("Failed to encode PNG image", cause=e) from e
    logger.debug("Output rendered as PNG (%d bytes)", buf.getbuffer().nbytes)
    return buf.getvalue()


def band_layout(
    barcode_height: int, font_size: int, with_sku: bool = False
) -> List[Tuple[str, int, int]]:
    """(name, top, height) of each band, top to bottom."""
    names = ["barcode", "caption"]
    heights = [barcode_height, text_band_height(font_size)]
    if with_sku:
        names.insert(0, "sku")
        heights.insert(0, text_band_height(font_size))
    return list(zip(names, _band_tops(heights), heights))
