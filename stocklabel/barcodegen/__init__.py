"""
barcodegen

Encode-and-render pipeline for inventory barcodes (Code 39).

- Two text sanitizing policies (path-safe, barcode-safe)
- Code 39 encoder producing a ModuleTrain
- JSON, SVG, PNG and captioned PNG renderers with an approximate text compositor
- Directory service and detached, atomic artifact writer

Public API:
    - encode: Code 39 encoder (function)
    - path_safe / barcode_safe / PathSanitizer: sanitizing policies
    - render_json / decode_json / render_svg / render_png / render_png_with_caption
    - BarcodeService: request -> response pipeline facade (class)
    - BarcodeGenError and subclasses

Примеры:
    >>> from stocklabel.barcodegen import barcode_safe, encode, render_svg
    >>> svg = render_svg(encode(barcode_safe("Product One")))

Зависимости:
    Pillow
"""

from stocklabel.barcodegen.code39 import ALPHABET, SENTINEL, encode
from stocklabel.barcodegen.compositor import estimate_text_width, place
from stocklabel.barcodegen.errors import (
    ArtifactWriteError,
    BarcodeFormatError,
    BarcodeGenError,
    BarcodeInputError,
    EmptyInputError,
    UnsupportedCharacterError,
)
from stocklabel.barcodegen.fonts import FontAsset, load_font_asset
from stocklabel.barcodegen.renderers import (
    decode_json,
    image_to_png_bytes,
    render_json,
    render_png,
    render_png_with_caption,
    render_svg,
    to_document,
)
from stocklabel.barcodegen.sanitize import (
    PathSanitizer,
    SanitizedToken,
    barcode_safe,
    path_safe,
)
from stocklabel.barcodegen.service import BarcodeService
from stocklabel.barcodegen.storage import BarcodeDirectory, DetachedWriter, write_artifact

__all__ = [
    "ALPHABET",
    "SENTINEL",
    "encode",
    "estimate_text_width",
    "place",
    "ArtifactWriteError",
    "BarcodeFormatError",
    "BarcodeGenError",
    "BarcodeInputError",
    "EmptyInputError",
    "UnsupportedCharacterError",
    "FontAsset",
    "load_font_asset",
    "decode_json",
    "image_to_png_bytes",
    "render_json",
    "render_png",
    "render_png_with_caption",
    "render_svg",
    "to_document",
    "PathSanitizer",
    "SanitizedToken",
    "barcode_safe",
    "path_safe",
    "BarcodeService",
    "BarcodeDirectory",
    "DetachedWriter",
    "write_artifact",
]
