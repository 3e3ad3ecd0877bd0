"""
Encode-and-render pipeline facade.

    request -> sanitize (path + barcode policies) -> encode -> JSON document
            -> render configured target -> detached write -> response

Input and format errors abort the request before anything is written. The
artifact write runs on the DetachedWriter; its failures are only logged, and
the response carries the intended path either way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from stocklabel.barcodegen.code39 import encode
from stocklabel.barcodegen.errors import EmptyInputError
from stocklabel.barcodegen.fonts import FontAsset, load_font_asset
from stocklabel.barcodegen.renderers import (
    image_to_png_bytes,
    render_png,
    render_png_with_caption,
    render_json,
    render_svg,
    to_document,
)
from stocklabel.barcodegen.sanitize import PathSanitizer, SanitizedToken, barcode_safe
from stocklabel.barcodegen.storage import BarcodeDirectory, DetachedWriter, default_data_dir
from stocklabel.model.enums import RenderTarget
from stocklabel.model.module_train import ModuleTrain
from stocklabel.model.request import BarcodeRequest, BarcodeResponse
from stocklabel.model.settings import LabelSettings

logger = logging.getLogger(__name__)

__all__ = ["BarcodeService", "PreparedBarcode"]


@dataclass(frozen=True)
class PreparedBarcode:
    """Sanitized names, barcode token and its module train for one request."""

    product_path: SanitizedToken
    variant_path: Optional[SanitizedToken]
    product_code: SanitizedToken
    variant_code: Optional[SanitizedToken]
    token: str
    train: ModuleTrain

    @property
    def caption(self) -> str:
        if self.variant_code:
            return f"{self.product_code} ({self.variant_code})"
        return str(self.product_code)


class BarcodeService:
    """
    Args:
        settings: Validated configuration.
        font: Shared caption font; loaded from settings when omitted.
        directory: Directory service; defaults to settings.data_dir or the
            platform data directory.
        writer: Detached writer; one is created (and owned) when omitted.
    """

    def __init__(
        self,
        settings: Optional[LabelSettings] = None,
        font: Optional[FontAsset] = None,
        directory: Optional[BarcodeDirectory] = None,
        writer: Optional[DetachedWriter] = None,
    ) -> None:
        self.settings = settings or LabelSettings()
        self.font = font or load_font_asset(self.settings.font_path, self.settings.font_size)
        self.directory = directory or BarcodeDirectory(
            self.settings.data_dir or default_data_dir(self.settings.app_id)
        )
        self._owns_writer = writer is None
        self.writer = writer or DetachedWriter(self.settings.writer_workers)
        self.path_sanitizer = PathSanitizer(
            replace_chars=self.settings.path_replace_chars,
            strip_chars=self.settings.path_strip_chars,
        )

    def close(self) -> None:
        if self._owns_writer:
            self.writer.shutdown(wait=True)

    def __enter__(self) -> "BarcodeService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def prepare(self, request: BarcodeRequest) -> PreparedBarcode:
        """
        Sanitize and encode.

        Raises:
            BarcodeInputError: empty product or a character outside Code 39.
        """
        variant = request.variant_name
        product_code = barcode_safe(request.product_name)
        if not product_code:
            raise EmptyInputError("Product name must not be empty")
        variant_code = barcode_safe(variant) if variant is not None else None
        token = (
            f"{product_code}-{variant_code}" if variant_code else str(product_code)
        )
        logger.info("Starting barcode generation for: %s", token)
        train = encode(barcode_safe(token))
        product_path = self.path_sanitizer(request.product_name)
        if not product_path:
            raise EmptyInputError("Product name has no path-safe characters")
        return PreparedBarcode(
            product_path=product_path,
            variant_path=self.path_sanitizer(variant) if variant is not None else None,
            product_code=product_code,
            variant_code=variant_code,
            token=token,
            train=train,
        )

    def render_artifact(
        self,
        prepared: PreparedBarcode,
        target: RenderTarget,
        sku: Optional[str] = None,
    ) -> bytes:
        """Render the artifact bytes of a raster/vector/JSON target."""
        s = self.settings
        if target is RenderTarget.JSON:
            return render_json(prepared.train, s.json_height, s.xdim).encode("utf-8")
        if target is RenderTarget.SVG:
            return render_svg(prepared.train, s.barcode_height, s.xdim).encode("utf-8")
        if target is RenderTarget.PNG:
            img = render_png(prepared.train, s.barcode_height, s.xdim)
        else:
            sku_caption = None
            if target is RenderTarget.PNG_SKU_CAPTION:
                sku_caption = f"SKU: {sku or prepared.token}"
            img = render_png_with_caption(
                prepared.train,
                self.font,
                prepared.caption,
                sku_caption=sku_caption,
                height=s.barcode_height,
                xdim=s.xdim,
            )
        return image_to_png_bytes(img)

    def render(
        self, request: BarcodeRequest, target: Optional[RenderTarget] = None
    ) -> bytes:
        """Render without persisting anything."""
        prepared = self.prepare(request)
        return self.render_artifact(prepared, target or self.settings.render_target, request.sku)

    def generate(
        self, request: BarcodeRequest, target: Optional[RenderTarget] = None
    ) -> BarcodeResponse:
        """
        Run the whole pipeline and schedule the artifact write.

        Returns:
            BarcodeResponse with the intended file path (empty for JSON).

        Raises:
            BarcodeInputError: before any rendering.
            BarcodeFormatError: if rendering fails; nothing is written.
            ArtifactWriteError: if the artifact directory cannot be created.
        """
        target = target or self.settings.render_target
        prepared = self.prepare(request)
        document = to_document(prepared.train, self.settings.json_height, self.settings.xdim)

        file_path: Optional[Path] = None
        if target.filename is not None:
            data = self.render_artifact(prepared, target, request.sku)
            file_path = self.directory.prepare(
                str(prepared.product_path),
                str(prepared.variant_path) if prepared.variant_path else None,
                target,
            )
            self.writer.submit(file_path, data)

        response = BarcodeResponse(
            file_path=str(file_path) if file_path else "",
            barcode=document,
            barcode_token=prepared.token,
        )
        logger.debug("Generated barcode data for %s -> %s", prepared.token, response.file_path)
        logger.info("Barcode generation process completed for: %s", prepared.product_code)
        return response
