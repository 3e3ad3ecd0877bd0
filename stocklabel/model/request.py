# RU: Запрос/ответ генерации штрихкода на границе с командным слоем.
# EN: Request/response shapes exchanged with the command layer.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from stocklabel.model.module_train import BarcodeDocument

__all__ = ["BarcodeRequest", "BarcodeResponse"]


@dataclass(frozen=True)
class BarcodeRequest:
    product_name: str
    variant_name: Optional[str] = None
    sku: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BarcodeRequest":
        """Accepts both camelCase (wire) and snake_case keys."""
        product = d.get("productName", d.get("product_name"))
        if not isinstance(product, str):
            raise ValueError("productName must be a string")
        variant = d.get("variantName", d.get("variant_name"))
        if variant is not None and not isinstance(variant, str):
            raise ValueError("variantName must be a string when present")
        sku = d.get("sku")
        if sku is not None and not isinstance(sku, str):
            raise ValueError("sku must be a string when present")
        return cls(product_name=product, variant_name=variant, sku=sku)


@dataclass(frozen=True)
class BarcodeResponse:
    """
    file_path is the intended artifact location. It is returned before the
    detached write completes, so the file may not exist (yet, or ever).
    """

    file_path: str
    barcode: BarcodeDocument
    barcode_token: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filePath": self.file_path,
            "barcode": self.barcode.to_dict(),
            "barcodeToken": self.barcode_token,
        }
