"""Domain model: module trains, barcode documents, request/response and settings."""

from stocklabel.model.enums import RenderTarget, SanitizePolicy
from stocklabel.model.module_train import BarcodeDocument, Module, ModuleTrain
from stocklabel.model.request import BarcodeRequest, BarcodeResponse
from stocklabel.model.settings import DEFAULT_CONFIG, LabelSettings

__all__ = [
    "RenderTarget",
    "SanitizePolicy",
    "BarcodeDocument",
    "Module",
    "ModuleTrain",
    "BarcodeRequest",
    "BarcodeResponse",
    "DEFAULT_CONFIG",
    "LabelSettings",
]
