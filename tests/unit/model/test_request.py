import pytest

from stocklabel.model.module_train import BarcodeDocument
from stocklabel.model.request import BarcodeRequest, BarcodeResponse


class TestBarcodeRequest:
    def test_from_dict_camel_case(self) -> None:
        req = BarcodeRequest.from_dict(
            {"productName": "Product One", "variantName": "XS", "sku": "P1-XS"}
        )
        assert req == BarcodeRequest("Product One", "XS", "P1-XS")

    def test_from_dict_snake_case(self) -> None:
        req = BarcodeRequest.from_dict({"product_name": "Shirt", "variant_name": "L"})
        assert req.product_name == "Shirt"
        assert req.variant_name == "L"
        assert req.sku is None

    def test_variant_optional(self) -> None:
        assert BarcodeRequest.from_dict({"productName": "Shirt"}).variant_name is None

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"productName": 5},
            {"productName": "Shirt", "variantName": 1},
            {"productName": "Shirt", "sku": ["x"]},
        ],
    )
    def test_from_dict_invalid(self, data: dict) -> None:
        with pytest.raises(ValueError):
            BarcodeRequest.from_dict(data)


def test_response_to_dict() -> None:
    document = BarcodeDocument(height=10, xdim=1, encoding=b"\x01\x00\x01")
    response = BarcodeResponse("/data/SHIRT/barcode.png", document, "SHIRT")
    assert response.to_dict() == {
        "filePath": "/data/SHIRT/barcode.png",
        "barcode": {"height": 10, "xdim": 1, "encoding": [1, 0, 1]},
        "barcodeToken": "SHIRT",
    }
