import pytest

from stocklabel.barcodegen.code39 import encode
from stocklabel.model.module_train import BarcodeDocument, Module, ModuleTrain


def test_module_rejects_non_positive_width() -> None:
    with pytest.raises(ValueError, match="positive"):
        Module(0, True)


class TestModuleTrainInvariants:
    def test_empty(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            ModuleTrain(())

    def test_must_start_with_bar(self) -> None:
        with pytest.raises(ValueError, match="begin and end"):
            ModuleTrain((Module(1, False), Module(1, True)))

    def test_must_end_with_bar(self) -> None:
        with pytest.raises(ValueError, match="begin and end"):
            ModuleTrain((Module(1, True), Module(1, False)))

    def test_must_alternate(self) -> None:
        with pytest.raises(ValueError, match="alternate"):
            ModuleTrain((Module(1, True), Module(2, True)))

    def test_runs(self) -> None:
        train = ModuleTrain.from_bits([1, 1, 0, 1])
        assert train.modules == (Module(2, True), Module(1, False), Module(1, True))
        assert train.total_width == 4
        assert train.bars == (Module(2, True), Module(1, True))

    def test_bar_spans(self) -> None:
        train = ModuleTrain.from_bits([1, 1, 0, 1, 0, 0, 0, 1, 1])
        assert list(train.bar_spans()) == [(0, 2), (3, 1), (7, 2)]


class TestBits:
    def test_bits(self) -> None:
        train = ModuleTrain((Module(2, True), Module(1, False), Module(1, True)))
        assert train.bits() == b"\x01\x01\x00\x01"

    def test_from_bits(self) -> None:
        assert ModuleTrain.from_bits([1, 1, 0, 1]).modules == (
            Module(2, True),
            Module(1, False),
            Module(1, True),
        )

    def test_round_trip_on_encoded_train(self) -> None:
        train = encode("PRODUCTONE-XS")
        assert ModuleTrain.from_bits(train.bits()) == train

    def test_from_bits_rejects_other_values(self) -> None:
        with pytest.raises(ValueError, match="0 or 1"):
            ModuleTrain.from_bits([1, 2, 1])

    def test_from_bits_rejects_leading_space(self) -> None:
        with pytest.raises(ValueError):
            ModuleTrain.from_bits([0, 1])


class TestBarcodeDocument:
    @pytest.fixture
    def document(self) -> BarcodeDocument:
        return BarcodeDocument.from_train(encode("XS"), height=10, xdim=1)

    def test_to_dict(self, document: BarcodeDocument) -> None:
        d = document.to_dict()
        assert d["height"] == 10
        assert d["xdim"] == 1
        assert set(d["encoding"]) == {0, 1}
        assert len(d["encoding"]) == encode("XS").total_width

    def test_from_dict(self, document: BarcodeDocument) -> None:
        assert BarcodeDocument.from_dict(document.to_dict()) == document

    def test_to_train(self, document: BarcodeDocument) -> None:
        assert document.to_train() == encode("XS")

    @pytest.mark.parametrize("height,xdim", [(0, 1), (10, 0), (-1, 1)])
    def test_invalid_scale(self, height: int, xdim: int) -> None:
        with pytest.raises(ValueError):
            BarcodeDocument(height=height, xdim=xdim, encoding=b"\x01")

    def test_from_dict_missing_field(self) -> None:
        with pytest.raises(ValueError, match="encoding"):
            BarcodeDocument.from_dict({"height": 10, "xdim": 1})

    def test_from_dict_bad_encoding(self) -> None:
        with pytest.raises(ValueError, match="0 and 1"):
            BarcodeDocument.from_dict({"height": 10, "xdim": 1, "encoding": [1, 5]})
