import json
import xml.etree.ElementTree as ET
from unittest.mock import Mock, patch

import pytest
from hypothesis import given
from hypothesis import strategies as st
from PIL import Image

from stocklabel.barcodegen.code39 import ALPHABET, encode, is_encodable
from stocklabel.barcodegen.compositor import TEXT_PADDING
from stocklabel.barcodegen.errors import BarcodeFormatError, BarcodeInputError
from stocklabel.barcodegen.fonts import FontAsset, load_font_asset
from stocklabel.barcodegen.renderers import (
    DEFAULT_BARCODE_HEIGHT,
    band_layout,
    caption_canvas_height,
    decode_json,
    image_to_png_bytes,
    render_json,
    render_png,
    render_png_with_caption,
    render_svg,
    text_band_height,
    to_document,
)
from stocklabel.barcodegen.sanitize import barcode_safe
from stocklabel.model.module_train import ModuleTrain

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture(scope="module")
def font() -> FontAsset:
    return load_font_asset(size=22)


@pytest.fixture
def train() -> ModuleTrain:
    return encode("PRODUCTONE-XS")


class TestJson:
    @pytest.mark.parametrize("token", ["0", "A", "PRODUCTONE-XS", "SKU 12/3+4%", "$.-"])
    def test_round_trip(self, token: str) -> None:
        assert decode_json(render_json(encode(token))) == encode(token)

    def test_fields(self, train: ModuleTrain) -> None:
        data = json.loads(render_json(train, height=30, xdim=2))
        assert data["height"] == 30
        assert data["xdim"] == 2
        assert len(data["encoding"]) == train.total_width

    def test_scale_not_derived_from_train(self) -> None:
        short = json.loads(render_json(encode("A")))
        long = json.loads(render_json(encode("ABCDEFGHIJ")))
        assert (short["height"], short["xdim"]) == (long["height"], long["xdim"]) == (10, 1)

    def test_to_document(self, train: ModuleTrain) -> None:
        doc = to_document(train)
        assert doc.encoding == train.bits()

    def test_decode_invalid_json(self) -> None:
        with pytest.raises(BarcodeFormatError, match="Invalid barcode JSON"):
            decode_json("{not json")

    def test_decode_non_object(self) -> None:
        with pytest.raises(BarcodeFormatError, match="object"):
            decode_json("[1, 0, 1]")

    def test_decode_bad_encoding(self) -> None:
        with pytest.raises(BarcodeFormatError):
            decode_json('{"height": 10, "xdim": 1, "encoding": [0, 1]}')


class TestSvg:
    def test_starts_with_svg(self, train: ModuleTrain) -> None:
        assert render_svg(train).startswith("<svg")

    def test_one_rect_per_bar(self, train: ModuleTrain) -> None:
        root = ET.fromstring(render_svg(train))
        rects = root.findall(f"{SVG_NS}rect")
        assert len(rects) == len(train.bars)

    def test_geometry(self) -> None:
        train = ModuleTrain.from_bits([1, 1, 0, 1])
        root = ET.fromstring(render_svg(train, height=20, xdim=3))
        assert root.get("width") == "12"
        assert root.get("height") == "20"
        rects = root.findall(f"{SVG_NS}rect")
        assert [(r.get("x"), r.get("width")) for r in rects] == [("0", "6"), ("9", "3")]
        assert all(r.get("height") == "20" for r in rects)

    def test_drawn_width_matches_bars(self, train: ModuleTrain) -> None:
        root = ET.fromstring(render_svg(train, xdim=2))
        drawn = sum(int(r.get("width")) for r in root.findall(f"{SVG_NS}rect"))
        assert drawn == sum(m.width for m in train.bars) * 2

    def test_invalid_scale(self, train: ModuleTrain) -> None:
        with pytest.raises(BarcodeFormatError):
            render_svg(train, height=0)

    @patch("stocklabel.barcodegen.renderers.ET.fromstring")
    def test_parse_failure_is_format_error(self, mock_parse: Mock, train: ModuleTrain) -> None:
        mock_parse.side_effect = ET.ParseError("broken")
        with pytest.raises(BarcodeFormatError, match="SVG"):
            render_svg(train)


class TestPng:
    def test_size_and_mode(self, train: ModuleTrain) -> None:
        img = render_png(train, xdim=2)
        assert img.mode == "1"
        assert img.size == (train.total_width * 2, DEFAULT_BARCODE_HEIGHT)

    def test_pixels(self) -> None:
        train = ModuleTrain.from_bits([1, 1, 0, 1])
        img = render_png(train, height=5, xdim=1)
        row = [img.getpixel((x, 2)) for x in range(4)]
        assert row == [0, 0, 255, 0]

    def test_background_is_canonical_white(self, train: ModuleTrain) -> None:
        img = render_png(train)
        assert img.getextrema() == (0, 255)
        assert img.getpixel((train.total_width - 1, 0)) == 0
        assert img.getpixel((1, 0)) == 255

    def test_xdim_scales_columns(self) -> None:
        train = ModuleTrain.from_bits([1, 0, 1])
        img = render_png(train, height=3, xdim=3)
        row = [img.getpixel((x, 0)) for x in range(9)]
        assert row == [0, 0, 0, 255, 255, 255, 0, 0, 0]

    def test_png_bytes(self, train: ModuleTrain) -> None:
        data = image_to_png_bytes(render_png(train))
        assert data[:4] == b"\x89PNG"

    def test_png_bytes_failure(self) -> None:
        img = Mock(spec=Image.Image)
        img.save.side_effect = OSError("disk full")
        with pytest.raises(BarcodeFormatError, match="PNG"):
            image_to_png_bytes(img)


class TestCaptionedPng:
    def test_single_band_height(self, train: ModuleTrain, font: FontAsset) -> None:
        img = render_png_with_caption(train, font, "PRODUCTONE (XS)")
        assert img.mode == "RGB"
        assert img.size == (train.total_width, 84)
        assert img.height == caption_canvas_height(DEFAULT_BARCODE_HEIGHT, 22)

    def test_two_band_height(self, train: ModuleTrain, font: FontAsset) -> None:
        img = render_png_with_caption(
            train, font, "PRODUCTONE (XS)", sku_caption="SKU: PRODUCTONE-XS"
        )
        assert img.height == 30 + TEXT_PADDING + 44 + TEXT_PADDING + 30 == 124

    def test_barcode_band_position(self, font: FontAsset) -> None:
        train = ModuleTrain.from_bits([1] * 4 + [0] * 4 + [1] * 4)
        single = render_png_with_caption(train, font, "")
        assert single.getpixel((0, 0)) == (0, 0, 0)
        double = render_png_with_caption(train, font, "", sku_caption="")
        top = text_band_height(22) + TEXT_PADDING
        assert double.getpixel((0, top - 1)) == (255, 255, 255)
        assert double.getpixel((0, top)) == (0, 0, 0)
        assert double.getpixel((5, top)) == (255, 255, 255)

    def test_caption_draws_ink(self, train: ModuleTrain, font: FontAsset) -> None:
        img = render_png_with_caption(train, font, "PRODUCTONE (XS)")
        caption_band = img.crop((0, DEFAULT_BARCODE_HEIGHT + TEXT_PADDING, img.width, img.height))
        assert caption_band.getextrema()[0][0] < 255

    def test_band_layout(self) -> None:
        assert band_layout(44, 22) == [("barcode", 0, 44), ("caption", 54, 30)]
        assert band_layout(44, 22, with_sku=True) == [
            ("sku", 0, 30),
            ("barcode", 40, 44),
            ("caption", 94, 30),
        ]


@given(st.text(alphabet=sorted(ALPHABET), min_size=1, max_size=40))
def test_json_round_trip_for_any_encodable_token(token: str) -> None:
    train = encode(token)
    assert decode_json(render_json(train)) == train


@given(st.text(max_size=30))
def test_encode_accepts_or_rejects_with_input_error(text: str) -> None:
    token = barcode_safe(text)
    try:
        train = encode(token)
    except BarcodeInputError:
        assert not is_encodable(token.value)
    else:
        assert decode_json(render_json(train)) == train
