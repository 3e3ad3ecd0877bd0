import pytest

from stocklabel.model.enums import RenderTarget, SanitizePolicy


def test_render_target_values() -> None:
    assert [t.value for t in RenderTarget] == [
        "json",
        "svg",
        "png",
        "png_caption",
        "png_sku_caption",
    ]


@pytest.mark.parametrize(
    "target,filename",
    [
        (RenderTarget.JSON, None),
        (RenderTarget.SVG, "barcode.svg"),
        (RenderTarget.PNG, "barcode.png"),
        (RenderTarget.PNG_CAPTION, "barcode.png"),
        (RenderTarget.PNG_SKU_CAPTION, "barcode.png"),
    ],
)
def test_filename(target: RenderTarget, filename: str) -> None:
    assert target.filename == filename


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("png", RenderTarget.PNG),
        ("PNG_CAPTION", RenderTarget.PNG_CAPTION),
        (" png-sku-caption ", RenderTarget.PNG_SKU_CAPTION),
        ("Json", RenderTarget.JSON),
    ],
)
def test_parse(raw: str, expected: RenderTarget) -> None:
    assert RenderTarget.parse(raw) is expected


def test_parse_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown render target"):
        RenderTarget.parse("pdf")


def test_str_enum() -> None:
    assert RenderTarget.SVG == "svg"
    assert SanitizePolicy("barcode") is SanitizePolicy.BARCODE
