"""Tests for reference spec parsing."""

from __future__ import annotations

import pytest

from screenref.core.exceptions import InvalidReferenceSpecError
from screenref.core.models import (
    ColorSpec,
    ImageSpec,
    MonochromeImageSpec,
    OcrSpec,
    Reference,
    ReferenceKind,
)
from screenref.core.references import parse_reference_spec


def _parse(spec: str):  # noqa: ANN202
    return parse_reference_spec(Reference(name="r", spec=spec))


class TestParseReferenceSpec:
    def test_color(self) -> None:
        assert _parse("color:#FFFFFF") == ColorSpec(value="#FFFFFF")

    def test_color_payload_not_checked(self) -> None:
        spec = _parse("color:#4268fg")
        assert spec.kind == ReferenceKind.COLOR

    def test_ocr(self) -> None:
        assert _parse("ocr:200,y") == OcrSpec(args="200,y")
        assert _parse("ocr:") == OcrSpec(args="")

    def test_image(self) -> None:
        assert _parse("image:refs/a.png") == ImageSpec(path="refs/a.png")

    def test_monochrome_image(self) -> None:
        assert _parse("imageM:refs/a.png") == MonochromeImageSpec(path="refs/a.png")

    def test_path_with_colon(self) -> None:
        assert _parse("image:C:/refs/a.png") == ImageSpec(path="C:/refs/a.png")

    @pytest.mark.parametrize("spec", ["bogus:x", "imagem:a.png", "COLOR:#FFFFFF", "color", ""])
    def test_unknown_tag(self, spec: str) -> None:
        with pytest.raises(InvalidReferenceSpecError):
            _parse(spec)
