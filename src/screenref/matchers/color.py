"""ColorComparator — exact 8-bit color equality."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from screenref.core.exceptions import ColorFormatError
from screenref.core.models import ColorSpec, ReferenceKind, SampleKind
from screenref.matchers.base import BaseComparator

if TYPE_CHECKING:
    from screenref.core.models import Reference, ReferenceSpec

logger = logging.getLogger(__name__)

_HTML_COLOR_LEN = 7  # "#RRGGBB"


def decode_hex_color(value: str) -> tuple[int, int, int]:
    """Decode an HTML ``#RRGGBB`` color into an ``(r, g, b)`` triple.

    Raises:
        ColorFormatError: On wrong length, missing ``#`` or non-hex digits.
    """
    if len(value) != _HTML_COLOR_LEN or not value.startswith("#"):
        msg = f"Invalid color, expected HTML color #RRGGBB: {value!r}"
        raise ColorFormatError(msg)
    try:
        raw = bytes.fromhex(value[1:])
    except ValueError as e:
        msg = f"Invalid color, expected HTML color #RRGGBB: {value!r}"
        raise ColorFormatError(msg) from e
    return raw[0], raw[1], raw[2]


class ColorComparator(BaseComparator):
    """Match a sampled pixel against ``color:#RRGGBB`` references."""

    @property
    def kind(self) -> ReferenceKind:
        return ReferenceKind.COLOR

    @property
    def sample_kind(self) -> SampleKind:
        return SampleKind.POINT

    def compare(
        self,
        reference: Reference,
        spec: ReferenceSpec,
        sample: tuple[int, int, int],
    ) -> str:
        assert isinstance(spec, ColorSpec)  # noqa: S101
        expected = decode_hex_color(spec.value)
        if tuple(sample) == expected:
            return reference.name
        logger.debug("Color %s != %s (reference=%s)", sample, expected, reference.name)
        return ""
