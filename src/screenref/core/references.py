"""Reference spec parsing — ``<tag>:<value>`` string to ReferenceSpec."""

from __future__ import annotations

from screenref.core.exceptions import InvalidReferenceSpecError
from screenref.core.models import (
    ColorSpec,
    ImageSpec,
    MonochromeImageSpec,
    OcrSpec,
    Reference,
    ReferenceKind,
    ReferenceSpec,
)


def parse_reference_spec(reference: Reference) -> ReferenceSpec:
    """Parse *reference.spec* into its tagged variant.

    Only the tag is checked here. Tag payloads (hex colors, OCR arguments,
    bitmap paths) are validated when the reference is compared.

    Raises:
        InvalidReferenceSpecError: If the tag is not one of the known kinds.
    """
    tag, sep, value = reference.spec.partition(":")
    if not sep:
        raise InvalidReferenceSpecError(reference.name, reference.spec)

    if tag == ReferenceKind.COLOR:
        return ColorSpec(value=value)
    if tag == ReferenceKind.OCR:
        return OcrSpec(args=value)
    if tag == ReferenceKind.IMAGE:
        return ImageSpec(path=value)
    if tag == ReferenceKind.MONOCHROME_IMAGE:
        return MonochromeImageSpec(path=value)

    raise InvalidReferenceSpecError(reference.name, reference.spec)
