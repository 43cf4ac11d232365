"""OCRComparator — pytesseract based text extraction.

Unlike the other comparators, a successful OCR comparison returns the
recognized text itself rather than the reference name.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import cv2
import numpy as np
import pytesseract  # type: ignore[import-untyped]

from screenref.core.exceptions import OcrArgumentError
from screenref.core.models import (
    OcrMode,
    OcrOptions,
    OcrReading,
    OcrSpec,
    ReferenceKind,
    SampleKind,
)
from screenref.matchers.base import BaseComparator
from screenref.matchers.pixels import to_rgb8

if TYPE_CHECKING:
    from screenref.core.models import MatcherSettings, Reference, ReferenceSpec

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"[ \n\r\f]")
_INTEGER = re.compile(r"[+-]?[0-9]+")

# Digits that OCR tends to read in place of stylized letters.
_DIGITS_TO_LETTERS = str.maketrans("123456789", "lreasgtbg")
# Letters that OCR tends to read in place of digits.
_LETTERS_TO_DIGITS = str.maketrans("lirastbg", "11245789")

_MODE_FLAGS: dict[str, OcrMode] = {
    "y": OcrMode.ALPHABETIC,
    "n": OcrMode.NUMERIC,
}


# -- OCR engine ---------------------------------------------------------------


class BaseOcrEngine(ABC):
    """OCR engine handle.

    Used as a context manager: a handle is acquired for one comparison and
    released right after, never shared between calls.
    """

    def __enter__(self) -> BaseOcrEngine:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:  # noqa: B027
        """Release engine resources. No-op by default."""

    @abstractmethod
    def recognize(self, image: np.ndarray) -> str:
        """Return the text recognized in *image*."""
        ...


OcrEngineFactory = Callable[[], BaseOcrEngine]


def configure_tesseract(tesseract_cmd: str) -> None:
    """Point pytesseract at *tesseract_cmd*.

    pytesseract keeps the binary path process-wide, so this is called once by
    the application entry point, never per engine.
    """
    if tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd


class TesseractOcrEngine(BaseOcrEngine):
    """Tesseract via ``pytesseract.image_to_string``."""

    def __init__(
        self,
        languages: list[str] | None = None,
        config: str = "",
    ) -> None:
        self._lang = "+".join(languages or ["eng"])
        self._config = config

    @classmethod
    def from_settings(cls, settings: MatcherSettings) -> TesseractOcrEngine:
        return cls(
            languages=settings.ocr_languages,
            config=settings.tesseract_config,
        )

    def recognize(self, image: np.ndarray) -> str:
        text: str = pytesseract.image_to_string(
            to_rgb8(image),
            lang=self._lang,
            config=self._config,
        )
        return text


# -- argument parsing / normalization -----------------------------------------


def parse_ocr_args(args: str) -> OcrOptions:
    """Parse ``"<width>,<mode>"``. Both fields are optional.

    Raises:
        OcrArgumentError: If the width is present but not an integer.
    """
    parts = args.split(",")

    width: int | None = None
    raw_width = parts[0]
    if raw_width:
        if not _INTEGER.fullmatch(raw_width):
            msg = f"Illegal OCR arg width={raw_width!r}"
            raise OcrArgumentError(msg)
        width = int(raw_width)

    mode = OcrMode.NONE
    if len(parts) > 1:
        mode = _MODE_FLAGS.get(parts[1].strip().lower(), OcrMode.NONE)

    return OcrOptions(width=width, mode=mode)


def normalize_text(text: str, mode: OcrMode = OcrMode.NONE) -> str:
    """Strip whitespace and undo typical OCR letter/digit confusions."""
    out = _WHITESPACE.sub("", text)
    if mode == OcrMode.ALPHABETIC:
        out = out.lower().translate(_DIGITS_TO_LETTERS)
    elif mode == OcrMode.NUMERIC:
        out = out.lower().translate(_LETTERS_TO_DIGITS)
    return out


def resize_to_width(image: np.ndarray, width: int) -> np.ndarray:
    """Lanczos-resize *image* to *width*, preserving the aspect ratio.

    Raises:
        OcrArgumentError: If OpenCV cannot produce an image of that size.
    """
    h, w = image.shape[:2]
    height = max(1, round(h * width / w))
    try:
        return cv2.resize(image, (width, height), interpolation=cv2.INTER_LANCZOS4)
    except (cv2.error, OverflowError, MemoryError) as e:
        msg = f"Cannot resize OCR region to width={width}: {e}"
        raise OcrArgumentError(msg) from e


def read_text(
    image: np.ndarray,
    options: OcrOptions,
    engine_factory: OcrEngineFactory,
) -> OcrReading:
    """Run OCR on *image* and normalize the result.

    Engine failures are reported through ``OcrReading.error`` instead of
    being raised.
    """
    if image.size == 0:
        return OcrReading()

    if options.width is not None and options.width > 0:
        image = resize_to_width(image, options.width)

    try:
        with engine_factory() as engine:
            raw = engine.recognize(image)
    except Exception as e:
        logger.warning("OCR engine failed: %s", e)
        return OcrReading(error=str(e) or type(e).__name__)

    return OcrReading(raw_text=raw, text=normalize_text(raw, options.mode))


# -- comparator ---------------------------------------------------------------


class OCRComparator(BaseComparator):
    """Extract text from a sampled region using ``ocr:`` references."""

    def __init__(self, engine_factory: OcrEngineFactory) -> None:
        self._engine_factory = engine_factory

    @property
    def kind(self) -> ReferenceKind:
        return ReferenceKind.OCR

    @property
    def sample_kind(self) -> SampleKind:
        return SampleKind.REGION

    def compare(
        self,
        reference: Reference,
        spec: ReferenceSpec,
        sample: Any,
    ) -> str:
        assert isinstance(spec, OcrSpec)  # noqa: S101
        options = parse_ocr_args(spec.args)
        reading = read_text(sample, options, self._engine_factory)
        if reading.failed:
            logger.debug("OCR failed (reference=%s): %s", reference.name, reading.error)
        return reading.text
