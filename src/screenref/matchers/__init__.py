"""Reference comparator plugins."""

from __future__ import annotations

from screenref.matchers.base import BaseComparator
from screenref.matchers.color import ColorComparator
from screenref.matchers.image import ImageComparator, MonochromeImageComparator
from screenref.matchers.ocr import BaseOcrEngine, OCRComparator, TesseractOcrEngine

__all__ = [
    "BaseComparator",
    "BaseOcrEngine",
    "ColorComparator",
    "ImageComparator",
    "MonochromeImageComparator",
    "OCRComparator",
    "TesseractOcrEngine",
]
