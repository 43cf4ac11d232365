"""Image comparators — exact and monochrome pixel equality.

Both require the reference bitmap and the sampled region to have the same
width and height. Alpha is ignored.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from screenref.core.loader import load_image
from screenref.core.models import (
    ImageSpec,
    MonochromeImageSpec,
    ReferenceKind,
    SampleKind,
)
from screenref.matchers.base import BaseComparator
from screenref.matchers.pixels import channel_max, color_channels, to_uint16

if TYPE_CHECKING:
    from screenref.core.loader import BaseFileLoader
    from screenref.core.models import Reference, ReferenceSpec

logger = logging.getLogger(__name__)


def _same_size(img1: np.ndarray, img2: np.ndarray) -> bool:
    return img1.shape[:2] == img2.shape[:2]


def compare_images(img1: np.ndarray, img2: np.ndarray) -> bool:
    """True if both images have the same size and identical RGB values."""
    if not _same_size(img1, img2):
        return False
    return bool(
        np.array_equal(
            to_uint16(color_channels(img1)),
            to_uint16(color_channels(img2)),
        )
    )


def white_mask(img: np.ndarray) -> np.ndarray:
    """Boolean H×W mask, True where all three channels are at full scale."""
    channels = color_channels(img)
    return np.all(channels == channel_max(channels.dtype), axis=2)


def compare_monochrome(img1: np.ndarray, img2: np.ndarray) -> bool:
    """True if both images agree on white vs. non-white at every pixel."""
    if not _same_size(img1, img2):
        logger.warning(
            "Images are not of the same size img1=%sx%s img2=%sx%s",
            img1.shape[1],
            img1.shape[0],
            img2.shape[1],
            img2.shape[0],
        )
        return False
    return bool(np.array_equal(white_mask(img1), white_mask(img2)))


class ImageComparator(BaseComparator):
    """Match a sampled region against ``image:<path>`` references."""

    def __init__(self, loader: BaseFileLoader) -> None:
        self._loader = loader

    @property
    def kind(self) -> ReferenceKind:
        return ReferenceKind.IMAGE

    @property
    def sample_kind(self) -> SampleKind:
        return SampleKind.REGION

    def compare(
        self,
        reference: Reference,
        spec: ReferenceSpec,
        sample: np.ndarray,
    ) -> str:
        assert isinstance(spec, ImageSpec)  # noqa: S101
        ref_img = load_image(self._loader, spec.path)
        return reference.name if compare_images(ref_img, sample) else ""


class MonochromeImageComparator(BaseComparator):
    """Match a sampled region against ``imageM:<path>`` references."""

    def __init__(self, loader: BaseFileLoader) -> None:
        self._loader = loader

    @property
    def kind(self) -> ReferenceKind:
        return ReferenceKind.MONOCHROME_IMAGE

    @property
    def sample_kind(self) -> SampleKind:
        return SampleKind.REGION

    def compare(
        self,
        reference: Reference,
        spec: ReferenceSpec,
        sample: np.ndarray,
    ) -> str:
        assert isinstance(spec, MonochromeImageSpec)  # noqa: S101
        ref_img = load_image(self._loader, spec.path)
        return reference.name if compare_monochrome(ref_img, sample) else ""
