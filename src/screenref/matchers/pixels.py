"""Channel helpers shared by the comparators.

Images follow the OpenCV layout: H×W (gray), H×W×3 (BGR) or H×W×4 (BGRA).
"""

from __future__ import annotations

import cv2
import numpy as np


def color_channels(img: np.ndarray) -> np.ndarray:
    """Return an H×W×3 BGR view of *img*, dropping alpha."""
    if img.ndim == 2:
        return np.repeat(img[:, :, np.newaxis], 3, axis=2)
    if img.shape[2] == 1:
        return np.repeat(img, 3, axis=2)
    return img[:, :, :3]


def channel_max(dtype: np.dtype) -> int | float:
    """Largest representable channel value for *dtype*."""
    if np.issubdtype(dtype, np.integer):
        return int(np.iinfo(dtype).max)
    return 1.0


def to_uint16(channels: np.ndarray) -> np.ndarray:
    """Widen channels to 16 bits (8-bit values scale by 257)."""
    if channels.dtype == np.uint16:
        return channels
    if channels.dtype == np.uint8:
        return channels.astype(np.uint16) * 257
    if np.issubdtype(channels.dtype, np.floating):
        return (np.clip(channels, 0.0, 1.0) * 65535).round().astype(np.uint16)
    return channels.astype(np.uint16)


def to_uint8(channels: np.ndarray) -> np.ndarray:
    """Truncate channels to 8 bits by right-shifting wider depths."""
    return (to_uint16(channels) >> 8).astype(np.uint8)


def to_rgb8(img: np.ndarray) -> np.ndarray:
    """Convert *img* to an 8-bit H×W×3 RGB array."""
    bgr = np.ascontiguousarray(to_uint8(color_channels(img)))
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
