"""Screen sampling — pixel and sub-image extraction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from screenref.matchers.pixels import color_channels, to_uint8

if TYPE_CHECKING:
    import numpy as np

    from screenref.core.models import Point, Rect


def sample_pixel(screen: np.ndarray, point: Point) -> tuple[int, int, int]:
    """Return the 8-bit ``(r, g, b)`` at *point*.

    Out-of-bounds coordinates yield black instead of failing.
    """
    height, width = screen.shape[:2]
    if not (0 <= point.x < width and 0 <= point.y < height):
        return (0, 0, 0)
    pixel = to_uint8(color_channels(screen[point.y : point.y + 1, point.x : point.x + 1]))
    b, g, r = (int(c) for c in pixel[0, 0])
    return (r, g, b)


def sample_region(screen: np.ndarray, rect: Rect) -> np.ndarray:
    """Return a view of *rect* clipped to the screen bounds (possibly empty)."""
    height, width = screen.shape[:2]
    x0 = min(max(rect.x, 0), width)
    y0 = min(max(rect.y, 0), height)
    x1 = min(max(rect.x + rect.width, x0), width)
    y1 = min(max(rect.y + rect.height, y0), height)
    return screen[y0:y1, x0:x1]
