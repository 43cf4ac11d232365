"""Source overlay drawing for debugging match documents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from screenref.core.models import Point, Rect
from screenref.matchers.pixels import channel_max

if TYPE_CHECKING:
    from collections.abc import Iterable

    from screenref.core.models import Source

logger = logging.getLogger(__name__)


def _marker_value(canvas: np.ndarray, rgb: tuple[int, int, int]) -> np.ndarray:
    """Marker color in the canvas' channel layout and depth."""
    top = channel_max(canvas.dtype)
    r, g, b = rgb
    values = [c * top / 255 for c in (b, g, r)]
    if canvas.shape[2] == 4:
        values.append(top)
    if np.issubdtype(canvas.dtype, np.integer):
        values = [round(v) for v in values]
    return np.array(values, dtype=canvas.dtype)


def _set(canvas: np.ndarray, x: int, y: int, value: np.ndarray) -> None:
    height, width = canvas.shape[:2]
    if 0 <= x < width and 0 <= y < height:
        canvas[y, x] = value


def draw_sources(
    screen: np.ndarray,
    sources: Iterable[Source],
    color: tuple[int, int, int] = (255, 0, 0),
    step: int = 5,
) -> np.ndarray:
    """Return a copy of *screen* with each source marked.

    Points get a single pixel. Rectangles get a dashed outline with one
    marker pixel every *step* pixels along each edge.
    """
    if screen.ndim == 2:
        screen = screen[:, :, np.newaxis]
    if screen.shape[2] == 1:
        canvas = np.repeat(screen, 3, axis=2)
    else:
        canvas = screen.copy()
    value = _marker_value(canvas, color)

    for source in sources:
        geom = source.geometry
        if isinstance(geom, Point):
            _set(canvas, geom.x, geom.y, value)
        elif isinstance(geom, Rect):
            for dx in range(0, geom.width, step):
                _set(canvas, geom.x + dx, geom.y, value)
                _set(canvas, geom.x + dx, geom.y + geom.height, value)
            for dy in range(0, geom.height, step):
                _set(canvas, geom.x, geom.y + dy, value)
                _set(canvas, geom.x + geom.width, geom.y + dy, value)
        else:
            logger.warning("Source has no geometry, not drawn: %s", source.name)

    return canvas
