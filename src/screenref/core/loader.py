"""File-loading collaborator and image decoding.

The loader is injected into the Matcher. It returns raw bytes for an
identifier, or None when the identifier cannot be resolved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import cv2
import numpy as np

from screenref.core.exceptions import ReferenceLoadError

logger = logging.getLogger(__name__)


class BaseFileLoader(ABC):
    """Resolve an identifier (usually a path) to raw bytes."""

    @abstractmethod
    def load(self, identifier: str) -> bytes | None:
        """Return the bytes behind *identifier*, or None if unavailable."""
        ...


class FileSystemLoader(BaseFileLoader):
    """Read files from disk, relative to *base_dir* when given."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else None

    def load(self, identifier: str) -> bytes | None:
        path = Path(identifier)
        if self._base_dir is not None and not path.is_absolute():
            path = self._base_dir / path
        try:
            return path.read_bytes()
        except OSError as e:
            logger.error("Could not load file %s: %s", path, e)
            return None


def decode_image(raw: bytes) -> np.ndarray:
    """Decode PNG/JPEG bytes, keeping channel depth and alpha.

    Raises:
        ReferenceLoadError: If the bytes are not a decodable image.
    """
    if not raw:
        msg = "Empty image data"
        raise ReferenceLoadError(msg)
    arr = np.frombuffer(raw, dtype=np.uint8)
    try:
        img = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED)
    except cv2.error as e:
        msg = f"Failed to decode image bytes: {e}"
        raise ReferenceLoadError(msg) from e
    if img is None:
        msg = "Failed to decode image bytes"
        raise ReferenceLoadError(msg)
    return img


def load_image(loader: BaseFileLoader, identifier: str) -> np.ndarray:
    """Load and decode *identifier* through *loader*.

    Raises:
        ReferenceLoadError: If the file is missing or undecodable.
    """
    raw = loader.load(identifier)
    if raw is None:
        msg = f"Failed to load image {identifier}"
        raise ReferenceLoadError(msg)
    try:
        return decode_image(raw)
    except ReferenceLoadError as e:
        msg = f"Failed to decode image {identifier}"
        raise ReferenceLoadError(msg) from e
