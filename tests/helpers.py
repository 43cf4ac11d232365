"""Test helpers: synthetic images, in-memory loader, stub OCR engine."""

from __future__ import annotations

import cv2
import numpy as np

from screenref.core.loader import BaseFileLoader
from screenref.matchers.ocr import BaseOcrEngine

# ── helpers ──────────────────────────────────────────────────────────────────


def encode_png(img: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", img)
    assert ok  # noqa: S101
    return bytes(buf)


def make_screen() -> np.ndarray:
    """40x30 dark-gray BGR screen.

    - (2, 2) is white, (5, 5) is RGB (66, 244, 78)
    - a 4x4 multi-color patch sits at x=10..13, y=10..13
    """
    img = np.full((30, 40, 3), 40, dtype=np.uint8)
    img[2, 2] = (255, 255, 255)
    img[5, 5] = (78, 244, 66)
    img[10:14, 10:14] = make_patch()
    return img


def make_patch() -> np.ndarray:
    """4x4 BGR patch: white left half, colored right half."""
    patch = np.zeros((4, 4, 3), dtype=np.uint8)
    patch[:, :2] = (255, 255, 255)
    patch[:, 2] = (0, 0, 200)
    patch[:, 3] = (0, 200, 0)
    return patch


class DictLoader(BaseFileLoader):
    """In-memory loader keyed by identifier."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files = dict(files or {})
        self.requests: list[str] = []

    def load(self, identifier: str) -> bytes | None:
        self.requests.append(identifier)
        return self.files.get(identifier)


class StubOcrEngine(BaseOcrEngine):
    """Returns canned text, or raises *error* when set."""

    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.images: list[np.ndarray] = []
        self.closed = 0

    def close(self) -> None:
        self.closed += 1

    def recognize(self, image: np.ndarray) -> str:
        self.images.append(image)
        if self.error is not None:
            raise self.error
        return self.text
