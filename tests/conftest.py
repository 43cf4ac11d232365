"""Shared fixtures: synthetic screen, in-memory loader, stub OCR engine."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest
from helpers import DictLoader, StubOcrEngine, encode_png, make_patch, make_screen

# ── fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture()
def screen() -> np.ndarray:
    return make_screen()


@pytest.fixture()
def patch_img() -> np.ndarray:
    return make_patch()


@pytest.fixture()
def loader() -> DictLoader:
    patch = make_patch()

    other = patch.copy()
    other[0, 3] = (0, 201, 0)

    # Same white/non-white layout, different non-white colors
    recolored = patch.copy()
    recolored[:, 2:] = (10, 20, 30)

    inverted = patch.copy()
    inverted[:, :2] = (1, 1, 1)

    return DictLoader(
        {
            "img/patch.png": encode_png(patch),
            "img/other.png": encode_png(other),
            "img/recolored.png": encode_png(recolored),
            "img/inverted.png": encode_png(inverted),
            "img/small.png": encode_png(patch[:2, :2]),
            "img/corrupt.png": b"not-a-png",
        }
    )


@pytest.fixture()
def ocr_engine() -> StubOcrEngine:
    return StubOcrEngine(text="RUNN1NGS\n")


@pytest.fixture()
def document_data() -> dict[str, Any]:
    return {
        "sources": [
            {"name": "srcColor1", "geometry": [2, 2], "refs": ["refColor1", "refColor2"]},
            {"name": "srcColor2", "geometry": [2, 2], "refs": ["refColor1"]},
            {"name": "srcColor3", "geometry": [5, 5], "refs": ["refColorBad", "refColor3"]},
            {"name": "srcImg1", "geometry": [10, 10, 4, 4], "refs": ["refImg1", "refImg2"]},
            {"name": "srcImg2", "geometry": [10, 10, 4, 4], "refs": ["refImg1"]},
            {"name": "srcMImg1", "geometry": [10, 10, 4, 4], "refs": ["refMImg1"]},
            {"name": "srcMImg2", "geometry": [10, 10, 4, 4], "refs": ["refMImg2"]},
            {"name": "srcSmall", "geometry": [10, 10, 4, 4], "refs": ["refSmall", "refImg2"]},
            {"name": "srcOCR", "geometry": [10, 10, 4, 4], "refs": ["refOCR"]},
            {"name": "srcMissing", "geometry": [10, 10, 4, 4], "refs": ["refMissing", "refImg2"]},
            {"name": "srcBadRef", "geometry": [10, 10, 4, 4], "refs": ["refBad", "refImg2"]},
            {"name": "srcMixed", "geometry": [10, 10, 4, 4], "refs": ["refColor2", "refImg2"]},
            {"name": "invalidImageSrc", "geometry": [2, 2], "refs": ["refImg2"]},
            {"name": "invalidOcrSrc", "geometry": [2, 2], "refs": ["refOCR"]},
        ],
        "references": [
            {"name": "refColor1", "spec": "color:#FF0000"},
            {"name": "refColor2", "spec": "color:#FFFFFF"},
            {"name": "refColorBad", "spec": "color:#42f4zz"},
            {"name": "refColor3", "spec": "color:#42f44e"},
            {"name": "refBad", "spec": "bogus:whatever"},
            {"name": "refMissing", "spec": "image:img/missing.png"},
            {"name": "refSmall", "spec": "image:img/small.png"},
            {"name": "refImg1", "spec": "image:img/other.png"},
            {"name": "refImg2", "spec": "image:img/patch.png"},
            {"name": "refMImg1", "spec": "imageM:img/recolored.png"},
            {"name": "refMImg2", "spec": "imageM:img/inverted.png"},
            {"name": "refOCR", "spec": "ocr:200,y"},
        ],
    }
