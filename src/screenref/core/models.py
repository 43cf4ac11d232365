"""screenref data models — Pydantic v2.

This module is a leaf: no internal project imports.
All Enum and Model definitions live here.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================
# Enums
# ============================================================


class ReferenceKind(StrEnum):
    """Reference spec tag."""

    COLOR = "color"
    OCR = "ocr"
    IMAGE = "image"
    MONOCHROME_IMAGE = "imageM"


class SampleKind(StrEnum):
    """What a source samples from the screen."""

    POINT = "point"
    REGION = "region"


class OcrMode(StrEnum):
    """OCR post-processing mode."""

    NONE = "none"
    ALPHABETIC = "alphabetic"
    NUMERIC = "numeric"


# ============================================================
# Settings
# ============================================================


class MatcherSettings(BaseSettings):
    """Runtime settings. Merged from YAML + env var + overrides."""

    model_config = SettingsConfigDict(
        env_prefix="SCREENREF_",
        env_nested_delimiter="__",
    )

    strict_geometry: bool = Field(
        default=True,
        description="Reject sources with 2/4-int violations at document load",
    )
    base_dir: str = Field(default="", description="Root for relative file identifiers")
    ocr_languages: list[str] = Field(default=["eng"])
    tesseract_config: str = Field(default="", description="Extra tesseract CLI flags")
    tesseract_cmd: str = Field(default="", description="Path to tesseract binary")
    marker_color: tuple[int, int, int] = Field(default=(255, 0, 0), description="RGB")
    dash_step: int = Field(default=5, ge=1, le=100)

    @field_validator("marker_color")
    @classmethod
    def channels_in_range(cls, v: tuple[int, int, int]) -> tuple[int, int, int]:
        if any(c < 0 or c > 255 for c in v):
            msg = f"marker_color channels must be 0-255, got {v}"
            raise ValueError(msg)
        return v


# ============================================================
# Document Models
# ============================================================


class Point(BaseModel):
    """Single pixel coordinate."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int


class Rect(BaseModel):
    """Rectangle anchored at its top-left corner."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int
    height: int


class Source(BaseModel):
    """Named screen-sampling descriptor.

    ``geometry`` is given as 2 ints (point) or 4 ints (rectangle). Other
    cardinalities are rejected unless the validation context carries
    ``strict_geometry=False``, in which case geometry is left as None and the
    source fails at match time instead.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(validation_alias=AliasChoices("name", "Name"))
    geometry: Point | Rect | None = Field(
        default=None,
        validate_default=True,
        validation_alias=AliasChoices("geometry", "Src", "src"),
    )
    refs: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("refs", "Refs"),
    )

    @field_validator("geometry", mode="before")
    @classmethod
    def decode_geometry(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, Point | Rect):
            return v
        if isinstance(v, dict):
            return Rect(**v) if "width" in v or "height" in v else Point(**v)
        if isinstance(v, list | tuple):
            if len(v) == 2:
                return Point(x=v[0], y=v[1])
            if len(v) == 4:
                return Rect(x=v[0], y=v[1], width=v[2], height=v[3])

        strict = True
        if isinstance(info.context, dict):
            strict = info.context.get("strict_geometry", True)
        if strict:
            msg = f"geometry must be 2 ints (point) or 4 ints (rectangle), got {v!r}"
            raise ValueError(msg)
        return None

    @property
    def sample_kind(self) -> SampleKind | None:
        if isinstance(self.geometry, Point):
            return SampleKind.POINT
        if isinstance(self.geometry, Rect):
            return SampleKind.REGION
        return None


class Reference(BaseModel):
    """Named expected value. ``spec`` is the raw ``<tag>:<value>`` string."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(validation_alias=AliasChoices("name", "Name"))
    spec: str = Field(validation_alias=AliasChoices("spec", "Ref", "ref"))


class MatchDocument(BaseModel):
    """Declarative sources + references document."""

    model_config = ConfigDict(frozen=True)

    sources: tuple[Source, ...] = Field(
        default=(),
        validation_alias=AliasChoices("sources", "Sources", "Srcs"),
    )
    references: tuple[Reference, ...] = Field(
        default=(),
        validation_alias=AliasChoices("references", "References", "Refs"),
    )


# ============================================================
# Reference Specs (tagged union)
# ============================================================


class ColorSpec(BaseModel):
    """``color:#RRGGBB`` — exact 8-bit color. Hex is decoded at compare time."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ReferenceKind.COLOR] = ReferenceKind.COLOR
    value: str


class OcrSpec(BaseModel):
    """``ocr:<width>,<mode>`` — text extraction rule."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ReferenceKind.OCR] = ReferenceKind.OCR
    args: str = ""


class ImageSpec(BaseModel):
    """``image:<path>`` — exact pixel comparison."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ReferenceKind.IMAGE] = ReferenceKind.IMAGE
    path: str


class MonochromeImageSpec(BaseModel):
    """``imageM:<path>`` — white / non-white pixel comparison."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ReferenceKind.MONOCHROME_IMAGE] = ReferenceKind.MONOCHROME_IMAGE
    path: str


ReferenceSpec = ColorSpec | OcrSpec | ImageSpec | MonochromeImageSpec


# ============================================================
# Result Models
# ============================================================


class OcrOptions(BaseModel):
    """Parsed OCR argument string."""

    model_config = ConfigDict(frozen=True)

    width: int | None = Field(default=None, description="Resize target width")
    mode: OcrMode = Field(default=OcrMode.NONE)


class OcrReading(BaseModel):
    """OCR result. ``error`` is set when the OCR engine itself failed."""

    raw_text: str = ""
    text: str = ""
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class MatchOutcome(BaseModel):
    """Result of evaluating one source against its references."""

    source: str
    matched: str = Field(default="", description="Empty string means no match")
    reference: str | None = Field(default=None, description="Reference that matched")
    kind: ReferenceKind | None = Field(default=None)
    error: str | None = Field(default=None, description="Abort reason, if any")

    @property
    def found(self) -> bool:
        return bool(self.matched)
