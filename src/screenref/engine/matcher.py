"""Matcher — evaluates named sources against their references.

Matching strategy for one source:

1. **Resolve** -- Look the source up by name (first match wins) and sample
   a pixel (point geometry) or a sub-image (rectangle geometry).
2. **Filter** -- Walk references in document order, skipping those the
   source does not list.
3. **Dispatch** -- Hand each remaining reference to the comparator for its
   kind. The first non-empty result is returned.
4. **Give up** -- Return ``""``.

A reference whose kind cannot apply to the sampled source, or whose tag is
unknown, ends the whole call with no match. Per-reference failures (missing
bitmap, bad OCR arguments, malformed color) only skip that reference.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Any

from screenref.core.config import load_document
from screenref.core.exceptions import (
    ConfigLoadError,
    InvalidReferenceSpecError,
    InvalidSourceGeometryError,
    KindMismatchError,
    MatchAbortError,
    ReferenceEvaluationError,
    UnknownSourceError,
)
from screenref.core.loader import FileSystemLoader
from screenref.core.models import (
    MatcherSettings,
    MatchOutcome,
    Point,
    Rect,
    SampleKind,
)
from screenref.core.references import parse_reference_spec
from screenref.engine.sampling import sample_pixel, sample_region
from screenref.engine.visualizer import draw_sources
from screenref.matchers.color import ColorComparator
from screenref.matchers.image import ImageComparator, MonochromeImageComparator
from screenref.matchers.ocr import OCRComparator, TesseractOcrEngine

if TYPE_CHECKING:
    from collections.abc import Iterable

    import numpy as np

    from screenref.core.loader import BaseFileLoader
    from screenref.core.models import MatchDocument, Reference, ReferenceSpec, Source
    from screenref.matchers.base import BaseComparator
    from screenref.matchers.ocr import OcrEngineFactory

logger = logging.getLogger(__name__)


class Matcher:
    """Match sources of one document against its references.

    Immutable after construction. The loader and OCR engine factory are
    injected; defaults read from disk and run Tesseract.
    """

    def __init__(
        self,
        document: MatchDocument,
        loader: BaseFileLoader | None = None,
        ocr_factory: OcrEngineFactory | None = None,
        settings: MatcherSettings | None = None,
        comparators: list[BaseComparator] | None = None,
    ) -> None:
        self._document = document
        self._settings = settings or MatcherSettings()
        self._loader = loader or FileSystemLoader(self._settings.base_dir or None)

        if comparators is None:
            factory = ocr_factory or partial(TesseractOcrEngine.from_settings, self._settings)
            comparators = [
                ColorComparator(),
                ImageComparator(self._loader),
                MonochromeImageComparator(self._loader),
                OCRComparator(factory),
            ]
        self._comparators = {c.kind: c for c in comparators}

        # Tags are parsed once; unknown tags surface when a match reaches them.
        self._references: list[tuple[Reference, ReferenceSpec | None]] = [
            (ref, self._parse(ref)) for ref in document.references
        ]

    @classmethod
    def from_file(
        cls,
        identifier: str,
        loader: BaseFileLoader | None = None,
        ocr_factory: OcrEngineFactory | None = None,
        settings: MatcherSettings | None = None,
    ) -> Matcher:
        """Build a Matcher from a JSON/YAML document fetched through *loader*.

        Raises:
            ConfigLoadError: If the loader cannot provide the document.
            ConfigParseError: If the document is malformed.
        """
        settings = settings or MatcherSettings()
        loader = loader or FileSystemLoader(settings.base_dir or None)

        raw = loader.load(identifier)
        if raw is None:
            msg = f"Failed to load match document: {identifier}"
            raise ConfigLoadError(msg)

        document = load_document(raw, strict_geometry=settings.strict_geometry)
        logger.debug(
            "Loaded %s: %d sources, %d references",
            identifier,
            len(document.sources),
            len(document.references),
        )
        return cls(document, loader=loader, ocr_factory=ocr_factory, settings=settings)

    # -- public API -----------------------------------------------------------

    @property
    def document(self) -> MatchDocument:
        return self._document

    @property
    def settings(self) -> MatcherSettings:
        return self._settings

    def find_source(self, name: str) -> Source | None:
        """Return the first source called *name*, or None."""
        for source in self._document.sources:
            if source.name == name:
                return source
        return None

    def match(self, source_name: str, screen: np.ndarray) -> str:
        """Return the matched reference name (or OCR text), ``""`` if none."""
        return self.evaluate(source_name, screen).matched

    def evaluate(self, source_name: str, screen: np.ndarray) -> MatchOutcome:
        """Like :meth:`match`, with the matching reference and abort reason."""
        try:
            return self._evaluate(source_name, screen)
        except UnknownSourceError as e:
            logger.warning("%s", e)
            return MatchOutcome(source=source_name, error=str(e))
        except MatchAbortError as e:
            logger.error("%s", e)
            return MatchOutcome(source=source_name, error=str(e))

    def visualize(self, screen: np.ndarray, source_names: Iterable[str]) -> np.ndarray:
        """Return a copy of *screen* with the named sources outlined."""
        sources: list[Source] = []
        for name in source_names:
            source = self.find_source(name)
            if source is None:
                logger.warning("Cannot visualize unknown source: %s", name)
                continue
            sources.append(source)
        return draw_sources(
            screen,
            sources,
            color=self._settings.marker_color,
            step=self._settings.dash_step,
        )

    # -- internal helpers -----------------------------------------------------

    @staticmethod
    def _parse(reference: Reference) -> ReferenceSpec | None:
        try:
            return parse_reference_spec(reference)
        except InvalidReferenceSpecError as e:
            logger.debug("Deferred: %s", e)
            return None

    def _sample(self, source: Source, screen: np.ndarray) -> tuple[SampleKind, Any]:
        geom = source.geometry
        if isinstance(geom, Point):
            return SampleKind.POINT, sample_pixel(screen, geom)
        if isinstance(geom, Rect):
            return SampleKind.REGION, sample_region(screen, geom)
        raise InvalidSourceGeometryError(source.name)

    def _evaluate(self, source_name: str, screen: np.ndarray) -> MatchOutcome:
        source = self.find_source(source_name)
        if source is None:
            raise UnknownSourceError(source_name)

        sample_kind, sample = self._sample(source, screen)
        applicable = set(source.refs)

        for reference, spec in self._references:
            if reference.name not in applicable:
                continue
            if spec is None:
                raise InvalidReferenceSpecError(reference.name, reference.spec)

            comparator = self._comparators.get(spec.kind)
            if comparator is None:
                raise InvalidReferenceSpecError(reference.name, reference.spec)
            if comparator.sample_kind != sample_kind:
                detail = f"Cannot compare {sample_kind} source against {spec.kind} reference"
                raise KindMismatchError(source.name, reference.name, detail)

            try:
                matched = comparator.compare(reference, spec, sample)
            except ReferenceEvaluationError as e:
                logger.error("%s (source=%s, reference=%s)", e, source.name, reference.name)
                continue

            if matched:
                logger.debug("Match %s -> %s via %s", source.name, matched, reference.name)
                return MatchOutcome(
                    source=source.name,
                    matched=matched,
                    reference=reference.name,
                    kind=spec.kind,
                )

        return MatchOutcome(source=source.name)
