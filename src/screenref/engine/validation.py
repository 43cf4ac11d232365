"""Static checks over a match document.

The Matcher never rejects these problems up front; they only show up as
empty results at match time. ``check_document`` reports them ahead of time.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from screenref.core.exceptions import InvalidReferenceSpecError, ReferenceEvaluationError
from screenref.core.models import ColorSpec, OcrSpec, Point, Rect
from screenref.core.references import parse_reference_spec
from screenref.matchers.color import decode_hex_color
from screenref.matchers.ocr import parse_ocr_args

if TYPE_CHECKING:
    from screenref.core.models import MatchDocument


def check_document(document: MatchDocument) -> list[str]:
    """Return human-readable problems found in *document* (empty if none)."""
    problems: list[str] = []

    for name, count in Counter(s.name for s in document.sources).items():
        if count > 1:
            problems.append(f"Duplicate source name: {name} ({count}x)")
    for name, count in Counter(r.name for r in document.references).items():
        if count > 1:
            problems.append(f"Duplicate reference name: {name} ({count}x)")

    ref_names = {r.name for r in document.references}
    for source in document.sources:
        if not isinstance(source.geometry, Point | Rect):
            problems.append(f"Source {source.name}: geometry must be 2 or 4 ints")
        for ref in source.refs:
            if ref not in ref_names:
                problems.append(f"Source {source.name}: unknown reference {ref}")

    for reference in document.references:
        try:
            spec = parse_reference_spec(reference)
            if isinstance(spec, ColorSpec):
                decode_hex_color(spec.value)
            elif isinstance(spec, OcrSpec):
                parse_ocr_args(spec.args)
        except (InvalidReferenceSpecError, ReferenceEvaluationError) as e:
            problems.append(f"Reference {reference.name}: {e}")

    return problems
