"""screenref custom exception hierarchy.

All exceptions inherit from ScreenRefError.

Construction-time document errors (ConfigError) are raised to the caller.
Evaluation errors never leave Matcher.match: MatchAbortError subclasses end
the whole call with an empty result, ReferenceEvaluationError subclasses only
disqualify the reference being compared.
"""


class ScreenRefError(Exception):
    """Base exception for all screenref errors."""


class ConfigError(ScreenRefError):
    """Match document or settings load/validation error."""


class ConfigLoadError(ConfigError):
    """Document bytes could not be retrieved."""


class ConfigParseError(ConfigError):
    """Document could not be decoded into sources and references."""


# -- whole-call aborts ---------------------------------------------------------


class MatchAbortError(ScreenRefError):
    """Evaluation error that ends the whole match call with no match."""


class UnknownSourceError(MatchAbortError):
    """No source with the requested name."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Source does not exist: {source}")


class InvalidSourceGeometryError(MatchAbortError):
    """Source geometry is neither a point nor a rectangle."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Illegal source geometry, expected 2 or 4 ints: {source}")


class KindMismatchError(MatchAbortError):
    """Reference kind cannot be compared against the sampled source kind."""

    def __init__(self, source: str, reference: str, detail: str) -> None:
        self.source = source
        self.reference = reference
        super().__init__(f"{detail} (source={source}, reference={reference})")


class InvalidReferenceSpecError(MatchAbortError):
    """Reference spec carries an unrecognized kind tag."""

    def __init__(self, reference: str, spec: str) -> None:
        self.reference = reference
        self.spec = spec
        super().__init__(f"Invalid reference type: {reference}={spec!r}")


# -- per-reference failures ----------------------------------------------------


class ReferenceEvaluationError(ScreenRefError):
    """Comparison against one reference failed; other references still apply."""


class ReferenceLoadError(ReferenceEvaluationError):
    """Reference bitmap could not be loaded or decoded."""


class OcrArgumentError(ReferenceEvaluationError):
    """OCR argument string is malformed."""


class ColorFormatError(ReferenceEvaluationError):
    """Color reference is not an HTML #RRGGBB color."""
