"""BaseComparator ABC — reference comparison interface.

ColorComparator, ImageComparator, MonochromeImageComparator and
OCRComparator implement this. The Matcher keys them by reference kind and
checks ``sample_kind`` before dispatching.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from screenref.core.models import Reference, ReferenceKind, ReferenceSpec, SampleKind


class BaseComparator(ABC):
    """Reference comparison abstract interface."""

    @property
    @abstractmethod
    def kind(self) -> ReferenceKind:
        """Reference kind this comparator handles."""
        ...

    @property
    @abstractmethod
    def sample_kind(self) -> SampleKind:
        """Source sample kind this comparator accepts: point or region."""
        ...

    @abstractmethod
    def compare(
        self,
        reference: Reference,
        spec: ReferenceSpec,
        sample: Any,
    ) -> str:
        """Compare *sample* against one reference.

        Args:
            reference: The reference being evaluated.
            spec: Its parsed spec (matches ``self.kind``).
            sample: ``(r, g, b)`` for point samples, an image array for regions.

        Returns:
            The match value (normally ``reference.name``), or ``""``.

        Raises:
            ReferenceEvaluationError: If this reference cannot be evaluated.
        """
        ...
