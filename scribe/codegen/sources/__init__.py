"""
Annotation source adapters.

An adapter turns some existing representation of an annotation (a Python
declaration, a JSON mapping) into an AnnotationSpec. Adapters are looked
up through the registry by `AnnotationSpec.get`.
"""

from abc import ABC, abstractmethod
from typing import Any


class AnnotationSource(ABC):
    """Base class for annotation source adapters."""

    kind: str = ""
    description: str = ""

    @classmethod
    @abstractmethod
    def accepts(cls, value: Any) -> bool:
        """Return True when this adapter can convert value."""
        pass

    @abstractmethod
    def to_annotation_spec(self, value: Any, include_defaults: bool = False):
        """
        Convert value into an AnnotationSpec.

        Args:
            value: An object accepted by this adapter
            include_defaults: Also emit members left at their default value

        Returns:
            AnnotationSpec
        """
        pass


__all__ = ["AnnotationSource"]
