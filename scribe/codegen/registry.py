"""
Annotation source registry.

Maps adapter kinds to AnnotationSource classes and finds the adapter that
accepts a given value, so `AnnotationSpec.get` works for any registered
representation.
"""

from typing import Any, Dict, List, Optional, Type

from .core.errors import ScribeError
from .sources import AnnotationSource


class RegistryError(ScribeError):
    """Exception raised for registry-related errors."""

    pass


class AnnotationSourceRegistry:
    """Registry for managing available annotation source adapters."""

    def __init__(self):
        """Initialize empty registry."""
        self._sources: Dict[str, Type[AnnotationSource]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        kind: str,
        source_class: Type[AnnotationSource],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register an adapter for a kind of annotation source.

        Args:
            kind: Primary kind name (e.g., 'declared', 'mapping')
            source_class: Adapter class implementing AnnotationSource
            aliases: Alternative names for this kind
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If adapter class is invalid or conflicts exist
        """
        if not isinstance(source_class, type) or not issubclass(source_class, AnnotationSource):
            raise RegistryError("Adapter class must inherit from AnnotationSource")

        kind_key = kind.lower()
        if kind_key in self._sources and not replace:
            return

        self._sources[kind_key] = source_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == kind_key:
                continue
            if not replace:
                if alias_key in self._sources:
                    raise RegistryError(f"Alias '{alias}' conflicts with existing primary kind")
                if alias_key in self._aliases and self._aliases[alias_key] != kind_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )
            self._aliases[alias_key] = kind_key

    def unregister(self, kind: str):
        """Unregister an adapter and its aliases."""
        kind_key = kind.lower()
        self._sources.pop(kind_key, None)
        for alias in [a for a, target in self._aliases.items() if target == kind_key]:
            del self._aliases[alias]

    def get_source_class(self, kind: str) -> Type[AnnotationSource]:
        """
        Get adapter class by kind name or alias.

        Raises:
            RegistryError: If kind not found
        """
        kind_key = kind.lower()
        if kind_key in self._sources:
            return self._sources[kind_key]
        if kind_key in self._aliases:
            return self._sources[self._aliases[kind_key]]

        raise RegistryError(
            f"No annotation source registered for kind: {kind}. "
            f"Available: {', '.join(self.list_kinds())}"
        )

    def get_adapter(self, value: Any) -> AnnotationSource:
        """
        Find an adapter for value, trying adapters in registration order.

        Raises:
            RegistryError: If no registered adapter accepts value
        """
        for source_class in self._sources.values():
            if source_class.accepts(value):
                return source_class()
        raise RegistryError(
            f"No annotation source accepts {type(value).__name__} values",
            {"available": self.list_kinds()},
        )

    def list_kinds(self) -> List[str]:
        """Get list of registered primary kind names."""
        return sorted(self._sources)

    def get_aliases_for_kind(self, kind: str) -> List[str]:
        kind_key = kind.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == kind_key)

    def get_kind_info(self, kind: str) -> Dict[str, Any]:
        """
        Get information about a registered kind.

        Raises:
            RegistryError: If kind not found
        """
        source_class = self.get_source_class(kind)
        kind_key = self._aliases.get(kind.lower(), kind.lower())
        return {
            "name": kind_key,
            "class": source_class.__name__,
            "description": source_class.description,
            "aliases": self.get_aliases_for_kind(kind_key),
            "module": source_class.__module__,
        }


# Global registry instance - created once
_global_registry: Optional[AnnotationSourceRegistry] = None


def get_source_registry() -> AnnotationSourceRegistry:
    """Get the global annotation source registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = AnnotationSourceRegistry()
        _auto_register_sources(_global_registry)
    return _global_registry


def _auto_register_sources(registry: AnnotationSourceRegistry):
    """Register the built-in adapters."""
    from .sources.declared import DeclaredAnnotationSource
    from .sources.mapping import MappingAnnotationSource

    registry.register("declared", DeclaredAnnotationSource, aliases=["python"])
    registry.register("mapping", MappingAnnotationSource, aliases=["json", "dict"])


def register_source(kind: str, source_class: Type[AnnotationSource], aliases: Optional[List[str]] = None):
    """Register an adapter in the global registry."""
    get_source_registry().register(kind, source_class, aliases)


def list_source_kinds() -> List[str]:
    """List all adapter kinds from the global registry."""
    return get_source_registry().list_kinds()


def list_all_source_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all registered adapters."""
    registry = get_source_registry()
    return {kind: registry.get_kind_info(kind) for kind in registry.list_kinds()}
