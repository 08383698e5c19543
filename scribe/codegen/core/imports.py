"""
Import resolution.

The collect pass walks a declaration tree with a CodeWriter that has no
imports. Every class it had to write fully qualified is an import
candidate; the first class to claim a simple name wins it, and candidates
whose simple name is used by a same-package type are dropped. The result
is frozen into an ImportPlan that the render pass consumes.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Set, Tuple

from ...logging_config import get_logger
from .code_writer import CodeWriter
from .types import ClassName

logger = get_logger(__name__)

JAVA_LANG = "java.lang"


@dataclass(frozen=True)
class ImportPlan:
    """The frozen outcome of import resolution for one file."""

    package_name: str
    imported_types: Mapping[str, ClassName] = field(default_factory=lambda: MappingProxyType({}))
    static_imports: Tuple[str, ...] = ()
    skip_java_lang_imports: bool = True
    always_qualify: frozenset = frozenset()

    @property
    def imports(self) -> List[ClassName]:
        """Classes that need an import line, sorted by canonical name."""
        names = []
        for class_name in self.imported_types.values():
            if self.skip_java_lang_imports and class_name.package_name == JAVA_LANG:
                continue
            names.append(class_name)
        return sorted(names, key=lambda c: c.canonical())

    def import_lines(self) -> List[str]:
        return [class_name.canonical() for class_name in self.imports]

    def static_import_lines(self) -> List[str]:
        return sorted(self.static_imports)

    def __len__(self) -> int:
        return len(self.imports) + len(self.static_imports)


def nested_type_names(type_spec) -> Set[str]:
    """Collect the simple names of every type nested anywhere below type_spec."""
    names: Set[str] = set()
    for nested in getattr(type_spec, "type_specs", ()):
        names.add(nested.name)
        names |= nested_type_names(nested)
    return names


class ImportResolver:
    """Runs the collect pass and turns its findings into an ImportPlan."""

    def __init__(self, config=None):
        self.config = config

    def resolve(
        self,
        root,
        package_name: str,
        static_imports: Iterable[str] = (),
        skip_java_lang_imports: Optional[bool] = None,
    ) -> ImportPlan:
        """
        Compute the import plan for a root declaration in a package.

        Args:
            root: A TypeSpec or anything else with an `emit(writer)` method
            package_name: Package the file belongs to; "" for the default package
            static_imports: Static member imports, as `pkg.Type.member` or `pkg.Type.*`
            skip_java_lang_imports: Override the configured java.lang handling

        Returns:
            ImportPlan for the render pass
        """
        always_qualify = set(nested_type_names(root))
        indent = "  "
        if self.config is not None:
            always_qualify |= set(self.config.always_qualify)
            indent = self.config.indent
            if skip_java_lang_imports is None:
                skip_java_lang_imports = self.config.skip_java_lang_imports
        if skip_java_lang_imports is None:
            skip_java_lang_imports = True

        static_imports = tuple(sorted(set(static_imports)))
        collector = CodeWriter(
            indent=indent,
            static_imports=static_imports,
            always_qualify=always_qualify,
        )
        collector.push_package(package_name)
        root.emit(collector)
        collector.pop_package()

        suggested = collector.suggested_imports()
        logger.debug(
            "Collect pass for %s found %d import candidates (%d same-package names)",
            package_name or "<default>",
            len(suggested),
            len(collector.referenced_names),
        )
        return ImportPlan(
            package_name=package_name,
            imported_types=MappingProxyType(dict(suggested)),
            static_imports=static_imports,
            skip_java_lang_imports=skip_java_lang_imports,
            always_qualify=frozenset(always_qualify),
        )
