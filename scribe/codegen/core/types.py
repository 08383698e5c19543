"""
Java type references for code generation.

A type reference is the only thing the import resolver looks at: every
`$T` argument is normalized to one of the immutable classes defined here.
"""

import enum
import inspect
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .errors import InvalidNameError
from .naming import is_identifier


class TypeName:
    """
    Base class for every type reference.

    Subclasses are immutable; two type names are equal when their fully
    qualified text is equal.
    """

    def emit(self, writer):
        """Write this type to a CodeWriter, asking it for the short form."""
        raise NotImplementedError

    def canonical(self) -> str:
        """Return the fully qualified text of this type."""
        raise NotImplementedError

    def is_primitive(self) -> bool:
        return False

    def referenced_class_names(self) -> List["ClassName"]:
        """Return every ClassName that import resolution must consider."""
        return []

    def __str__(self) -> str:
        return self.canonical()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.canonical()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeName):
            return NotImplemented
        return type(self) is type(other) and self.canonical() == other.canonical()

    def __hash__(self) -> int:
        return hash(self.canonical())

    @staticmethod
    def get(value: Any) -> "TypeName":
        """
        Convert a Python value into a type reference.

        Accepts TypeName instances, primitive keywords and dotted names as
        strings, and Python classes (see ClassName.from_class).

        Raises:
            InvalidNameError: If the value cannot name a type
        """
        if isinstance(value, TypeName):
            return value
        if isinstance(value, str):
            if value.endswith("[]"):
                return ArrayTypeName(TypeName.get(value[:-2]))
            if value in PRIMITIVES:
                return PRIMITIVES[value]
            return ClassName.best_guess(value)
        if inspect.isclass(value):
            if value in _BUILTIN_TYPES:
                return _BUILTIN_TYPES[value]
            return ClassName.from_class(value)
        raise InvalidNameError(value)


class PrimitiveTypeName(TypeName):
    """A primitive keyword type such as `int` or `void`; never imported."""

    def __init__(self, keyword: str):
        self.keyword = keyword

    def emit(self, writer):
        return writer.emit_and_indent(self.keyword)

    def canonical(self) -> str:
        return self.keyword

    def is_primitive(self) -> bool:
        return self.keyword != "void"


VOID = PrimitiveTypeName("void")
BOOLEAN = PrimitiveTypeName("boolean")
BYTE = PrimitiveTypeName("byte")
SHORT = PrimitiveTypeName("short")
INT = PrimitiveTypeName("int")
LONG = PrimitiveTypeName("long")
CHAR = PrimitiveTypeName("char")
FLOAT = PrimitiveTypeName("float")
DOUBLE = PrimitiveTypeName("double")

PRIMITIVES = {
    t.keyword: t for t in (VOID, BOOLEAN, BYTE, SHORT, INT, LONG, CHAR, FLOAT, DOUBLE)
}


@dataclass(frozen=True, eq=False)
class ClassName(TypeName):
    """
    A fully qualified class, interface, enum or annotation type.

    `simple_names` holds the enclosing chain, outermost first, so
    `java.util.Map.Entry` is ClassName("java.util", ("Map", "Entry")).
    """

    package_name: str
    simple_names: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.simple_names:
            raise InvalidNameError(self.package_name)
        for name in self.simple_names:
            if not is_identifier(name):
                raise InvalidNameError(name)

    @classmethod
    def get(cls, package_name: str, simple_name: str, *simple_names: str) -> "ClassName":
        """Create a class name from a package and one or more simple names."""
        return cls(package_name, (simple_name,) + tuple(simple_names))

    @classmethod
    def best_guess(cls, class_name_string: str) -> "ClassName":
        """
        Guess a class name from a dotted string.

        Segments before the first capitalized segment form the package;
        the capitalized segment and everything after it are simple names.

        Raises:
            InvalidNameError: If no segment is capitalized
        """
        parts = class_name_string.split(".")
        for index, part in enumerate(parts):
            if part and part[0].isupper():
                return cls(".".join(parts[:index]), tuple(parts[index:]))
        raise InvalidNameError(class_name_string)

    @classmethod
    def from_class(cls, python_class: type) -> "ClassName":
        """
        Derive a class name from a Python class.

        A class may pin its Java name with a `__java_name__` attribute;
        otherwise the module is the package and the qualified name gives
        the enclosing chain.
        """
        java_name = getattr(python_class, "__java_name__", None)
        if java_name:
            return cls.best_guess(java_name)
        qualname = python_class.__qualname__.split("<locals>.")[-1]
        return cls(python_class.__module__, tuple(qualname.split(".")))

    @property
    def simple_name(self) -> str:
        return self.simple_names[-1]

    def enclosing_class_name(self) -> Optional["ClassName"]:
        """Return the directly enclosing class, or None for a top-level class."""
        if len(self.simple_names) == 1:
            return None
        return ClassName(self.package_name, self.simple_names[:-1])

    def top_level_class_name(self) -> "ClassName":
        return ClassName(self.package_name, self.simple_names[:1])

    def nested_class(self, name: str) -> "ClassName":
        return ClassName(self.package_name, self.simple_names + (name,))

    def peer_class(self, name: str) -> "ClassName":
        return ClassName(self.package_name, self.simple_names[:-1] + (name,))

    def reflection_name(self) -> str:
        """Return the binary name, with `$` between nested classes."""
        nested = "$".join(self.simple_names)
        return f"{self.package_name}.{nested}" if self.package_name else nested

    def canonical(self) -> str:
        nested = ".".join(self.simple_names)
        return f"{self.package_name}.{nested}" if self.package_name else nested

    @property
    def canonical_name(self) -> str:
        return self.canonical()

    def emit(self, writer):
        return writer.emit_and_indent(writer.lookup_name(self))

    def referenced_class_names(self) -> List["ClassName"]:
        return [self]

    def __lt__(self, other: "ClassName") -> bool:
        return self.canonical() < other.canonical()

    __hash__ = TypeName.__hash__


class ArrayTypeName(TypeName):
    """An array of some component type."""

    def __init__(self, component_type: Any):
        self.component_type = TypeName.get(component_type)

    def emit(self, writer):
        self.component_type.emit(writer)
        return writer.emit_and_indent("[]")

    def canonical(self) -> str:
        return f"{self.component_type.canonical()}[]"

    def referenced_class_names(self) -> List[ClassName]:
        return self.component_type.referenced_class_names()


class ParameterizedTypeName(TypeName):
    """A generic class applied to type arguments, e.g. `List<String>`."""

    def __init__(self, raw_type: Any, *type_arguments: Any):
        self.raw_type = TypeName.get(raw_type)
        if not isinstance(self.raw_type, ClassName):
            raise InvalidNameError(raw_type)
        if not type_arguments:
            raise InvalidNameError(f"{self.raw_type} has no type arguments")
        self.type_arguments = tuple(TypeName.get(arg) for arg in type_arguments)
        for argument in self.type_arguments:
            if argument.is_primitive() or argument == VOID:
                raise InvalidNameError(f"invalid type argument: {argument}")

    def emit(self, writer):
        self.raw_type.emit(writer)
        writer.emit_and_indent("<")
        for index, argument in enumerate(self.type_arguments):
            if index:
                writer.emit_and_indent(", ")
            argument.emit(writer)
        return writer.emit_and_indent(">")

    def canonical(self) -> str:
        arguments = ", ".join(arg.canonical() for arg in self.type_arguments)
        return f"{self.raw_type.canonical()}<{arguments}>"

    def referenced_class_names(self) -> List[ClassName]:
        names = list(self.raw_type.referenced_class_names())
        for argument in self.type_arguments:
            names.extend(argument.referenced_class_names())
        return names


class WildcardTypeName(TypeName):
    """A wildcard type argument: `?`, `? extends T` or `? super T`."""

    def __init__(self, upper_bound: Optional[Any] = None, lower_bound: Optional[Any] = None):
        self.upper_bound = TypeName.get(upper_bound) if upper_bound is not None else None
        self.lower_bound = TypeName.get(lower_bound) if lower_bound is not None else None

    @classmethod
    def subtype_of(cls, upper_bound: Any) -> "WildcardTypeName":
        return cls(upper_bound=upper_bound)

    @classmethod
    def supertype_of(cls, lower_bound: Any) -> "WildcardTypeName":
        return cls(lower_bound=lower_bound)

    def emit(self, writer):
        if self.lower_bound is not None:
            writer.emit_and_indent("? super ")
            return self.lower_bound.emit(writer)
        if self.upper_bound is not None and self.upper_bound != OBJECT:
            writer.emit_and_indent("? extends ")
            return self.upper_bound.emit(writer)
        return writer.emit_and_indent("?")

    def canonical(self) -> str:
        if self.lower_bound is not None:
            return f"? super {self.lower_bound.canonical()}"
        if self.upper_bound is not None and self.upper_bound != OBJECT:
            return f"? extends {self.upper_bound.canonical()}"
        return "?"

    def referenced_class_names(self) -> List[ClassName]:
        bound = self.lower_bound or self.upper_bound
        return bound.referenced_class_names() if bound is not None else []


OBJECT = ClassName.get("java.lang", "Object")
STRING = ClassName.get("java.lang", "String")

_BUILTIN_TYPES = {
    str: STRING,
    bool: BOOLEAN,
    int: INT,
    float: DOUBLE,
    object: OBJECT,
    type(None): VOID,
    enum.Enum: ClassName.get("java.lang", "Enum"),
}
