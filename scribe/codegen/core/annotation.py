"""
Annotation usage specs.

An AnnotationSpec is one application of an annotation type together with
its member values. Each member maps to a list of code blocks, because
array-valued members accumulate one element per `add_member` call.
"""

import enum
import inspect
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ...logging_config import get_logger
from .code_block import CodeBlock
from .errors import InvalidMemberNameError, NullMemberNameError
from .literals import (
    Char,
    EnumConstant,
    Long,
    TypeLiteral,
    character_literal_without_single_quotes,
)
from .naming import is_valid_name
from .types import ClassName, TypeName

logger = get_logger(__name__)

VALUE_MEMBER = "value"


class AnnotationSpec:
    """An immutable annotation usage: `@Type`, `@Type(v)` or `@Type(k = v, ...)`."""

    def __init__(self, builder: "AnnotationSpecBuilder"):
        self.type: TypeName = builder.type
        # read-only view over per-member tuples; builder lists are copied
        self.members: Mapping[str, Tuple[CodeBlock, ...]] = MappingProxyType(
            {name: tuple(values) for name, values in builder.members.items()}
        )

    @classmethod
    def builder(cls, type_name: Any) -> "AnnotationSpecBuilder":
        """
        Start an annotation for a type.

        Args:
            type_name: A ClassName, a Python class, or a dotted name string
        """
        return AnnotationSpecBuilder(TypeName.get(type_name))

    @classmethod
    def get(cls, source: Any, include_defaults: bool = False) -> "AnnotationSpec":
        """
        Convert an existing annotation into a spec via a registered source adapter.

        Args:
            source: Any value an AnnotationSource adapter accepts
            include_defaults: Also emit members left at their default value
        """
        from ..registry import get_source_registry

        adapter = get_source_registry().get_adapter(source)
        return adapter.to_annotation_spec(source, include_defaults)

    def to_builder(self) -> "AnnotationSpecBuilder":
        builder = AnnotationSpecBuilder(self.type)
        for name, values in self.members.items():
            builder.members[name] = list(values)
        return builder

    def type_references(self) -> List[ClassName]:
        found = list(self.type.referenced_class_names())
        for values in self.members.values():
            for value in values:
                found.extend(value.type_references())
        return found

    def emit(self, writer, inline: bool = True) -> None:
        """
        Write this annotation on a single line.

        Members are emitted in first-insertion order; the `inline` flag is
        accepted for symmetry with other specs and has no effect.
        """
        if not self.members:
            writer.emit("@$T", self.type)
            return

        if len(self.members) == 1 and VALUE_MEMBER in self.members:
            writer.emit("@$T(", self.type)
            self._emit_values(writer, self.members[VALUE_MEMBER])
            writer.emit(")")
            return

        writer.emit("@$T(", self.type)
        writer.indent(2)
        for index, (name, values) in enumerate(self.members.items()):
            if index:
                writer.emit(", ")
            writer.emit("$L = ", name)
            self._emit_values(writer, values)
        writer.unindent(2)
        writer.emit(")")

    @staticmethod
    def _emit_values(writer, values: Tuple[CodeBlock, ...]) -> None:
        if len(values) == 1:
            writer.indent(1)
            writer.emit_code_block(values[0])
            writer.unindent(1)
            return

        writer.emit("{")
        writer.indent(2)
        for index, value in enumerate(values):
            if index:
                writer.emit(", ")
            writer.emit_code_block(value)
        writer.unindent(2)
        writer.emit("}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnotationSpec):
            return NotImplemented
        return self.type == other.type and dict(self.members) == dict(other.members)

    def __hash__(self) -> int:
        members = frozenset(self.members.items())
        return hash((self.type, members))

    def __str__(self) -> str:
        from .code_writer import CodeWriter

        writer = CodeWriter()
        self.emit(writer, inline=True)
        return writer.text()

    def __repr__(self) -> str:
        return f"AnnotationSpec({str(self)!r})"


class AnnotationSpecBuilder:
    """
    Mutable accumulator for an AnnotationSpec.

    `members` is exposed as a plain dict. Only `add_member` validates
    names; writing to the dict directly skips that check.
    """

    def __init__(self, type_name: TypeName):
        self.type = type_name
        self.members: Dict[str, List[CodeBlock]] = {}

    def add_member(self, name: Optional[str], format_string: Any, *args: Any) -> "AnnotationSpecBuilder":
        """
        Append a value to a member, creating the member on first use.

        Args:
            name: Member name; must be a valid identifier
            format_string: A format string, or a ready CodeBlock when no args follow
            *args: Arguments for the format string

        Raises:
            NullMemberNameError: If name is None
            InvalidMemberNameError: If name is not a valid identifier
        """
        self._check_member_name(name)
        if isinstance(format_string, CodeBlock) and not args:
            code_block = format_string
        else:
            code_block = CodeBlock.of(format_string, *args)
        self.members.setdefault(name, []).append(code_block)
        return self

    def add_member_for_value(self, name: Optional[str], value: Any) -> "AnnotationSpecBuilder":
        """
        Append a Python value to a member, choosing the literal form from its kind.

        Class objects and TypeLiterals become `Type.class`, enum members
        `Type.NAME`, strings quoted literals, Float32 `1.0f`, Long `1`,
        Char `'c'`, nested AnnotationSpecs `@Nested(...)`. Lists and tuples
        add one value per element; an empty list yields an empty member.
        """
        self._check_member_name(name)
        if isinstance(value, (list, tuple)):
            self.members.setdefault(name, [])
            for element in value:
                self.add_member_for_value(name, element)
            return self
        if isinstance(value, TypeLiteral):
            return self.add_member(name, "$T.class", value.type_name)
        if inspect.isclass(value) or isinstance(value, TypeName):
            return self.add_member(name, "$T.class", value)
        if isinstance(value, enum.Enum):
            return self.add_member(name, "$L", EnumConstant.of(value))
        if isinstance(value, EnumConstant):
            return self.add_member(name, "$L", value)
        if isinstance(value, Char):
            return self.add_member(name, "'$L'", character_literal_without_single_quotes(value))
        if isinstance(value, str):
            return self.add_member(name, "$S", value)
        if isinstance(value, Long):
            # member values of type long carry no suffix
            return self.add_member(name, "$L", int(value))
        return self.add_member(name, "$L", value)

    @staticmethod
    def _check_member_name(name: Optional[str]) -> None:
        if name is None:
            raise NullMemberNameError()
        if not is_valid_name(name) or "." in name:
            logger.debug("Rejected annotation member name %r", name)
            raise InvalidMemberNameError(name)

    def build(self) -> AnnotationSpec:
        for name in self.members:
            if name is None:
                raise NullMemberNameError()
        return AnnotationSpec(self)
