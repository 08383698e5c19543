"""
Literal formatting for emitted Java source.

Converts Python values into the text of the equivalent Java literal,
including the escaping rules for string and character literals. Java has
numeric kinds Python lacks, so `Long`, `Float32` and `Char` mark a value's
declared kind explicitly.
"""

import enum
import math
from dataclasses import dataclass
from typing import Any

from .errors import UnsupportedValueKindError
from .types import TypeName


class Long(int):
    """An integer declared as a Java `long`; rendered with an `L` suffix."""


class Float32(float):
    """A single-precision value; rendered with an `f` suffix."""


class Char(str):
    """A single Java `char`; rendered as a quoted character literal."""

    def __new__(cls, value):
        if isinstance(value, int):
            value = chr(value)
        if len(value) != 1:
            raise ValueError(f"a char holds exactly one character, got {value!r}")
        return super().__new__(cls, value)


@dataclass(frozen=True)
class EnumConstant:
    """A reference to an enum constant, rendered `Type.NAME`."""

    enum_type: TypeName
    name: str

    @classmethod
    def of(cls, member: enum.Enum) -> "EnumConstant":
        return cls(TypeName.get(type(member)), member.name)

    def emit(self, writer):
        return writer.emit_member_reference(self.enum_type, self.name)

    def type_references(self):
        return self.enum_type.referenced_class_names()


@dataclass(frozen=True)
class TypeLiteral:
    """A class literal, rendered `Type.class`."""

    type_name: TypeName

    def emit(self, writer):
        self.type_name.emit(writer)
        return writer.emit_and_indent(".class")

    def type_references(self):
        return self.type_name.referenced_class_names()


_CHAR_ESCAPES = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    "'": "\\'",
    "\\": "\\\\",
}


def _is_iso_control(ch: str) -> bool:
    code = ord(ch)
    return code <= 0x1F or 0x7F <= code <= 0x9F


def character_literal_without_single_quotes(ch: str) -> str:
    """Escape one character as it appears inside a char or string literal."""
    if ch in _CHAR_ESCAPES:
        return _CHAR_ESCAPES[ch]
    if _is_iso_control(ch):
        return "\\u%04x" % ord(ch)
    return ch


def character_literal(ch: str) -> str:
    """Return a quoted Java character literal."""
    return f"'{character_literal_without_single_quotes(ch)}'"


def string_literal_with_double_quotes(value: str, indent: str = "") -> str:
    """
    Return a quoted Java string literal.

    A string containing line breaks is split after each `\\n` into a
    concatenation continued on the next line at double indentation.

    Args:
        value: Raw string content
        indent: The writer's indent unit, used for continuation lines
    """
    result = ['"']
    for index, ch in enumerate(value):
        if ch == "'":
            result.append("'")
        elif ch == '"':
            result.append('\\"')
        else:
            result.append(character_literal_without_single_quotes(ch))
            if ch == "\n" and index + 1 < len(value):
                result.append(f'"\n{indent}{indent}+ "')
    result.append('"')
    return "".join(result)


def _format_double(value: float, type_name: str) -> str:
    if math.isnan(value):
        return f"{type_name}.NaN"
    if math.isinf(value):
        sign = "POSITIVE" if value > 0 else "NEGATIVE"
        return f"{type_name}.{sign}_INFINITY"
    text = repr(float(value))
    if "e" in text:
        mantissa, exponent = text.split("e")
        if "." not in mantissa:
            mantissa += ".0"
        text = f"{mantissa}E{int(exponent)}"
    return text


def format_literal(value: Any) -> str:
    """
    Format a scalar value as Java literal text.

    Strings pass through verbatim here; `$S` is the placeholder that quotes
    them. Values that mention types (enum constants, class literals,
    annotations, code blocks) are emitted by the CodeWriter instead.

    Raises:
        UnsupportedValueKindError: For any other kind of value
    """
    if value is None:
        return "null"
    if isinstance(value, Char):
        return character_literal(value)
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Long):
        return f"{int(value)}L"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, Float32):
        text = _format_double(value, "Float")
        return text if text.startswith("Float.") else f"{text}f"
    if isinstance(value, float):
        return _format_double(value, "Double")
    raise UnsupportedValueKindError(value)


def is_emittable(value: Any) -> bool:
    """Check whether a value knows how to write itself to a CodeWriter."""
    return callable(getattr(value, "emit", None)) and not isinstance(value, type)


def string_value(value: Any) -> str:
    """Return the text Java's `String.valueOf` gives for a scalar value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return _format_double(value, "Double")
    return str(value)


def normalize_literal(value: Any) -> Any:
    """
    Validate a `$L` argument eagerly and return its normalized form.

    Python enum members become EnumConstant references.

    Raises:
        UnsupportedValueKindError: If the value cannot be rendered
    """
    if isinstance(value, enum.Enum):
        return EnumConstant.of(value)
    if is_emittable(value):
        return value
    format_literal(value)
    return value


__all__ = [
    "Long",
    "Float32",
    "Char",
    "EnumConstant",
    "TypeLiteral",
    "character_literal",
    "character_literal_without_single_quotes",
    "string_literal_with_double_quotes",
    "format_literal",
    "normalize_literal",
    "string_value",
    "is_emittable",
]
