"""
Code blocks: the format-string template engine.

A format string is scanned once into an immutable sequence of typed parts.
Placeholders:

    $L  literal        value rendered by the literal formatter
    $S  string         value quoted and escaped as a string literal
    $T  type           type reference, shortened by import resolution
    $N  name           identifier emitted verbatim
    $$  dollar sign
    $>  $<             increase / decrease indentation
    $[  $]             begin / end a statement (continuation indent)
    $W  $Z             wrapping space / zero-width wrap point

Arguments are consumed sequentially, by 1-based index (`$2L`), or by name
(`$food:L`, see add_named). Every placeholder must consume exactly one
argument and every argument must be consumed, otherwise building fails.
"""

import enum
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import (
    FormatArityError,
    InvalidArgumentError,
    InvalidNameError,
    UnknownPlaceholderError,
)
from .literals import normalize_literal, string_value
from .types import ClassName, TypeName


class PartKind(enum.Enum):
    """Kinds of parts a code block is made of."""

    TEXT = "text"
    LITERAL = "L"
    STRING = "S"
    TYPE = "T"
    NAME = "N"
    NEWLINE = "newline"
    INDENT = ">"
    UNINDENT = "<"
    STATEMENT_BEGIN = "["
    STATEMENT_END = "]"
    WRAPPING_SPACE = "W"
    ZERO_WIDTH_SPACE = "Z"


@dataclass(frozen=True)
class Part:
    """One typed instruction of a code block."""

    kind: PartKind
    value: Any = None


ARGUMENT_KINDS = {"L": PartKind.LITERAL, "S": PartKind.STRING, "T": PartKind.TYPE, "N": PartKind.NAME}

CONTROL_KINDS = {
    ">": PartKind.INDENT,
    "<": PartKind.UNINDENT,
    "[": PartKind.STATEMENT_BEGIN,
    "]": PartKind.STATEMENT_END,
    "W": PartKind.WRAPPING_SPACE,
    "Z": PartKind.ZERO_WIDTH_SPACE,
}

NAMED_ARGUMENT = re.compile(r"\$(?P<name>[\w_]+):(?P<kind>[\w]).*", re.DOTALL)
LOWERCASE = re.compile(r"[a-z]+[\w_]*")


def _text_parts(text: str) -> List[Part]:
    parts = []
    lines = text.split("\n")
    for index, line in enumerate(lines):
        if index:
            parts.append(Part(PartKind.NEWLINE))
        if line:
            parts.append(Part(PartKind.TEXT, line))
    return parts


def _argument_part(placeholder: str, value: Any) -> Part:
    """Validate an argument against its placeholder kind and wrap it as a part."""
    kind = ARGUMENT_KINDS[placeholder]
    if kind is PartKind.LITERAL:
        return Part(kind, normalize_literal(value))
    if kind is PartKind.STRING:
        return Part(kind, None if value is None else string_value(value))
    if kind is PartKind.TYPE:
        try:
            return Part(kind, TypeName.get(value))
        except InvalidNameError as e:
            raise InvalidArgumentError(
                f"expected type but was {value!r}", "$T", value
            ) from e
    if isinstance(value, str):
        return Part(kind, value)
    name = getattr(value, "name", None)
    if isinstance(name, str):
        return Part(kind, name)
    raise InvalidArgumentError(f"expected name but was {value!r}", "$N", value)


class CodeBlock:
    """
    An immutable fragment of Java code built from a format string.

    Two code blocks are equal when their part sequences are equal.
    """

    __slots__ = ("_parts",)

    def __init__(self, parts: Iterable[Part] = ()):
        self._parts: Tuple[Part, ...] = tuple(parts)

    @classmethod
    def of(cls, format_string: str, *args: Any) -> "CodeBlock":
        """Compile a format string with positional arguments into a code block."""
        return cls.builder().add(format_string, *args).build()

    compile = of

    @classmethod
    def builder(cls) -> "CodeBlockBuilder":
        return CodeBlockBuilder()

    @classmethod
    def join(cls, code_blocks: Iterable["CodeBlock"], separator: str) -> "CodeBlock":
        """Join code blocks with a literal separator between each pair."""
        builder = cls.builder()
        for index, block in enumerate(code_blocks):
            if index:
                builder.add(separator.replace("$", "$$"))
            builder.add_code_block(block)
        return builder.build()

    @property
    def parts(self) -> Tuple[Part, ...]:
        return self._parts

    def is_empty(self) -> bool:
        return not self._parts

    def to_builder(self) -> "CodeBlockBuilder":
        builder = CodeBlockBuilder()
        builder.parts.extend(self._parts)
        return builder

    def type_references(self) -> List[ClassName]:
        """Return every class referenced by a `$T` part, in order, including nested blocks."""
        found: List[ClassName] = []
        for part in self._parts:
            if part.kind is PartKind.TYPE:
                found.extend(part.value.referenced_class_names())
            elif part.kind is PartKind.LITERAL and hasattr(part.value, "type_references"):
                found.extend(part.value.type_references())
        return found

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeBlock):
            return NotImplemented
        return self._parts == other._parts

    def __hash__(self) -> int:
        return hash(self._parts)

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __repr__(self) -> str:
        return f"CodeBlock({str(self)!r})"

    def emit(self, writer):
        return writer.emit_code_block(self)

    def __str__(self) -> str:
        from .code_writer import CodeWriter

        writer = CodeWriter()
        writer.emit_code_block(self)
        return writer.text()


class CodeBlockBuilder:
    """Mutable accumulator of code block parts."""

    def __init__(self):
        self.parts: List[Part] = []

    def is_empty(self) -> bool:
        return not self.parts

    def add(self, format_string: str, *args: Any) -> "CodeBlockBuilder":
        """
        Append a format string with positional or 1-based indexed arguments.

        Raises:
            FormatArityError: If placeholders and arguments do not pair up
            UnknownPlaceholderError: For an unknown `$` sequence
            UnsupportedValueKindError: For a `$L` value with no literal form
            InvalidArgumentError: For a `$T` or `$N` argument of the wrong kind
        """
        tokens = []
        relative_count = 0
        indexed_used = [False] * len(args)
        has_indexed = False
        p = 0
        while p < len(format_string):
            if format_string[p] != "$":
                next_p = format_string.find("$", p + 1)
                if next_p == -1:
                    next_p = len(format_string)
                tokens.append(("text", format_string[p:next_p]))
                p = next_p
                continue

            p += 1
            index_start = p
            while p < len(format_string) and format_string[p].isdigit():
                p += 1
            if p >= len(format_string):
                raise UnknownPlaceholderError("$", format_string)
            index_text = format_string[index_start:p]
            placeholder = format_string[p]
            p += 1

            if placeholder == "$" or placeholder in CONTROL_KINDS:
                if index_text:
                    raise UnknownPlaceholderError(f"${index_text}{placeholder}", format_string)
                tokens.append(("control", placeholder))
                continue
            if placeholder not in ARGUMENT_KINDS:
                raise UnknownPlaceholderError(f"${placeholder}", format_string)

            if index_text:
                index = int(index_text) - 1
                if index < 0 or index >= len(args):
                    raise FormatArityError(
                        f"index {index + 1} for '{format_string}' not in range "
                        f"(received {len(args)} arguments)",
                        format_string,
                        index + 1,
                        len(args),
                    )
                indexed_used[index] = True
                has_indexed = True
            else:
                index = relative_count
                relative_count += 1
            tokens.append(("argument", placeholder, index))

        if has_indexed and relative_count:
            raise FormatArityError(
                "cannot mix indexed and positional parameters",
                format_string,
                relative_count,
                len(args),
            )
        if not has_indexed and relative_count != len(args):
            qualifier = "too few" if relative_count > len(args) else "too many"
            raise FormatArityError(
                f"{qualifier} arguments for format '{format_string}': "
                f"expected {relative_count}, received {len(args)}",
                format_string,
                relative_count,
                len(args),
            )
        if has_indexed and not all(indexed_used):
            unused = ", ".join(f"${i + 1}" for i, used in enumerate(indexed_used) if not used)
            raise FormatArityError(
                f"unused arguments: {unused}",
                format_string,
                sum(indexed_used),
                len(args),
            )

        self._append_tokens(tokens, lambda token: args[token[2]])
        return self

    def add_named(self, format_string: str, arguments: Dict[str, Any]) -> "CodeBlockBuilder":
        """
        Append a format string whose placeholders name their arguments: `$count:L`.

        Argument names must start with a lowercase letter.
        """
        for name in arguments:
            if not LOWERCASE.fullmatch(name):
                raise InvalidArgumentError(
                    f"argument '{name}' must start with a lowercase character",
                    "named",
                    name,
                )
        tokens = []
        p = 0
        while p < len(format_string):
            next_p = format_string.find("$", p)
            if next_p == -1:
                tokens.append(("text", format_string[p:]))
                break
            if p != next_p:
                tokens.append(("text", format_string[p:next_p]))
                p = next_p

            matcher = NAMED_ARGUMENT.match(format_string, p)
            if matcher:
                name = matcher.group("name")
                placeholder = matcher.group("kind")
                if placeholder not in ARGUMENT_KINDS:
                    raise UnknownPlaceholderError(f"${name}:{placeholder}", format_string)
                if name not in arguments:
                    raise FormatArityError(
                        f"missing named argument for ${name}",
                        format_string,
                        len(arguments) + 1,
                        len(arguments),
                    )
                tokens.append(("argument", placeholder, name))
                p += len(name) + 3
                continue

            if p + 1 >= len(format_string):
                raise UnknownPlaceholderError("$", format_string)
            placeholder = format_string[p + 1]
            if placeholder != "$" and placeholder not in CONTROL_KINDS:
                raise UnknownPlaceholderError(f"${placeholder}", format_string)
            tokens.append(("control", placeholder))
            p += 2

        self._append_tokens(tokens, lambda token: arguments[token[2]])
        return self

    def _append_tokens(self, tokens, argument_for) -> None:
        parts: List[Part] = []
        for token in tokens:
            if token[0] == "text":
                parts.extend(_text_parts(token[1]))
            elif token[0] == "control":
                if token[1] == "$":
                    parts.append(Part(PartKind.TEXT, "$"))
                else:
                    parts.append(Part(CONTROL_KINDS[token[1]]))
            else:
                parts.append(_argument_part(token[1], argument_for(token)))
        self.parts.extend(parts)

    def add_statement(self, format_string: str, *args: Any) -> "CodeBlockBuilder":
        self.add("$[")
        self.add(format_string, *args)
        self.add(";\n$]")
        return self

    def begin_control_flow(self, control_flow: str, *args: Any) -> "CodeBlockBuilder":
        """Open a braced block, e.g. `if (foo == 5)`; ends with an indent."""
        self.add(control_flow + " {\n", *args)
        self.indent()
        return self

    def next_control_flow(self, control_flow: str, *args: Any) -> "CodeBlockBuilder":
        """Close the current braced block and open another, e.g. `else if (x)`."""
        self.unindent()
        self.add("} " + control_flow + " {\n", *args)
        self.indent()
        return self

    def end_control_flow(self, control_flow: Optional[str] = None, *args: Any) -> "CodeBlockBuilder":
        """Close a braced block, optionally with a trailer such as `while (more)`."""
        self.unindent()
        if control_flow is None:
            self.add("}\n")
        else:
            self.add("} " + control_flow + ";\n", *args)
        return self

    def add_code_block(self, code_block: CodeBlock) -> "CodeBlockBuilder":
        self.parts.extend(code_block.parts)
        return self

    def indent(self) -> "CodeBlockBuilder":
        self.parts.append(Part(PartKind.INDENT))
        return self

    def unindent(self) -> "CodeBlockBuilder":
        self.parts.append(Part(PartKind.UNINDENT))
        return self

    def clear(self) -> "CodeBlockBuilder":
        self.parts.clear()
        return self

    def build(self) -> CodeBlock:
        return CodeBlock(self.parts)
