"""
CodeWriter: renders code blocks and specs to text.

The same writer class serves both passes of file emission. During the
collect pass it has no imports and records every class it had to write
fully qualified; during the render pass it is given the frozen import
plan and shortens type references accordingly.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .code_block import CodeBlock, PartKind
from .line_wrapper import LineWrapper
from .literals import format_literal, is_emittable, string_literal_with_double_quotes
from .naming import is_identifier_start
from .types import ClassName, TypeName


LINE_BREAK = re.compile(r"\r\n|[\n\x0b\x0c\r\x85\u2028\u2029]")

DEFAULT_INDENT = "  "
DEFAULT_COLUMN_LIMIT = 100


class CodeWriter:
    """Converts code blocks and specs into Java text with indentation and wrapping."""

    def __init__(
        self,
        indent: str = DEFAULT_INDENT,
        imported_types: Optional[Mapping[str, ClassName]] = None,
        static_imports: Iterable[str] = (),
        always_qualify: Iterable[str] = (),
        column_limit: int = DEFAULT_COLUMN_LIMIT,
    ):
        self.indent_unit = indent
        self.out = LineWrapper(indent, column_limit)
        self.indent_level = 0
        self.javadoc = False
        self.comment = False
        self.trailing_newline = False
        # -1 outside a statement, otherwise the number of lines it has wrapped
        self.statement_line = -1

        self.package_name: Optional[str] = None
        self._type_stack: List[Tuple[str, Set[str]]] = []

        self.imported_types: Dict[str, ClassName] = dict(imported_types or {})
        self.static_imports: Set[str] = set(static_imports)
        self.static_import_class_names: Set[str] = {
            member.rsplit(".", 1)[0] for member in self.static_imports
        }
        self.always_qualify: Set[str] = set(always_qualify)

        # collect-pass bookkeeping
        self.importable_types: Dict[str, ClassName] = {}
        self.referenced_names: Set[str] = set()

    # -- scopes --------------------------------------------------------

    def indent(self, levels: int = 1) -> "CodeWriter":
        self.indent_level += levels
        return self

    def unindent(self, levels: int = 1) -> "CodeWriter":
        if self.indent_level - levels < 0:
            raise ValueError(f"cannot unindent {levels} from {self.indent_level}")
        self.indent_level -= levels
        return self

    def push_package(self, package_name: str) -> "CodeWriter":
        if self.package_name is not None:
            raise ValueError(f"package already set: {self.package_name}")
        self.package_name = package_name
        return self

    def pop_package(self) -> "CodeWriter":
        if self.package_name is None:
            raise ValueError("package not set")
        self.package_name = None
        return self

    def push_type(self, name: str, nested_type_names: Iterable[str] = ()) -> "CodeWriter":
        self._type_stack.append((name, set(nested_type_names)))
        return self

    def pop_type(self) -> "CodeWriter":
        self._type_stack.pop()
        return self

    # -- structured emission ---------------------------------------------

    def emit_comment(self, code_block: CodeBlock) -> None:
        self.trailing_newline = True
        self.comment = True
        try:
            self.emit_code_block(code_block)
            self.emit("\n")
        finally:
            self.comment = False

    def emit_javadoc(self, javadoc: CodeBlock) -> None:
        if javadoc.is_empty():
            return
        self.emit("/**\n")
        self.javadoc = True
        try:
            self.emit_code_block(javadoc, ensure_trailing_newline=True)
        finally:
            self.javadoc = False
        self.emit(" */\n")

    def emit_annotations(self, annotations, inline: bool) -> None:
        for annotation in annotations:
            annotation.emit(self, inline)
            self.emit(" " if inline else "\n")

    def emit_modifiers(self, modifiers, implicit_modifiers=()) -> None:
        """Emit modifiers in declaration order, skipping the implicit ones."""
        for modifier in sorted(modifiers, key=lambda m: m.order):
            if modifier in implicit_modifiers:
                continue
            self.emit_and_indent(modifier.value)
            self.emit_and_indent(" ")

    def emit(self, format_string: str, *args) -> "CodeWriter":
        return self.emit_code_block(CodeBlock.of(format_string, *args))

    def emit_code_block(self, code_block: CodeBlock, ensure_trailing_newline: bool = False) -> "CodeWriter":
        parts = code_block.parts
        deferred_type: Optional[ClassName] = None
        for index, part in enumerate(parts):
            kind = part.kind

            if deferred_type is not None:
                if kind is PartKind.TEXT and part.value.startswith("."):
                    if self._emit_static_import_member(deferred_type.canonical(), part.value):
                        deferred_type = None
                        continue
                deferred_type.emit(self)
                deferred_type = None

            if kind is PartKind.TEXT:
                self.emit_and_indent(part.value)
            elif kind is PartKind.NEWLINE:
                self.emit_and_indent("\n")
            elif kind is PartKind.LITERAL:
                self.emit_literal(part.value)
            elif kind is PartKind.NAME:
                self.emit_and_indent(part.value)
            elif kind is PartKind.STRING:
                if part.value is None:
                    self.emit_and_indent("null")
                else:
                    self.emit_and_indent(
                        string_literal_with_double_quotes(part.value, self.indent_unit)
                    )
            elif kind is PartKind.TYPE:
                type_name = part.value
                if (
                    isinstance(type_name, ClassName)
                    and index + 1 < len(parts)
                    and parts[index + 1].kind is PartKind.TEXT
                    and type_name.canonical() in self.static_import_class_names
                ):
                    deferred_type = type_name
                    continue
                type_name.emit(self)
            elif kind is PartKind.INDENT:
                self.indent()
            elif kind is PartKind.UNINDENT:
                self.unindent()
            elif kind is PartKind.STATEMENT_BEGIN:
                if self.statement_line != -1:
                    raise ValueError("statement enter $[ followed by statement enter $[")
                self.statement_line = 0
            elif kind is PartKind.STATEMENT_END:
                if self.statement_line == -1:
                    raise ValueError("statement exit $] has no matching statement enter $[")
                if self.statement_line > 0:
                    # end a multi-line statement, drop the continuation indent
                    self.unindent(2)
                self.statement_line = -1
            elif kind is PartKind.WRAPPING_SPACE:
                self.out.wrapping_space(self.indent_level + 2)
            elif kind is PartKind.ZERO_WIDTH_SPACE:
                self.out.zero_width_space(self.indent_level + 2)

        if deferred_type is not None:
            deferred_type.emit(self)
        if ensure_trailing_newline and self.out.column != 0:
            self.emit("\n")
        return self

    def emit_literal(self, value) -> None:
        if is_emittable(value):
            value.emit(self)
        else:
            self.emit_and_indent(format_literal(value))

    def emit_member_reference(self, type_name: TypeName, member: str) -> "CodeWriter":
        """Emit `Type.member`, or just `member` when it is statically imported."""
        if isinstance(type_name, ClassName) and self._emit_static_import_member(
            type_name.canonical(), "." + member
        ):
            return self
        type_name.emit(self)
        return self.emit_and_indent("." + member)

    def _emit_static_import_member(self, canonical: str, part: str) -> bool:
        member = part[1:]
        if not member or not is_identifier_start(member[0]):
            return False
        name_end = 0
        while name_end < len(member) and (member[name_end].isalnum() or member[name_end] in "_$"):
            name_end += 1
        explicit = f"{canonical}.{member[:name_end]}"
        wildcard = f"{canonical}.*"
        if explicit in self.static_imports or wildcard in self.static_imports:
            self.emit_and_indent(member)
            return True
        return False

    # -- name resolution -------------------------------------------------

    def lookup_name(self, class_name: ClassName) -> str:
        """
        Return the shortest text that names class_name in the current scope.

        Tries the class and each enclosing class in turn, using the names
        visible from the types being emitted and from imports. Same-package
        classes use their simple-name chain. Anything else is written fully
        qualified and remembered as an import candidate.
        """
        name_resolved = False
        current: Optional[ClassName] = class_name
        while current is not None:
            resolved = self._resolve(current.simple_name)
            name_resolved = resolved is not None
            if resolved is not None and resolved.canonical() == current.canonical():
                suffix_offset = len(current.simple_names) - 1
                return ".".join(class_name.simple_names[suffix_offset:])
            current = current.enclosing_class_name()

        # the simple name is taken by something else
        if name_resolved:
            return class_name.canonical()

        if self.package_name is not None and self.package_name == class_name.package_name:
            self.referenced_names.add(class_name.simple_names[0])
            return ".".join(class_name.simple_names)

        if not self.javadoc:
            self._importable_type(class_name)
        return class_name.canonical()

    def _importable_type(self, class_name: ClassName) -> None:
        if not class_name.package_name:
            return
        if class_name.simple_name in self.always_qualify:
            return
        top_level = class_name.top_level_class_name()
        # first class to claim a simple name keeps it
        self.importable_types.setdefault(top_level.simple_name, top_level)

    def _resolve(self, simple_name: str) -> Optional[ClassName]:
        for depth in range(len(self._type_stack) - 1, -1, -1):
            if simple_name in self._type_stack[depth][1]:
                return self._stack_class_name(depth, simple_name)

        if self._type_stack and self._type_stack[0][0] == simple_name:
            return ClassName.get(self.package_name or "", simple_name)

        return self.imported_types.get(simple_name)

    def _stack_class_name(self, depth: int, simple_name: str) -> ClassName:
        class_name = ClassName.get(self.package_name or "", self._type_stack[0][0])
        for index in range(1, depth + 1):
            class_name = class_name.nested_class(self._type_stack[index][0])
        return class_name.nested_class(simple_name)

    def suggested_imports(self) -> Dict[str, ClassName]:
        """Import candidates recorded so far, minus names used by same-package types."""
        return {
            name: class_name
            for name, class_name in self.importable_types.items()
            if name not in self.referenced_names
        }

    # -- raw output --------------------------------------------------------

    def emit_and_indent(self, text: str) -> "CodeWriter":
        """Write text, indenting each new line and prefixing comment lines."""
        first = True
        for line in LINE_BREAK.split(text):
            if not first:
                if (self.javadoc or self.comment) and self.trailing_newline:
                    self._emit_indentation()
                    self.out.append(" *" if self.javadoc else "//")
                self.out.append("\n")
                self.trailing_newline = True
                if self.statement_line != -1:
                    if self.statement_line == 0:
                        # continuation lines of a statement get double indentation
                        self.indent(2)
                    self.statement_line += 1
            first = False
            if not line:
                continue

            if self.trailing_newline:
                self._emit_indentation()
                if self.javadoc:
                    self.out.append(" * ")
                elif self.comment:
                    self.out.append("// ")
            self.out.append(line)
            self.trailing_newline = False
        return self

    def _emit_indentation(self) -> None:
        self.out.append(self.indent_unit * self.indent_level)

    def text(self) -> str:
        """Close the writer and return everything written."""
        if not self.out.closed:
            self.out.close()
        return self.out.getvalue()
