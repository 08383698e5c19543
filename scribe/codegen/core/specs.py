"""
Declaration specs: types, fields, methods and parameters.

These are plain data-holding builders. Each spec knows how to emit itself
to a CodeWriter, which is all the collect and render passes need.
"""

import enum
from typing import Any, Dict, Iterable, List, Optional, Set

from .annotation import AnnotationSpec
from .code_block import CodeBlock
from .naming import check_valid_name
from .types import OBJECT, VOID, ArrayTypeName, TypeName


class Modifier(enum.Enum):
    """Java modifiers, declared in their canonical emission order."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ABSTRACT = "abstract"
    DEFAULT = "default"
    STATIC = "static"
    FINAL = "final"
    TRANSIENT = "transient"
    VOLATILE = "volatile"
    SYNCHRONIZED = "synchronized"
    NATIVE = "native"
    STRICTFP = "strictfp"

    @property
    def order(self) -> int:
        return list(Modifier).index(self)


def _annotation(value: Any) -> AnnotationSpec:
    if isinstance(value, AnnotationSpec):
        return value
    return AnnotationSpec.builder(value).build()


def _code(format_string: Any, args) -> CodeBlock:
    if isinstance(format_string, CodeBlock) and not args:
        return format_string
    return CodeBlock.of(format_string, *args)


class ParameterSpec:
    """A method or constructor parameter."""

    def __init__(self, builder: "ParameterSpecBuilder"):
        self.name = builder.name
        self.type = builder.type
        self.annotations = list(builder.annotations)
        self.modifiers = set(builder.modifiers)

    @classmethod
    def builder(cls, type_name: Any, name: str, *modifiers: Modifier) -> "ParameterSpecBuilder":
        return ParameterSpecBuilder(TypeName.get(type_name), name).add_modifiers(*modifiers)

    @classmethod
    def of(cls, type_name: Any, name: str, *modifiers: Modifier) -> "ParameterSpec":
        return cls.builder(type_name, name, *modifiers).build()

    def emit(self, writer, varargs: bool = False) -> None:
        writer.emit_annotations(self.annotations, True)
        writer.emit_modifiers(self.modifiers)
        if varargs and isinstance(self.type, ArrayTypeName):
            writer.emit("$T... $L", self.type.component_type, self.name)
        else:
            writer.emit("$T $L", self.type, self.name)


class ParameterSpecBuilder:
    def __init__(self, type_name: TypeName, name: str):
        self.type = type_name
        self.name = check_valid_name(name)
        self.annotations: List[AnnotationSpec] = []
        self.modifiers: Set[Modifier] = set()

    def add_annotation(self, annotation: Any) -> "ParameterSpecBuilder":
        self.annotations.append(_annotation(annotation))
        return self

    def add_modifiers(self, *modifiers: Modifier) -> "ParameterSpecBuilder":
        for modifier in modifiers:
            if modifier is not Modifier.FINAL:
                raise ValueError(f"unexpected parameter modifier: {modifier.value}")
        self.modifiers.update(modifiers)
        return self

    def build(self) -> ParameterSpec:
        return ParameterSpec(self)


class FieldSpec:
    """A field declaration with an optional initializer."""

    def __init__(self, builder: "FieldSpecBuilder"):
        self.type = builder.type
        self.name = builder.name
        self.javadoc = builder.javadoc.build()
        self.annotations = list(builder.annotations)
        self.modifiers = set(builder.modifiers)
        self.initializer = builder.initializer_block or CodeBlock()

    @classmethod
    def builder(cls, type_name: Any, name: str, *modifiers: Modifier) -> "FieldSpecBuilder":
        return FieldSpecBuilder(TypeName.get(type_name), name).add_modifiers(*modifiers)

    def has_modifier(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers

    def emit(self, writer, implicit_modifiers: Iterable[Modifier] = ()) -> None:
        writer.emit_javadoc(self.javadoc)
        writer.emit_annotations(self.annotations, False)
        writer.emit_modifiers(self.modifiers, set(implicit_modifiers))
        writer.emit("$T $L", self.type, self.name)
        if not self.initializer.is_empty():
            writer.emit(" = ")
            writer.emit_code_block(self.initializer)
        writer.emit(";\n")


class FieldSpecBuilder:
    def __init__(self, type_name: TypeName, name: str):
        self.type = type_name
        self.name = check_valid_name(name)
        self.javadoc = CodeBlock.builder()
        self.annotations: List[AnnotationSpec] = []
        self.modifiers: Set[Modifier] = set()
        self.initializer_block: Optional[CodeBlock] = None

    def add_javadoc(self, format_string: str, *args: Any) -> "FieldSpecBuilder":
        self.javadoc.add(format_string, *args)
        return self

    def add_annotation(self, annotation: Any) -> "FieldSpecBuilder":
        self.annotations.append(_annotation(annotation))
        return self

    def add_modifiers(self, *modifiers: Modifier) -> "FieldSpecBuilder":
        self.modifiers.update(modifiers)
        return self

    def initializer(self, format_string: Any, *args: Any) -> "FieldSpecBuilder":
        if self.initializer_block is not None:
            raise ValueError("initializer was already set")
        self.initializer_block = _code(format_string, args)
        return self

    def build(self) -> FieldSpec:
        return FieldSpec(self)


CONSTRUCTOR = "<init>"


class MethodSpec:
    """A method or constructor declaration."""

    def __init__(self, builder: "MethodSpecBuilder"):
        self.name = builder.name
        self.javadoc = builder.javadoc.build()
        self.annotations = list(builder.annotations)
        self.modifiers = set(builder.modifiers)
        self.return_type = builder.return_type
        self.parameters = list(builder.parameters)
        self.varargs = builder.varargs
        self.exceptions = list(builder.exceptions)
        self.code = builder.code.build()
        self.default_value = builder.default_value_block or CodeBlock()
        if self.varargs and (not self.parameters or not isinstance(self.parameters[-1].type, ArrayTypeName)):
            raise ValueError("last parameter of varargs method must be an array")
        if Modifier.ABSTRACT in self.modifiers and not self.code.is_empty():
            raise ValueError(f"abstract method {self.name} cannot have code")

    @classmethod
    def method_builder(cls, name: str) -> "MethodSpecBuilder":
        return MethodSpecBuilder(check_valid_name(name))

    @classmethod
    def constructor_builder(cls) -> "MethodSpecBuilder":
        return MethodSpecBuilder(CONSTRUCTOR)

    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR

    def has_modifier(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers

    def emit(self, writer, enclosing_name: Optional[str], implicit_modifiers: Iterable[Modifier] = ()) -> None:
        writer.emit_javadoc(self.javadoc)
        writer.emit_annotations(self.annotations, False)
        writer.emit_modifiers(self.modifiers, set(implicit_modifiers))

        if self.is_constructor():
            writer.emit("$L($Z", enclosing_name)
        else:
            writer.emit("$T $L($Z", self.return_type, self.name)

        for index, parameter in enumerate(self.parameters):
            if index:
                writer.emit(",$W")
            parameter.emit(writer, self.varargs and index == len(self.parameters) - 1)
        writer.emit(")")

        if not self.default_value.is_empty():
            writer.emit(" default ")
            writer.emit_code_block(self.default_value)

        if self.exceptions:
            writer.emit("$Wthrows")
            for index, exception in enumerate(self.exceptions):
                if index:
                    writer.emit(",")
                writer.emit("$W$T", exception)

        if self.has_modifier(Modifier.ABSTRACT):
            writer.emit(";\n")
        elif self.has_modifier(Modifier.NATIVE):
            writer.emit_code_block(self.code)
            writer.emit(";\n")
        else:
            writer.emit(" {\n")
            writer.indent()
            writer.emit_code_block(self.code, ensure_trailing_newline=True)
            writer.unindent()
            writer.emit("}\n")


class MethodSpecBuilder:
    def __init__(self, name: str):
        self.name = name
        self.javadoc = CodeBlock.builder()
        self.annotations: List[AnnotationSpec] = []
        self.modifiers: Set[Modifier] = set()
        self.return_type: TypeName = VOID
        self.parameters: List[ParameterSpec] = []
        self.varargs = False
        self.exceptions: List[TypeName] = []
        self.code = CodeBlock.builder()
        self.default_value_block: Optional[CodeBlock] = None

    def add_javadoc(self, format_string: str, *args: Any) -> "MethodSpecBuilder":
        self.javadoc.add(format_string, *args)
        return self

    def add_annotation(self, annotation: Any) -> "MethodSpecBuilder":
        self.annotations.append(_annotation(annotation))
        return self

    def add_modifiers(self, *modifiers: Modifier) -> "MethodSpecBuilder":
        self.modifiers.update(modifiers)
        return self

    def returns(self, type_name: Any) -> "MethodSpecBuilder":
        if self.name == CONSTRUCTOR:
            raise ValueError("constructor cannot have return type")
        self.return_type = TypeName.get(type_name)
        return self

    def add_parameter(self, type_name: Any, name: Optional[str] = None, *modifiers: Modifier) -> "MethodSpecBuilder":
        """Add a ParameterSpec, or build one from a type and a name."""
        if isinstance(type_name, ParameterSpec):
            self.parameters.append(type_name)
        else:
            self.parameters.append(ParameterSpec.of(type_name, name, *modifiers))
        return self

    def set_varargs(self, varargs: bool = True) -> "MethodSpecBuilder":
        self.varargs = varargs
        return self

    def add_exception(self, type_name: Any) -> "MethodSpecBuilder":
        self.exceptions.append(TypeName.get(type_name))
        return self

    def add_code(self, format_string: Any, *args: Any) -> "MethodSpecBuilder":
        if isinstance(format_string, CodeBlock) and not args:
            self.code.add_code_block(format_string)
        else:
            self.code.add(format_string, *args)
        return self

    def add_named_code(self, format_string: str, arguments: Dict[str, Any]) -> "MethodSpecBuilder":
        self.code.add_named(format_string, arguments)
        return self

    def add_statement(self, format_string: str, *args: Any) -> "MethodSpecBuilder":
        self.code.add_statement(format_string, *args)
        return self

    def add_comment(self, format_string: str, *args: Any) -> "MethodSpecBuilder":
        self.code.add("// " + format_string + "\n", *args)
        return self

    def begin_control_flow(self, control_flow: str, *args: Any) -> "MethodSpecBuilder":
        self.code.begin_control_flow(control_flow, *args)
        return self

    def next_control_flow(self, control_flow: str, *args: Any) -> "MethodSpecBuilder":
        self.code.next_control_flow(control_flow, *args)
        return self

    def end_control_flow(self, control_flow: Optional[str] = None, *args: Any) -> "MethodSpecBuilder":
        self.code.end_control_flow(control_flow, *args)
        return self

    def default_value(self, format_string: Any, *args: Any) -> "MethodSpecBuilder":
        if self.default_value_block is not None:
            raise ValueError("default value was already set")
        self.default_value_block = _code(format_string, args)
        return self

    def build(self) -> MethodSpec:
        return MethodSpec(self)


class TypeKind(enum.Enum):
    """Kinds of type declaration and the modifiers their members get implicitly."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "@interface"

    @property
    def implicit_field_modifiers(self) -> Set[Modifier]:
        if self in (TypeKind.INTERFACE, TypeKind.ANNOTATION):
            return {Modifier.PUBLIC, Modifier.STATIC, Modifier.FINAL}
        return set()

    @property
    def implicit_method_modifiers(self) -> Set[Modifier]:
        if self in (TypeKind.INTERFACE, TypeKind.ANNOTATION):
            return {Modifier.PUBLIC, Modifier.ABSTRACT}
        return set()

    @property
    def implicit_type_modifiers(self) -> Set[Modifier]:
        if self in (TypeKind.INTERFACE, TypeKind.ANNOTATION):
            return {Modifier.PUBLIC, Modifier.STATIC}
        return set()

    @property
    def as_member_modifiers(self) -> Set[Modifier]:
        if self is TypeKind.CLASS:
            return set()
        return {Modifier.STATIC}


class TypeSpec:
    """A class, interface, enum or annotation type declaration."""

    def __init__(self, builder: "TypeSpecBuilder"):
        self.kind = builder.kind
        self.name = builder.name
        self.javadoc = builder.javadoc.build()
        self.annotations = list(builder.annotations)
        self.modifiers = set(builder.modifiers)
        self.superclass = builder.superclass_type
        self.superinterfaces = list(builder.superinterfaces)
        self.enum_constants: Dict[str, CodeBlock] = dict(builder.enum_constants)
        self.field_specs = list(builder.field_specs)
        self.method_specs = list(builder.method_specs)
        self.type_specs = list(builder.type_specs)
        if self.kind is TypeKind.ENUM and not self.enum_constants:
            raise ValueError(f"at least one enum constant is required for {self.name}")
        if self.kind is not TypeKind.CLASS and self.superclass != OBJECT:
            raise ValueError(f"only classes have super classes, not {self.kind.name}")

    @classmethod
    def class_builder(cls, name: str) -> "TypeSpecBuilder":
        return TypeSpecBuilder(TypeKind.CLASS, name)

    @classmethod
    def interface_builder(cls, name: str) -> "TypeSpecBuilder":
        return TypeSpecBuilder(TypeKind.INTERFACE, name)

    @classmethod
    def enum_builder(cls, name: str) -> "TypeSpecBuilder":
        return TypeSpecBuilder(TypeKind.ENUM, name)

    @classmethod
    def annotation_builder(cls, name: str) -> "TypeSpecBuilder":
        return TypeSpecBuilder(TypeKind.ANNOTATION, name)

    @property
    def nested_type_names(self) -> Set[str]:
        return {type_spec.name for type_spec in self.type_specs}

    def emit(self, writer, implicit_modifiers: Iterable[Modifier] = ()) -> None:
        previous_statement_line = writer.statement_line
        writer.statement_line = -1
        try:
            self._emit_header(writer, set(implicit_modifiers) | self.kind.as_member_modifiers)
            writer.push_type(self.name, self.nested_type_names)
            writer.indent()
            self._emit_members(writer)
            writer.unindent()
            writer.pop_type()
            writer.emit("}\n")
        finally:
            writer.statement_line = previous_statement_line

    def _emit_header(self, writer, implicit_modifiers: Set[Modifier]) -> None:
        # nested types are not visible from the header
        writer.push_type(self.name)
        writer.emit_javadoc(self.javadoc)
        writer.emit_annotations(self.annotations, False)
        writer.emit_modifiers(self.modifiers, implicit_modifiers)
        writer.emit("$L $L", self.kind.value, self.name)

        if self.kind is TypeKind.INTERFACE:
            extends_types = self.superinterfaces
            implements_types: List[TypeName] = []
        else:
            extends_types = [self.superclass] if self.superclass != OBJECT else []
            implements_types = self.superinterfaces

        for keyword, types in (("extends", extends_types), ("implements", implements_types)):
            if not types:
                continue
            writer.emit(f" {keyword}")
            for index, type_name in enumerate(types):
                if index:
                    writer.emit(",")
                writer.emit(" $T", type_name)
        writer.pop_type()
        writer.emit(" {\n")

    def _emit_members(self, writer) -> None:
        first_member = True
        has_body_members = bool(self.field_specs or self.method_specs or self.type_specs)

        constants = list(self.enum_constants.items())
        for index, (name, arguments) in enumerate(constants):
            if not first_member:
                writer.emit("\n")
            writer.emit("$L", name)
            if not arguments.is_empty():
                writer.emit("(")
                writer.emit_code_block(arguments)
                writer.emit(")")
            first_member = False
            if index + 1 < len(constants):
                writer.emit(",\n")
            elif has_body_members:
                writer.emit(";\n")
            else:
                writer.emit("\n")

        ordered_fields = [f for f in self.field_specs if f.has_modifier(Modifier.STATIC)]
        ordered_fields += [f for f in self.field_specs if not f.has_modifier(Modifier.STATIC)]
        for field_spec in ordered_fields:
            if not first_member:
                writer.emit("\n")
            field_spec.emit(writer, self.kind.implicit_field_modifiers)
            first_member = False

        ordered_methods = [m for m in self.method_specs if m.is_constructor()]
        ordered_methods += [m for m in self.method_specs if not m.is_constructor()]
        for method_spec in ordered_methods:
            if not first_member:
                writer.emit("\n")
            method_spec.emit(writer, self.name, self.kind.implicit_method_modifiers)
            first_member = False

        for type_spec in self.type_specs:
            if not first_member:
                writer.emit("\n")
            type_spec.emit(writer, self.kind.implicit_type_modifiers)
            first_member = False

    def __str__(self) -> str:
        from .code_writer import CodeWriter

        writer = CodeWriter()
        self.emit(writer)
        return writer.text()


class TypeSpecBuilder:
    def __init__(self, kind: TypeKind, name: str):
        self.kind = kind
        self.name = check_valid_name(name)
        self.javadoc = CodeBlock.builder()
        self.annotations: List[AnnotationSpec] = []
        self.modifiers: Set[Modifier] = set()
        self.superclass_type: TypeName = OBJECT
        self.superinterfaces: List[TypeName] = []
        self.enum_constants: Dict[str, CodeBlock] = {}
        self.field_specs: List[FieldSpec] = []
        self.method_specs: List[MethodSpec] = []
        self.type_specs: List[TypeSpec] = []

    def add_javadoc(self, format_string: str, *args: Any) -> "TypeSpecBuilder":
        self.javadoc.add(format_string, *args)
        return self

    def add_annotation(self, annotation: Any) -> "TypeSpecBuilder":
        self.annotations.append(_annotation(annotation))
        return self

    def add_modifiers(self, *modifiers: Modifier) -> "TypeSpecBuilder":
        self.modifiers.update(modifiers)
        return self

    def superclass(self, type_name: Any) -> "TypeSpecBuilder":
        if self.kind is not TypeKind.CLASS:
            raise ValueError(f"only classes have super classes, not {self.kind.name}")
        self.superclass_type = TypeName.get(type_name)
        return self

    def add_superinterface(self, type_name: Any) -> "TypeSpecBuilder":
        self.superinterfaces.append(TypeName.get(type_name))
        return self

    def add_enum_constant(self, name: str, format_string: str = "", *args: Any) -> "TypeSpecBuilder":
        if self.kind is not TypeKind.ENUM:
            raise ValueError(f"{self.name} is not an enum")
        self.enum_constants[check_valid_name(name)] = CodeBlock.of(format_string, *args)
        return self

    def add_field(self, field_spec: FieldSpec) -> "TypeSpecBuilder":
        self.field_specs.append(field_spec)
        return self

    def add_method(self, method_spec: MethodSpec) -> "TypeSpecBuilder":
        self.method_specs.append(method_spec)
        return self

    def add_type(self, type_spec: "TypeSpec") -> "TypeSpecBuilder":
        self.type_specs.append(type_spec)
        return self

    def build(self) -> TypeSpec:
        return TypeSpec(self)
