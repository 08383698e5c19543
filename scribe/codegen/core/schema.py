"""
Declaration descriptions.

Converts a JSON description of a Java file into specs the emission
driver can work with. The description mirrors the spec builders:

    {
      "package": "com.example.tacos",
      "file_comment": "Generated, do not edit.",
      "static_imports": ["java.util.concurrent.TimeUnit.SECONDS"],
      "type": {
        "kind": "class",
        "name": "Taco",
        "modifiers": ["public", "final"],
        "annotations": [{"type": "java.lang.Deprecated"}],
        "fields": [{"type": "java.util.List<java.lang.String>", "name": "toppings"}],
        "methods": [{"name": "size", "returns": "int", "statements": ["return toppings.size()"]}],
        "types": []
      }
    }

Type strings accept primitives, dotted class names, arrays (`int[]`),
type arguments (`java.util.Map<java.lang.String, ?>`) and wildcards
(`? extends java.lang.Number`).
"""

from typing import Any, Dict, List, Optional, Tuple

from ...logging_config import get_logger
from ..sources.mapping import MappingAnnotationSource
from .errors import ScribeError
from .java_file import JavaFile
from .specs import FieldSpec, MethodSpec, Modifier, ParameterSpec, TypeSpec, TypeSpecBuilder
from .types import ArrayTypeName, ParameterizedTypeName, TypeName, WildcardTypeName

logger = get_logger(__name__)

TYPE_KINDS = {
    "class": TypeSpec.class_builder,
    "interface": TypeSpec.interface_builder,
    "enum": TypeSpec.enum_builder,
    "annotation": TypeSpec.annotation_builder,
}


class DescriptionError(ScribeError):
    """Raised when a declaration description is malformed."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message, {"path": path} if path else None)
        self.path = path


def parse_type(text: str) -> TypeName:
    """
    Parse a Java type expression into a TypeName.

    Raises:
        DescriptionError: For unbalanced brackets or empty type text
    """
    type_name, rest = _parse_type(text.strip(), text)
    if rest.strip():
        raise DescriptionError(f"unexpected text after type: {rest.strip()!r}", text)
    return type_name


def _parse_type(text: str, original: str) -> Tuple[TypeName, str]:
    text = text.lstrip()
    if text.startswith("?"):
        rest = text[1:].lstrip()
        for keyword, factory in (("extends", WildcardTypeName.subtype_of), ("super", WildcardTypeName.supertype_of)):
            if rest.startswith(keyword + " "):
                bound, rest = _parse_type(rest[len(keyword):], original)
                return factory(bound), rest
        return WildcardTypeName(), rest

    end = 0
    while end < len(text) and (text[end].isalnum() or text[end] in "._$"):
        end += 1
    raw = text[:end]
    if not raw:
        raise DescriptionError("missing type name", original)
    rest = text[end:].lstrip()

    type_name: TypeName
    if rest.startswith("<"):
        arguments: List[TypeName] = []
        rest = rest[1:]
        while True:
            argument, rest = _parse_type(rest, original)
            arguments.append(argument)
            rest = rest.lstrip()
            if rest.startswith(","):
                rest = rest[1:]
                continue
            if rest.startswith(">"):
                rest = rest[1:]
                break
            raise DescriptionError("unbalanced type arguments", original)
        type_name = ParameterizedTypeName(TypeName.get(raw), *arguments)
    else:
        type_name = TypeName.get(raw)

    rest = rest.lstrip()
    while rest.startswith("[]"):
        type_name = ArrayTypeName(type_name)
        rest = rest[2:].lstrip()
    return type_name, rest


def _modifiers(values: List[str], path: str) -> List[Modifier]:
    try:
        return [Modifier(value) for value in values]
    except ValueError as e:
        raise DescriptionError(f"unknown modifier: {e}", path) from e


def _annotations(values: List[Dict[str, Any]], path: str):
    source = MappingAnnotationSource()
    specs = []
    for index, value in enumerate(values):
        if not source.accepts(value):
            raise DescriptionError("annotation needs a 'type'", f"{path}.annotations[{index}]")
        specs.append(source.to_annotation_spec(value))
    return specs


def _require(node: Dict[str, Any], key: str, path: str) -> Any:
    if key not in node:
        raise DescriptionError(f"missing required key '{key}'", path)
    return node[key]


def convert_field(node: Dict[str, Any], path: str) -> FieldSpec:
    builder = FieldSpec.builder(
        parse_type(_require(node, "type", path)),
        _require(node, "name", path),
        *_modifiers(node.get("modifiers", []), path),
    )
    for annotation in _annotations(node.get("annotations", []), path):
        builder.add_annotation(annotation)
    if node.get("javadoc"):
        builder.add_javadoc("$L\n", node["javadoc"])
    if "initializer" in node:
        builder.initializer("$L", str(node["initializer"]))
    return builder.build()


def convert_parameter(node: Dict[str, Any], path: str) -> ParameterSpec:
    builder = ParameterSpec.builder(
        parse_type(_require(node, "type", path)),
        _require(node, "name", path),
        *_modifiers(node.get("modifiers", []), path),
    )
    for annotation in _annotations(node.get("annotations", []), path):
        builder.add_annotation(annotation)
    return builder.build()


def convert_method(node: Dict[str, Any], path: str) -> MethodSpec:
    if node.get("constructor"):
        builder = MethodSpec.constructor_builder()
    else:
        builder = MethodSpec.method_builder(_require(node, "name", path))
        if "returns" in node:
            builder.returns(parse_type(node["returns"]))

    builder.add_modifiers(*_modifiers(node.get("modifiers", []), path))
    for annotation in _annotations(node.get("annotations", []), path):
        builder.add_annotation(annotation)
    if node.get("javadoc"):
        builder.add_javadoc("$L\n", node["javadoc"])
    for index, parameter in enumerate(node.get("parameters", [])):
        builder.add_parameter(convert_parameter(parameter, f"{path}.parameters[{index}]"))
    if node.get("varargs"):
        builder.set_varargs()
    for exception in node.get("exceptions", []):
        builder.add_exception(parse_type(exception))
    for statement in node.get("statements", []):
        builder.add_statement("$L", statement)
    if node.get("code"):
        code = node["code"]
        builder.add_code("$L", code if code.endswith("\n") else code + "\n")
    if "default" in node:
        builder.default_value("$L", str(node["default"]))
    return builder.build()


def convert_type(node: Dict[str, Any], path: str = "type") -> TypeSpec:
    """Convert a type description, including nested types, into a TypeSpec."""
    kind = node.get("kind", "class")
    if kind not in TYPE_KINDS:
        raise DescriptionError(f"unknown type kind: {kind}", path)
    builder: TypeSpecBuilder = TYPE_KINDS[kind](_require(node, "name", path))

    builder.add_modifiers(*_modifiers(node.get("modifiers", []), path))
    for annotation in _annotations(node.get("annotations", []), path):
        builder.add_annotation(annotation)
    if node.get("javadoc"):
        builder.add_javadoc("$L\n", node["javadoc"])
    if node.get("superclass"):
        builder.superclass(parse_type(node["superclass"]))
    for interface in node.get("superinterfaces", []):
        builder.add_superinterface(parse_type(interface))

    constants = node.get("enum_constants", [])
    if isinstance(constants, dict):
        for name, arguments in constants.items():
            if arguments:
                builder.add_enum_constant(name, "$L", str(arguments))
            else:
                builder.add_enum_constant(name)
    else:
        for name in constants:
            builder.add_enum_constant(name)

    for index, field_node in enumerate(node.get("fields", [])):
        builder.add_field(convert_field(field_node, f"{path}.fields[{index}]"))
    for index, method_node in enumerate(node.get("methods", [])):
        builder.add_method(convert_method(method_node, f"{path}.methods[{index}]"))
    for index, type_node in enumerate(node.get("types", [])):
        builder.add_type(convert_type(type_node, f"{path}.types[{index}]"))
    return builder.build()


def convert_description(description: Dict[str, Any], package_name: Optional[str] = None) -> JavaFile:
    """
    Convert a file description into a JavaFile.

    Args:
        description: Parsed JSON description
        package_name: Overrides the description's "package"

    Returns:
        JavaFile ready for emission

    Raises:
        DescriptionError: If the description is malformed
    """
    if not isinstance(description, dict):
        raise DescriptionError("description must be a JSON object")

    type_spec = convert_type(_require(description, "type", "$"))
    package = package_name if package_name is not None else description.get("package", "")
    builder = JavaFile.builder(package, type_spec)

    if description.get("file_comment"):
        builder.add_file_comment("$L", description["file_comment"])
    for index, member in enumerate(description.get("static_imports", [])):
        class_part, _, name = member.rpartition(".")
        if not class_part:
            raise DescriptionError("static import must be pkg.Type.member", f"static_imports[{index}]")
        builder.add_static_import(class_part, name)
    if "skip_java_lang_imports" in description:
        builder.skip_java_lang_imports(bool(description["skip_java_lang_imports"]))

    logger.debug(f"Converted description for {package or '<default>'}.{type_spec.name}")
    return builder.build()
