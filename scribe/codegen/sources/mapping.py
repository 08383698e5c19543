"""
Annotations described as plain mappings, as found in JSON descriptions.

    {
        "type": "com.example.HasDefaults",
        "members": {"o": {"enum": "com.example.Breakfast.PANCAKES"}, "p": 1701},
        "defaults": {"a": 5}
    }

Member values are JSON scalars or lists of them. Strings become string
literals; objects with a single tag select another literal kind:

    {"enum": "pkg.Type.NAME"}    enum constant
    {"class": "pkg.Type"}        class literal
    {"char": "z"}                char literal
    {"long": 8}  {"float": 9.0}  sized numerics
    {"code": "{}"}               raw code, emitted verbatim
    {"type": ..., "members": ...}  nested annotation
"""

from typing import Any, Dict, List

from ...logging_config import get_logger
from ..core.annotation import AnnotationSpec
from ..core.code_block import CodeBlock
from ..core.errors import ScribeError
from ..core.literals import Char, EnumConstant, Float32, Long, TypeLiteral
from ..core.types import ClassName, TypeName
from . import AnnotationSource

logger = get_logger(__name__)

VALUE_TAGS = ("enum", "class", "char", "long", "float", "code")


class MappingValueError(ScribeError, ValueError):
    """Raised when a mapping member value cannot be decoded."""

    def __init__(self, message: str, value: Any):
        super().__init__(message, {"value": value})


def is_annotation_mapping(value: Any) -> bool:
    return isinstance(value, dict) and "type" in value and not (set(value) & set(VALUE_TAGS))


def decode_value(value: Any) -> Any:
    """Decode a JSON member value into a value add_member_for_value understands."""
    if isinstance(value, list):
        return [decode_value(v) for v in value]
    if not isinstance(value, dict):
        return value
    if is_annotation_mapping(value):
        return MappingAnnotationSource().to_annotation_spec(value)
    if len(value) != 1:
        raise MappingValueError(f"expected exactly one tag out of {', '.join(VALUE_TAGS)}", value)

    tag, payload = next(iter(value.items()))
    if tag == "enum":
        class_part, _, constant = str(payload).rpartition(".")
        if not class_part:
            raise MappingValueError("enum constant must be qualified: pkg.Type.NAME", value)
        return EnumConstant(ClassName.best_guess(class_part), constant)
    if tag == "class":
        return TypeLiteral(TypeName.get(payload))
    if tag == "char":
        return Char(payload)
    if tag == "long":
        return Long(payload)
    if tag == "float":
        return Float32(payload)
    if tag == "code":
        return CodeBlock.of("$L", str(payload))
    raise MappingValueError(f"unknown value tag: {tag}", value)


class MappingAnnotationSource(AnnotationSource):
    """
    Adapter for `{"type": ..., "members": {...}}` mappings.

    Members are emitted in mapping order. With defaults, entries of the
    optional "defaults" mapping that were not given explicitly follow.
    """

    kind = "mapping"
    description = "JSON-style mappings with a type and member values"

    @classmethod
    def accepts(cls, value: Any) -> bool:
        return is_annotation_mapping(value)

    def to_annotation_spec(self, value: Dict[str, Any], include_defaults: bool = False) -> AnnotationSpec:
        builder = AnnotationSpec.builder(value["type"])
        members: Dict[str, Any] = dict(value.get("members") or {})
        if include_defaults:
            for name, default in (value.get("defaults") or {}).items():
                members.setdefault(name, default)

        for name, member_value in members.items():
            builder.add_member_for_value(name, decode_value(member_value))

        logger.debug(f"Converted mapping for {value['type']} with {len(members)} members")
        return builder.build()


def annotations_from_mappings(values: List[Dict[str, Any]]) -> List[AnnotationSpec]:
    """Convert a list of annotation mappings, preserving order."""
    source = MappingAnnotationSource()
    return [source.to_annotation_spec(value) for value in values]
