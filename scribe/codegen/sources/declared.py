"""
Annotations declared in Python.

An AnnotationType mirrors a Java `@interface`: a class name plus ordered
member declarations, each with an optional default. Calling it with
keyword arguments produces an AnnotationInstance, the Python counterpart
of an annotation applied to some element.

    HasDefaults = AnnotationType(
        ClassName.get("com.example", "HasDefaults"),
        [AnnotationMember("a", 5), AnnotationMember("o")],
    )
    spec = AnnotationSpec.get(HasDefaults(o=Breakfast.PANCAKES))
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ...logging_config import get_logger
from ..core.annotation import AnnotationSpec
from ..core.naming import check_valid_name
from ..core.types import ClassName, TypeName
from . import AnnotationSource

logger = get_logger(__name__)


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT = _NoDefault()


@dataclass(frozen=True)
class AnnotationMember:
    """One member declaration of an annotation type."""

    name: str
    default: Any = NO_DEFAULT

    def __post_init__(self):
        check_valid_name(self.name)

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True)
class AnnotationType:
    """An annotation type declaration with ordered members."""

    class_name: ClassName
    members: Tuple[AnnotationMember, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "class_name", TypeName.get(self.class_name))
        object.__setattr__(self, "members", tuple(self.members))

    def member(self, name: str) -> AnnotationMember:
        for member in self.members:
            if member.name == name:
                return member
        raise ValueError(f"{self.class_name} has no member named {name}")

    def __call__(self, **values: Any) -> "AnnotationInstance":
        return AnnotationInstance(self, values)


@dataclass(frozen=True)
class AnnotationInstance:
    """An application of an AnnotationType with its explicit member values."""

    annotation_type: AnnotationType
    values: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        for name in self.values:
            self.annotation_type.member(name)
        for member in self.annotation_type.members:
            if not member.has_default and member.name not in self.values:
                raise ValueError(
                    f"{self.annotation_type.class_name} requires a value for {member.name}"
                )

    def value_of(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        return self.annotation_type.member(name).default


def _comparable(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_comparable(v) for v in value)
    if isinstance(value, tuple):
        return tuple(_comparable(v) for v in value)
    return value


def _member_value(value: Any) -> Any:
    """Convert nested instances to specs; other values pass through."""
    if isinstance(value, AnnotationInstance):
        return DeclaredAnnotationSource().to_annotation_spec(value)
    if isinstance(value, (list, tuple)):
        return [_member_value(v) for v in value]
    return value


class DeclaredAnnotationSource(AnnotationSource):
    """
    Adapter for AnnotationInstance values.

    Without defaults only members whose value differs from the declared
    default are emitted, sorted by name. With defaults every member is
    emitted in declaration order, explicit values taking precedence.
    """

    kind = "declared"
    description = "Annotation instances declared with AnnotationType"

    @classmethod
    def accepts(cls, value: Any) -> bool:
        return isinstance(value, AnnotationInstance)

    def to_annotation_spec(self, value: AnnotationInstance, include_defaults: bool = False) -> AnnotationSpec:
        annotation_type = value.annotation_type
        builder = AnnotationSpec.builder(annotation_type.class_name)

        if include_defaults:
            names: List[str] = [member.name for member in annotation_type.members]
        else:
            names = sorted(
                member.name
                for member in annotation_type.members
                if member.name in value.values
                and not (
                    member.has_default
                    and _comparable(value.values[member.name]) == _comparable(member.default)
                )
            )

        for name in names:
            builder.add_member_for_value(name, _member_value(value.value_of(name)))

        logger.debug(
            f"Converted {annotation_type.class_name.simple_name} with {len(names)} members "
            f"(include_defaults={include_defaults})"
        )
        return builder.build()
