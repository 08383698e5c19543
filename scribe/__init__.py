"""
scribe: build Java source files from composable specs.

    from scribe import AnnotationSpec, JavaFile, TypeSpec

    taco = TypeSpec.class_builder("Taco").add_annotation(
        AnnotationSpec.builder("java.lang.SuppressWarnings").add_member("value", "$S", "unused").build()
    ).build()
    print(JavaFile.builder("com.example.tacos", taco).build())
"""

from .codegen.core import (
    AnnotationSpec,
    ArrayTypeName,
    Char,
    ClassName,
    CodeBlock,
    EmissionDriver,
    EmitterConfig,
    EnumConstant,
    FieldSpec,
    Float32,
    ImportPlan,
    ImportResolver,
    JavaFile,
    Long,
    MethodSpec,
    Modifier,
    ParameterSpec,
    ParameterizedTypeName,
    ScribeError,
    TypeLiteral,
    TypeName,
    TypeSpec,
    WildcardTypeName,
)
from .codegen import (
    AnnotationInstance,
    AnnotationMember,
    AnnotationType,
    emit_from_description,
)

__version__ = "0.1.0"

__all__ = [
    "AnnotationSpec",
    "ArrayTypeName",
    "Char",
    "ClassName",
    "CodeBlock",
    "EmissionDriver",
    "EmitterConfig",
    "EnumConstant",
    "FieldSpec",
    "Float32",
    "ImportPlan",
    "ImportResolver",
    "JavaFile",
    "Long",
    "MethodSpec",
    "Modifier",
    "ParameterSpec",
    "ParameterizedTypeName",
    "ScribeError",
    "TypeLiteral",
    "TypeName",
    "TypeSpec",
    "WildcardTypeName",
    "AnnotationInstance",
    "AnnotationMember",
    "AnnotationType",
    "emit_from_description",
]
