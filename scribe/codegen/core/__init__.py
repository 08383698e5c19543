"""
Core emission components.

Provides the template engine, type references, specs, import resolution
and the emission driver.
"""

from .errors import (
    ScribeError,
    FormatArityError,
    UnknownPlaceholderError,
    InvalidArgumentError,
    UnsupportedValueKindError,
    NullMemberNameError,
    InvalidNameError,
    InvalidMemberNameError,
)
from .types import (
    TypeName,
    ClassName,
    ArrayTypeName,
    ParameterizedTypeName,
    WildcardTypeName,
    PrimitiveTypeName,
    VOID,
    BOOLEAN,
    BYTE,
    SHORT,
    INT,
    LONG,
    CHAR,
    FLOAT,
    DOUBLE,
    OBJECT,
    STRING,
)
from .literals import Long, Float32, Char, EnumConstant, TypeLiteral, format_literal
from .code_block import CodeBlock, CodeBlockBuilder
from .code_writer import CodeWriter
from .annotation import AnnotationSpec, AnnotationSpecBuilder
from .specs import Modifier, ParameterSpec, FieldSpec, MethodSpec, TypeSpec, TypeKind
from .imports import ImportPlan, ImportResolver
from .config import EmitterConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine
from .generator import EmissionDriver, GeneratorError, GenerationResult, generate_code
from .java_file import JavaFile
from .schema import DescriptionError, convert_description, parse_type

__all__ = [
    # Errors
    "ScribeError",
    "FormatArityError",
    "UnknownPlaceholderError",
    "InvalidArgumentError",
    "UnsupportedValueKindError",
    "NullMemberNameError",
    "InvalidNameError",
    "InvalidMemberNameError",
    # Type references
    "TypeName",
    "ClassName",
    "ArrayTypeName",
    "ParameterizedTypeName",
    "WildcardTypeName",
    "PrimitiveTypeName",
    "VOID",
    "BOOLEAN",
    "BYTE",
    "SHORT",
    "INT",
    "LONG",
    "CHAR",
    "FLOAT",
    "DOUBLE",
    "OBJECT",
    "STRING",
    # Literals
    "Long",
    "Float32",
    "Char",
    "EnumConstant",
    "TypeLiteral",
    "format_literal",
    # Templates and specs
    "CodeBlock",
    "CodeBlockBuilder",
    "CodeWriter",
    "AnnotationSpec",
    "AnnotationSpecBuilder",
    "Modifier",
    "ParameterSpec",
    "FieldSpec",
    "MethodSpec",
    "TypeSpec",
    "TypeKind",
    # Import resolution and emission
    "ImportPlan",
    "ImportResolver",
    "EmissionDriver",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    "JavaFile",
    # Configuration system
    "EmitterConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Descriptions
    "DescriptionError",
    "convert_description",
    "parse_type",
]
