"""
Scribe code generation module.

Builds Java source files from specs or from JSON declaration descriptions.
"""

from .registry import (
    AnnotationSourceRegistry,
    RegistryError,
    get_source_registry,
    list_source_kinds,
    list_all_source_info,
    register_source,
)
from .core import (
    AnnotationSpec,
    ClassName,
    CodeBlock,
    EmissionDriver,
    EmitterConfig,
    FieldSpec,
    GenerationResult,
    GeneratorError,
    JavaFile,
    MethodSpec,
    Modifier,
    TypeSpec,
    convert_description,
    generate_code,
    load_config,
)
from .sources import AnnotationSource
from .sources.declared import AnnotationInstance, AnnotationMember, AnnotationType


def emit_from_description(description, config=None, package_name=None) -> GenerationResult:
    """
    Emit a Java file from a parsed JSON declaration description.

    Args:
        description: Description dict (see core.schema)
        config: EmitterConfig, dict of overrides, or path to a JSON config file
        package_name: Overrides the package named in the description

    Returns:
        GenerationResult with the file text
    """
    if isinstance(config, EmitterConfig):
        final_config = config
    elif isinstance(config, dict):
        final_config = load_config(custom_config=config)
    elif config is not None:
        final_config = load_config(config_file=config)
    else:
        final_config = load_config()

    if package_name is None and final_config.package_name:
        package_name = final_config.package_name
    java_file = convert_description(description, package_name)
    return generate_code(java_file, final_config)


__all__ = [
    "AnnotationSource",
    "AnnotationSourceRegistry",
    "AnnotationInstance",
    "AnnotationMember",
    "AnnotationType",
    "RegistryError",
    "get_source_registry",
    "list_source_kinds",
    "list_all_source_info",
    "register_source",
    "AnnotationSpec",
    "ClassName",
    "CodeBlock",
    "EmissionDriver",
    "EmitterConfig",
    "FieldSpec",
    "GenerationResult",
    "GeneratorError",
    "JavaFile",
    "MethodSpec",
    "Modifier",
    "TypeSpec",
    "convert_description",
    "emit_from_description",
    "generate_code",
    "load_config",
]
