"""
End-to-end tests for complete Java files.

Verifies:
1. Annotated declarations render with resolved imports.
2. Declared and mapping annotation sources produce the expected files.
3. File envelope options (comment, static imports, indent) and writing to disk.
"""

import pytest

from conftest import BREAKFAST, POET_PACKAGE, Breakfast
from scribe import AnnotationSpec, CodeBlock, FieldSpec, JavaFile, TypeSpec

pytestmark = pytest.mark.integration

HAS_DEFAULTS_USAGE = (
    "@AnnotationSpecTest.HasDefaultsAnnotation("
    "o = AnnotationSpecTest.Breakfast.PANCAKES, p = 1701, f = 11.1, m = {9, 8, 1}, "
    "l = Override.class, j = @AnnotationSpecTest.AnnotationA, "
    'q = @AnnotationSpecTest.AnnotationC("bar"), r = {Float.class, Double.class})'
)


def annotated(name, annotation):
    return TypeSpec.class_builder(name).add_annotation(annotation).build()


def test_mapping_annotation_with_java_lang_imports(has_defaults_mapping):
    taco = annotated("Taco", AnnotationSpec.get(has_defaults_mapping))
    java_file = JavaFile.builder("com.squareup.tacos", taco).skip_java_lang_imports(False).build()
    assert str(java_file) == (
        "package com.squareup.tacos;\n"
        "\n"
        "import eu.xenit.contentcloud.scribe.poet.AnnotationSpecTest;\n"
        "import java.lang.Double;\n"
        "import java.lang.Float;\n"
        "import java.lang.Override;\n"
        "\n"
        f"{HAS_DEFAULTS_USAGE}\n"
        "class Taco {\n"
        "}\n"
    )


def test_mapping_annotation_skips_java_lang_by_default(has_defaults_mapping):
    taco = annotated("Taco", AnnotationSpec.get(has_defaults_mapping))
    assert str(JavaFile.builder("com.squareup.tacos", taco).build()) == (
        "package com.squareup.tacos;\n"
        "\n"
        "import eu.xenit.contentcloud.scribe.poet.AnnotationSpecTest;\n"
        "\n"
        f"{HAS_DEFAULTS_USAGE}\n"
        "class Taco {\n"
        "}\n"
    )


def test_declared_annotation_in_same_package(has_defaults_instance):
    """Same-package types need no import and keep their enclosing names."""
    is_annotated = annotated("IsAnnotated", AnnotationSpec.get(has_defaults_instance))
    assert str(JavaFile.builder(POET_PACKAGE, is_annotated).build()) == (
        f"package {POET_PACKAGE};\n"
        "\n"
        "@AnnotationSpecTest.HasDefaultsAnnotation("
        "f = 11.1, l = Override.class, m = {9, 8, 1}, o = AnnotationSpecTest.Breakfast.PANCAKES, "
        'p = 1701, q = @AnnotationSpecTest.AnnotationC("bar"), r = {Float.class, Double.class})\n'
        "class IsAnnotated {\n"
        "}\n"
    )


def test_declared_annotation_with_defaults(has_defaults_instance):
    is_annotated = annotated(
        "IsAnnotated", AnnotationSpec.get(has_defaults_instance, include_defaults=True)
    )
    text = str(JavaFile.builder(POET_PACKAGE, is_annotated).build())
    assert text == (
        f"package {POET_PACKAGE};\n"
        "\n"
        "@AnnotationSpecTest.HasDefaultsAnnotation("
        "a = 5, b = 6, c = 7, d = 8, e = 9.0f, f = 11.1, "
        "g = {'\\u0000', '쫾', 'z', '€', 'ℕ', '\"', '\\'', '\\t', '\\n'}, h = true, "
        "i = AnnotationSpecTest.Breakfast.WAFFLES, j = @AnnotationSpecTest.AnnotationA, "
        'k = "maple", l = Override.class, m = {9, 8, 1}, '
        "n = {AnnotationSpecTest.Breakfast.WAFFLES, AnnotationSpecTest.Breakfast.PANCAKES}, "
        "o = AnnotationSpecTest.Breakfast.PANCAKES, p = 1701, "
        'q = @AnnotationSpecTest.AnnotationC("bar"), r = {Float.class, Double.class})\n'
        "class IsAnnotated {\n"
        "}\n"
    )


def test_static_import_of_enum_constant():
    taco = (
        TypeSpec.class_builder("Taco")
        .add_field(FieldSpec.builder(BREAKFAST, "favorite").initializer("$L", Breakfast.WAFFLES).build())
        .build()
    )
    java_file = JavaFile.builder("com.squareup.tacos", taco).add_static_import(Breakfast.WAFFLES).build()
    assert java_file.static_imports == (f"{BREAKFAST.canonical()}.WAFFLES",)
    assert str(java_file) == (
        "package com.squareup.tacos;\n"
        "\n"
        "import eu.xenit.contentcloud.scribe.poet.AnnotationSpecTest;\n"
        "\n"
        "import static eu.xenit.contentcloud.scribe.poet.AnnotationSpecTest.Breakfast.WAFFLES;\n"
        "\n"
        "class Taco {\n"
        "  AnnotationSpecTest.Breakfast favorite = WAFFLES;\n"
        "}\n"
    )


def test_file_comment_and_indent():
    taco = TypeSpec.class_builder("Taco").add_field(FieldSpec.builder("int", "size").build()).build()
    java_file = (
        JavaFile.builder("com.squareup.tacos", taco)
        .add_file_comment("Generated by $L.\n", "scribe")
        .add_file_comment("\nDo not edit.")
        .indent("    ")
        .build()
    )
    assert str(java_file) == (
        "// Generated by scribe.\n"
        "//\n"
        "// Do not edit.\n"
        "package com.squareup.tacos;\n"
        "\n"
        "class Taco {\n"
        "    int size;\n"
        "}\n"
    )


def test_to_builder_keeps_envelope():
    taco = TypeSpec.class_builder("Taco").build()
    original = (
        JavaFile.builder("com.squareup.tacos", taco)
        .add_file_comment("Generated.")
        .add_static_import("java.util.concurrent.TimeUnit", "SECONDS")
        .build()
    )
    copy = original.to_builder().skip_java_lang_imports(False).build()
    assert copy.file_comment == original.file_comment
    assert copy.static_imports == original.static_imports
    assert copy.skip_java_lang_imports is False
    assert original.skip_java_lang_imports is None


def test_add_static_import_validation():
    builder = JavaFile.builder("com.squareup.tacos", TypeSpec.class_builder("Taco").build())
    with pytest.raises(ValueError):
        builder.add_static_import("java.util.concurrent.TimeUnit")
    with pytest.raises(ValueError):
        builder.add_static_import("int", "MAX_VALUE")


def test_write_to_creates_package_directories(tmp_path):
    taco = TypeSpec.class_builder("Taco").build()
    java_file = JavaFile.builder("com.squareup.tacos", taco).build()
    path = java_file.write_to(tmp_path)
    assert path == tmp_path / "com" / "squareup" / "tacos" / "Taco.java"
    assert path.read_text(encoding="utf-8") == str(java_file)


def test_default_package_path():
    java_file = JavaFile.builder("", TypeSpec.class_builder("Taco").build()).build()
    assert str(java_file.relative_path()) == "Taco.java"
    assert str(java_file) == "class Taco {\n}\n"


def test_file_comment_block_is_code_block():
    java_file = (
        JavaFile.builder("com.squareup.tacos", TypeSpec.class_builder("Taco").build())
        .add_file_comment("Generated.")
        .build()
    )
    assert java_file.file_comment == CodeBlock.of("Generated.")
