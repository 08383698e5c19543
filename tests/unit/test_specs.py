"""
Unit tests for declaration specs.

Verifies:
1. Member ordering and layout of classes, interfaces, enums and annotation types.
2. Implicit modifiers, parameters, exceptions and javadoc.
3. Builder validation.
"""

import pytest

from scribe.codegen.core.errors import InvalidNameError
from scribe.codegen.core.java_file import JavaFile
from scribe.codegen.core.specs import (
    FieldSpec,
    MethodSpec,
    Modifier,
    ParameterSpec,
    TypeSpec,
)


def test_class_layout_with_imports():
    """Static fields, fields, constructors and methods appear in that order."""
    taco = (
        TypeSpec.class_builder("Taco")
        .add_modifiers(Modifier.FINAL, Modifier.PUBLIC)
        .superclass("com.a.Food")
        .add_superinterface("java.io.Serializable")
        .add_method(
            MethodSpec.method_builder("eat")
            .add_modifiers(Modifier.PUBLIC)
            .returns("boolean")
            .add_parameter("int", "bites")
            .add_exception("java.io.IOException")
            .add_statement("return bites > $L", 0)
            .build()
        )
        .add_field(FieldSpec.builder("java.lang.String", "name", Modifier.PRIVATE).build())
        .add_field(
            FieldSpec.builder("int", "SIZE", Modifier.PRIVATE, Modifier.STATIC, Modifier.FINAL)
            .initializer("$L", 3)
            .build()
        )
        .add_method(
            MethodSpec.constructor_builder()
            .add_modifiers(Modifier.PUBLIC)
            .add_parameter("java.lang.String", "name")
            .add_statement("this.$N = $N", "name", "name")
            .build()
        )
        .build()
    )
    assert str(JavaFile.builder("com.squareup.tacos", taco).build()) == (
        "package com.squareup.tacos;\n"
        "\n"
        "import com.a.Food;\n"
        "import java.io.IOException;\n"
        "import java.io.Serializable;\n"
        "\n"
        "public final class Taco extends Food implements Serializable {\n"
        "  private static final int SIZE = 3;\n"
        "\n"
        "  private String name;\n"
        "\n"
        "  public Taco(String name) {\n"
        "    this.name = name;\n"
        "  }\n"
        "\n"
        "  public boolean eat(int bites) throws IOException {\n"
        "    return bites > 0;\n"
        "  }\n"
        "}\n"
    )


def test_interface_members_drop_implicit_modifiers():
    menu = (
        TypeSpec.interface_builder("Menu")
        .add_field(
            FieldSpec.builder("int", "MAX", Modifier.PUBLIC, Modifier.STATIC, Modifier.FINAL)
            .initializer("$L", 10)
            .build()
        )
        .add_method(
            MethodSpec.method_builder("price")
            .add_modifiers(Modifier.PUBLIC, Modifier.ABSTRACT)
            .returns("int")
            .build()
        )
        .build()
    )
    assert str(menu) == "interface Menu {\n  int MAX = 10;\n\n  int price();\n}\n"


def test_enum_constants():
    breakfast = (
        TypeSpec.enum_builder("Breakfast")
        .add_enum_constant("WAFFLES")
        .add_enum_constant("PANCAKES", "$S", "syrup")
        .build()
    )
    assert str(breakfast) == 'enum Breakfast {\n  WAFFLES,\n\n  PANCAKES("syrup")\n}\n'


def test_enum_constants_before_body_members():
    breakfast = (
        TypeSpec.enum_builder("Breakfast")
        .add_enum_constant("WAFFLES")
        .add_field(FieldSpec.builder("int", "calories", Modifier.PRIVATE).build())
        .build()
    )
    assert str(breakfast) == "enum Breakfast {\n  WAFFLES;\n\n  private int calories;\n}\n"


def test_annotation_type_with_default():
    tasty = (
        TypeSpec.annotation_builder("Tasty")
        .add_modifiers(Modifier.PUBLIC)
        .add_method(
            MethodSpec.method_builder("value")
            .add_modifiers(Modifier.PUBLIC, Modifier.ABSTRACT)
            .returns("int")
            .default_value("$L", 5)
            .build()
        )
        .build()
    )
    assert str(tasty) == "public @interface Tasty {\n  int value() default 5;\n}\n"


def test_parameters_annotations_and_varargs():
    nullable = ParameterSpec.builder("java.lang.String", "sauce", Modifier.FINAL).add_annotation(
        "javax.annotation.Nullable"
    ).build()
    eat = (
        MethodSpec.method_builder("eat")
        .add_annotation("java.lang.Override")
        .add_parameter(nullable)
        .add_parameter("java.lang.String[]", "toppings")
        .set_varargs()
        .build()
    )
    taco = TypeSpec.class_builder("Taco").add_method(eat).build()
    assert str(taco) == (
        "class Taco {\n"
        "  @java.lang.Override\n"
        "  void eat(@javax.annotation.Nullable final java.lang.String sauce, java.lang.String... toppings) {\n"
        "  }\n"
        "}\n"
    )


def test_javadoc_comments_and_control_flow():
    method = (
        MethodSpec.method_builder("count")
        .add_javadoc("Counts to $L.\n", 3)
        .add_comment("start at $L", 0)
        .begin_control_flow("for (int i = 0; i < $L; i++)", 3)
        .add_statement("$T.out.println(i)", "java.lang.System")
        .end_control_flow()
        .build()
    )
    taco = TypeSpec.class_builder("Taco").add_method(method).build()
    text = str(JavaFile.builder("com.squareup.tacos", taco).build())
    assert text == (
        "package com.squareup.tacos;\n"
        "\n"
        "class Taco {\n"
        "  /**\n"
        "   * Counts to 3.\n"
        "   */\n"
        "  void count() {\n"
        "    // start at 0\n"
        "    for (int i = 0; i < 3; i++) {\n"
        "      System.out.println(i);\n"
        "    }\n"
        "  }\n"
        "}\n"
    )


def test_named_code_in_method():
    method = (
        MethodSpec.method_builder("serve")
        .add_named_code("$dish:L();\n", {"dish": "taco"})
        .build()
    )
    assert "    taco();\n" in str(TypeSpec.class_builder("Taco").add_method(method).build())


def test_nested_interface_is_implicitly_static():
    inner = TypeSpec.interface_builder("Filling").add_modifiers(Modifier.STATIC).build()
    outer = TypeSpec.class_builder("Taco").add_type(inner).build()
    assert str(outer) == "class Taco {\n  interface Filling {\n  }\n}\n"


def test_builder_validation():
    with pytest.raises(ValueError):
        MethodSpec.method_builder("eat").add_parameter("int", "n").set_varargs().build()
    with pytest.raises(ValueError):
        MethodSpec.method_builder("eat").add_modifiers(Modifier.ABSTRACT).add_statement("x()").build()
    with pytest.raises(ValueError):
        MethodSpec.constructor_builder().returns("int")
    with pytest.raises(ValueError):
        TypeSpec.enum_builder("Empty").build()
    with pytest.raises(ValueError):
        TypeSpec.interface_builder("Menu").superclass("com.a.Food")
    with pytest.raises(ValueError):
        TypeSpec.class_builder("Taco").add_enum_constant("A")
    with pytest.raises(ValueError):
        ParameterSpec.builder("int", "n", Modifier.PUBLIC)
    with pytest.raises(ValueError):
        FieldSpec.builder("int", "n").initializer("1").initializer("2")
    with pytest.raises(InvalidNameError):
        TypeSpec.class_builder("class")
    with pytest.raises(InvalidNameError):
        FieldSpec.builder("int", "1st")
